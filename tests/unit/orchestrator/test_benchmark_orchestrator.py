# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for BenchmarkOrchestrator."""

import asyncio
import random

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from querybench.common.config import BenchmarkConfig
from querybench.common.enums import AccessType, BenchmarkState, DispatchMode, ErrorKind, Region
from querybench.common.exceptions import BenchmarkAbortedError, BenchmarkInProgressError
from querybench.measurement import MeasurementResult
from querybench.orchestrator.orchestrator import BenchmarkOrchestrator
from querybench.orchestrator.strategies import ConcurrentDispatch
from querybench.registry import EndpointDescriptor, EndpointRegistry


class RecordingMeasurer:
    """Fake measurer that records call order and returns canned results."""

    def __init__(self, results: dict[str, MeasurementResult] | None = None):
        self.calls: list[str] = []
        self._results = results or {}

    async def __call__(self, url: str) -> MeasurementResult:
        endpoint_id = url.rsplit("/", 1)[-1]
        self.calls.append(endpoint_id)
        await asyncio.sleep(0)
        return self._results.get(
            endpoint_id,
            MeasurementResult(
                client_time_ms=float(len(self.calls)), server_time_ms=1.0, reported_binding="DB"
            ),
        )


class FakeSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class TestBenchmarkOrchestratorExecute:
    @pytest.mark.asyncio
    async def test_runs_every_endpoint_once_per_round(self, config, registry):
        measurer = RecordingMeasurer()
        orchestrator = BenchmarkOrchestrator(config, registry, measurer=measurer, sleep=FakeSleep())

        session = await orchestrator.execute()

        assert session.state == BenchmarkState.COMPLETED
        assert [run.run_id for run in session.runs] == [1, 2, 3]
        assert len(measurer.calls) == 9
        for i in range(3):
            assert sorted(measurer.calls[i * 3 : i * 3 + 3]) == ["a", "b", "c"]
        for run in session.runs:
            assert run.is_complete
            assert set(run.results) == {"a", "b", "c"}
        assert session.started_at is not None
        assert session.finished_at >= session.started_at
        assert not orchestrator.is_running

    @pytest.mark.asyncio
    async def test_aggregate_excludes_warmup(self, config, registry):
        orchestrator = BenchmarkOrchestrator(
            config, registry, measurer=RecordingMeasurer(), sleep=FakeSleep()
        )
        session = await orchestrator.execute()

        aggregate = session.aggregate
        assert aggregate.complete is True
        assert aggregate.metadata["relevant_run_ids"] == [2, 3]
        assert aggregate.metadata["dispatch_mode"] == "serial"
        assert all(stat.client_samples == 2 for stat in aggregate.stats.values())

    @pytest.mark.asyncio
    async def test_sleeps_between_rounds_only(self, config, registry):
        config.inter_round_delay_seconds = 0.25
        sleep = FakeSleep()
        orchestrator = BenchmarkOrchestrator(
            config, registry, measurer=RecordingMeasurer(), sleep=sleep
        )

        await orchestrator.execute()

        assert sleep.delays == [0.25, 0.25]

    @pytest.mark.asyncio
    async def test_zero_delay_does_not_sleep(self, config, registry):
        sleep = FakeSleep()
        await BenchmarkOrchestrator(
            config, registry, measurer=RecordingMeasurer(), sleep=sleep
        ).execute()
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_seeded_shuffle_is_reproducible(self, config, registry):
        first, second = RecordingMeasurer(), RecordingMeasurer()
        await BenchmarkOrchestrator(config, registry, measurer=first, sleep=FakeSleep()).execute()
        await BenchmarkOrchestrator(config, registry, measurer=second, sleep=FakeSleep()).execute()
        assert first.calls == second.calls

    @pytest.mark.asyncio
    async def test_order_follows_rng(self, config, registry):
        """Serial dispatch measures in exactly the shuffled order."""
        measurer = RecordingMeasurer()
        await BenchmarkOrchestrator(
            config, registry, measurer=measurer, rng=random.Random(7), sleep=FakeSleep()
        ).execute()

        rng = random.Random(7)
        expected: list[str] = []
        for _ in range(3):
            order = registry.ids
            rng.shuffle(order)
            expected.extend(order)
        assert measurer.calls == expected

    @pytest.mark.asyncio
    async def test_failures_are_isolated(self, config, registry):
        failure = MeasurementResult.failure(ErrorKind.TRANSPORT, "ConnectError: refused", 3.0)
        measurer = RecordingMeasurer({"b": failure})

        session = await BenchmarkOrchestrator(
            config, registry, measurer=measurer, sleep=FakeSleep()
        ).execute()

        assert session.state == BenchmarkState.COMPLETED
        assert len(measurer.calls) == 9
        assert all(run.results["b"].error == "ConnectError: refused" for run in session.runs)
        assert session.aggregate.stats["b"].avg_client_time_ms is None
        assert session.aggregate.stats["a"].client_samples == 2

    @pytest.mark.asyncio
    async def test_concurrent_dispatch(self, config, registry):
        config.dispatch_mode = DispatchMode.CONCURRENT
        measurer = RecordingMeasurer()
        orchestrator = BenchmarkOrchestrator(config, registry, measurer=measurer, sleep=FakeSleep())

        assert isinstance(orchestrator._strategy, ConcurrentDispatch)
        session = await orchestrator.execute()

        assert len(measurer.calls) == 9
        assert session.aggregate.metadata["dispatch_mode"] == "concurrent"

    @pytest.mark.asyncio
    async def test_concurrent_results_recorded_as_they_resolve(self, config, registry):
        """Each released request flips exactly one placeholder, in release order."""
        config.dispatch_mode = DispatchMode.CONCURRENT
        gates = {endpoint_id: asyncio.Event() for endpoint_id in registry.ids}
        calls: dict[str, int] = {endpoint_id: 0 for endpoint_id in registry.ids}

        async def gated_measurer(url: str) -> MeasurementResult:
            endpoint_id = url.rsplit("/", 1)[-1]
            calls[endpoint_id] += 1
            if calls[endpoint_id] == 1:
                await gates[endpoint_id].wait()
            return MeasurementResult(client_time_ms=1.0, server_time_ms=1.0, reported_binding="DB")

        snapshots: list[tuple[bool, ...]] = []

        def on_update(session):
            if session.current_run.run_id == 1:
                first = session.runs[0]
                snapshots.append(tuple(first.results[i].pending for i in registry.ids))

        async def settle():
            for _ in range(5):
                await asyncio.sleep(0)

        task = asyncio.create_task(
            BenchmarkOrchestrator(
                config, registry, measurer=gated_measurer, sleep=FakeSleep(), on_update=on_update
            ).execute()
        )
        await settle()
        assert snapshots == [(True, True, True)]
        assert all(count == 1 for count in calls.values())

        for endpoint_id in ("c", "a", "b"):
            gates[endpoint_id].set()
            await settle()

        session = await asyncio.wait_for(task, timeout=5)

        assert snapshots == [
            (True, True, True),
            (True, True, False),
            (False, True, False),
            (False, False, False),
        ]
        assert session.state == BenchmarkState.COMPLETED

    @pytest.mark.asyncio
    async def test_unseeded_order_varies_between_sessions(self, config, registry):
        config.random_seed = None
        orders = set()
        for _ in range(30):
            measurer = RecordingMeasurer()
            await BenchmarkOrchestrator(
                config, registry, measurer=measurer, sleep=FakeSleep()
            ).execute()
            first_round = tuple(measurer.calls[: len(registry)])
            assert sorted(first_round) == sorted(registry.ids)
            orders.add(first_round)

        assert len(orders) > 1


class TestShuffleProperties:
    @settings(max_examples=50)
    @given(
        seed=st.integers(min_value=0, max_value=2**32),
        size=st.integers(min_value=1, max_value=8),
    )
    def test_shuffle_is_reproducible_permutation(self, seed, size):
        registry = EndpointRegistry(
            EndpointDescriptor(
                id=f"ep-{i}",
                url=f"https://bench.test/api/ep-{i}",
                label=f"EP {i}",
                region=Region.HELSINKI,
                access_type=AccessType.DIRECT_POOLED,
                cache_mode=False,
            )
            for i in range(size)
        )

        def shuffled_ids() -> list[str]:
            orchestrator = BenchmarkOrchestrator(BenchmarkConfig(random_seed=seed), registry)
            return [endpoint.id for endpoint in orchestrator._shuffle(registry.as_list())]

        first = shuffled_ids()
        assert sorted(first) == sorted(registry.ids)
        assert shuffled_ids() == first


class TestBenchmarkOrchestratorObserver:
    @pytest.mark.asyncio
    async def test_placeholders_published_before_measurement(self, config, registry):
        snapshots: list[list[bool]] = []

        def on_update(session):
            run = session.current_run
            snapshots.append([r.pending for r in run.results.values()])

        await BenchmarkOrchestrator(
            config, registry, measurer=RecordingMeasurer(), sleep=FakeSleep(), on_update=on_update
        ).execute()

        # Per round: one placeholder snapshot, then one per recorded result, plus a final one.
        assert len(snapshots) == 3 * (1 + 3) + 1
        assert snapshots[0] == [True, True, True]
        assert snapshots[1].count(False) == 1
        assert snapshots[3] == [False, False, False]
        assert snapshots[4] == [True, True, True]

    @pytest.mark.asyncio
    async def test_final_publish_has_aggregate(self, config, registry):
        seen = []
        await BenchmarkOrchestrator(
            config,
            registry,
            measurer=RecordingMeasurer(),
            sleep=FakeSleep(),
            on_update=lambda session: seen.append(session.aggregate is not None),
        ).execute()
        assert seen[-1] is True
        assert not any(seen[:-1])


class TestBenchmarkOrchestratorFailures:
    @pytest.mark.asyncio
    async def test_orchestration_error_aborts(self, config, registry):
        def on_update(session):
            if len(session.runs) == 2:
                raise RuntimeError("observer exploded")

        orchestrator = BenchmarkOrchestrator(
            config, registry, measurer=RecordingMeasurer(), sleep=FakeSleep(), on_update=on_update
        )

        with pytest.raises(BenchmarkAbortedError, match="observer exploded") as exc_info:
            await orchestrator.execute()

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        session = orchestrator.session
        assert session.state == BenchmarkState.FAILED
        assert session.error == "RuntimeError: observer exploded"
        assert session.aggregate is None
        assert len(session.runs) == 2
        assert session.runs[0].is_complete
        assert session.finished_at is not None
        assert not orchestrator.is_running

    @pytest.mark.asyncio
    async def test_rejects_reentrant_execute(self, config, registry):
        gate = asyncio.Event()

        async def slow_measurer(url):
            await gate.wait()
            return MeasurementResult(client_time_ms=1.0, server_time_ms=1.0, reported_binding="DB")

        orchestrator = BenchmarkOrchestrator(
            config, registry, measurer=slow_measurer, sleep=FakeSleep()
        )
        task = asyncio.create_task(orchestrator.execute())
        await asyncio.sleep(0)
        assert orchestrator.is_running

        with pytest.raises(BenchmarkInProgressError):
            await orchestrator.execute()

        gate.set()
        session = await task
        assert session.state == BenchmarkState.COMPLETED

    @pytest.mark.asyncio
    async def test_final_observer_error_aborts(self, config, registry):
        """A failing observer on the final update never leaves a completed session."""

        def on_update(session):
            if session.aggregate is not None:
                raise RuntimeError("summary view crashed")

        orchestrator = BenchmarkOrchestrator(
            config, registry, measurer=RecordingMeasurer(), sleep=FakeSleep(), on_update=on_update
        )

        with pytest.raises(BenchmarkAbortedError, match="summary view crashed"):
            await orchestrator.execute()

        assert orchestrator.session.state == BenchmarkState.FAILED
        assert orchestrator.session.error == "RuntimeError: summary view crashed"
        assert not orchestrator.is_running

    @pytest.mark.asyncio
    async def test_can_run_again_after_completion(self, config, registry):
        orchestrator = BenchmarkOrchestrator(
            config, registry, measurer=RecordingMeasurer(), sleep=FakeSleep()
        )
        first = await orchestrator.execute()
        second = await orchestrator.execute()
        assert first is not second
        assert second.state == BenchmarkState.COMPLETED


class TestBenchmarkOrchestratorHttp:
    @pytest.mark.asyncio
    async def test_default_measurer_uses_transport(self, config, registry, helpers):
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(request.url.path)
            if request.url.path.endswith("/b"):
                return httpx.Response(502, text="bad gateway")
            return helpers.envelope_response(time_ms=3.0, binding="POOL")

        session = await BenchmarkOrchestrator(
            config, registry, transport=httpx.MockTransport(handler), sleep=FakeSleep()
        ).execute()

        assert len(requested) == 9
        assert session.runs[-1].results["a"].reported_binding == "POOL"
        assert session.runs[-1].results["b"].error_kind == ErrorKind.HTTP
        assert session.aggregate.stats["a"].avg_server_time_ms == pytest.approx(3.0)
        assert session.aggregate.stats["b"].avg_server_time_ms is None
