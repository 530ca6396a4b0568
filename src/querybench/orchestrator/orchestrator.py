# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Round-based benchmark orchestrator."""

import asyncio
import contextlib
import functools
import logging
import random
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

import httpx

from querybench.common.config import BenchmarkConfig
from querybench.common.enums import BenchmarkState
from querybench.common.exceptions import BenchmarkAbortedError, BenchmarkInProgressError
from querybench.measurement import MeasurementResult, create_http_client, measure
from querybench.orchestrator.aggregation import AggregationStrategy, LatencyAggregation
from querybench.orchestrator.models import BenchmarkSession, RunRecord
from querybench.orchestrator.strategies import DispatchStrategy, create_dispatch_strategy
from querybench.registry import EndpointDescriptor, EndpointRegistry

logger = logging.getLogger(__name__)

__all__ = [
    "BenchmarkOrchestrator",
    "Measurer",
    "SessionObserver",
]

Measurer = Callable[[str], Awaitable[MeasurementResult]]
"""Measures a URL. Must capture every per-request failure in the returned result."""

SessionObserver = Callable[[BenchmarkSession], None]
"""Called with the session whenever a round starts or a measurement is recorded."""


class BenchmarkOrchestrator:
    """Runs a fixed number of rounds over an endpoint registry.

    Every round:
    - waits for the inter-round delay (except before the first round)
    - shuffles the registry uniformly so no endpoint is systematically measured
      right after another one warms a shared path
    - publishes a record of pending placeholders
    - measures every endpoint once through the dispatch strategy, recording
      each result as soon as it resolves

    After the last round the aggregation strategy computes per-endpoint
    averages. A failing endpoint never stops the run; only an exception in the
    orchestration itself aborts it.

    All state lives in the BenchmarkSession this orchestrator owns, so several
    orchestrators can run side by side.
    """

    def __init__(
        self,
        config: BenchmarkConfig,
        registry: EndpointRegistry,
        *,
        measurer: Measurer | None = None,
        strategy: DispatchStrategy | None = None,
        aggregation: AggregationStrategy | None = None,
        rng: random.Random | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_update: SessionObserver | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize BenchmarkOrchestrator.

        Args:
            config: Benchmark configuration
            registry: Endpoints to measure
            measurer: Measurement function override. Defaults to an HTTP GET
                through a client created for the session.
            strategy: Dispatch strategy override. Defaults to config.dispatch_mode.
            aggregation: Aggregation strategy. Defaults to LatencyAggregation.
            rng: Random source for the shuffle. Defaults to one seeded with config.random_seed.
            sleep: Coroutine used for the inter-round delay
            on_update: Observer notified of progress
            transport: HTTP transport for the default measurer (e.g. httpx.MockTransport)
        """
        self.config = config
        self.registry = registry
        self._measurer = measurer
        self._strategy = strategy or create_dispatch_strategy(config.dispatch_mode)
        self._aggregation = aggregation or LatencyAggregation()
        self._rng = rng or random.Random(config.random_seed)
        self._sleep = sleep
        self._on_update = on_update
        self._transport = transport
        self._running = False
        self.session: BenchmarkSession | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def execute(self) -> BenchmarkSession:
        """Run every round and aggregate the results.

        Returns:
            The completed BenchmarkSession

        Raises:
            BenchmarkInProgressError: If this orchestrator is already running
            BenchmarkAbortedError: If the orchestration logic failed. The
                partial session, marked FAILED, stays on self.session.
        """
        if self._running:
            raise BenchmarkInProgressError(
                "A benchmark is already running on this orchestrator. "
                "Wait for it to finish before starting another one."
            )
        self._running = True

        session = BenchmarkSession(
            config=self.config,
            endpoint_ids=self.registry.ids,
            state=BenchmarkState.RUNNING,
            started_at=datetime.now(timezone.utc),
        )
        self.session = session

        logger.info(
            f"Starting benchmark: {self.config.run_count} rounds x {len(self.registry)} endpoints "
            f"({self._strategy.mode} dispatch)"
        )

        try:
            async with contextlib.AsyncExitStack() as stack:
                measurer = self._measurer
                if measurer is None:
                    client = await stack.enter_async_context(
                        create_http_client(self._transport)
                    )
                    measurer = functools.partial(measure, client)

                for run_index in range(self.config.run_count):
                    if run_index > 0:
                        delay = self.config.inter_round_delay_seconds
                        if delay > 0:
                            logger.debug(f"Waiting {delay}s before next round")
                            await self._sleep(delay)
                    await self._execute_round(session, run_index + 1, measurer)

            session.aggregate = self._aggregation.aggregate(
                session.runs, self.config.run_count, self.registry.ids
            )
            session.aggregate.metadata["dispatch_mode"] = str(self._strategy.mode)
            self._publish(session)
            session.state = BenchmarkState.COMPLETED
        except Exception as e:
            session.state = BenchmarkState.FAILED
            session.error = f"{type(e).__name__}: {e}"
            logger.exception(
                f"Benchmark aborted after {session.completed_runs}/{self.config.run_count} rounds"
            )
            raise BenchmarkAbortedError(session.error) from e
        finally:
            session.finished_at = datetime.now(timezone.utc)
            self._running = False

        logger.info(f"All rounds complete: {len(session.runs)}/{self.config.run_count}")
        return session

    async def _execute_round(
        self, session: BenchmarkSession, run_id: int, measurer: Measurer
    ) -> None:
        """Shuffle, publish placeholders, then measure every endpoint once."""
        order = self._shuffle(self.registry.as_list())
        record = RunRecord.start(run_id, self.registry.ids)
        session.runs.append(record)
        self._publish(session)

        logger.info(f"[{run_id}/{self.config.run_count}] Starting round")
        logger.debug(f"[{run_id}] Order: {', '.join(e.id for e in order)}")

        async def measure_one(endpoint: EndpointDescriptor) -> None:
            result = await measurer(endpoint.url)
            record.record(endpoint.id, result)
            if result.error is None:
                logger.debug(
                    f"[{run_id}] {endpoint.id}: client {result.client_time_ms:.2f}ms, "
                    f"server {result.server_time_ms}ms via {result.reported_binding}"
                )
            else:
                logger.warning(f"[{run_id}] {endpoint.id} failed: {result.error}")
            self._publish(session)

        await self._strategy.dispatch(order, measure_one)

        succeeded = sum(1 for result in record.results.values() if result.ok)
        logger.info(
            f"[{run_id}/{self.config.run_count}] Round complete: "
            f"{succeeded}/{len(record.results)} endpoints succeeded"
        )

    def _shuffle(self, endpoints: list[EndpointDescriptor]) -> list[EndpointDescriptor]:
        """Return a uniformly random permutation (Fisher-Yates via Random.shuffle)."""
        shuffled = list(endpoints)
        self._rng.shuffle(shuffled)
        return shuffled

    def _publish(self, session: BenchmarkSession) -> None:
        if self._on_update is not None:
            self._on_update(session)
