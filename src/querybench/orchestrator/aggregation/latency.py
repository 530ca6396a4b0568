# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Warm-up excluding latency aggregation."""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from querybench.common.constants import WARMUP_RUN_ID
from querybench.orchestrator.aggregation.base import (
    AggregateStat,
    AggregationStrategy,
    Extreme,
    LatencyAggregateResult,
    LatencyExtremes,
)

if TYPE_CHECKING:
    from querybench.orchestrator.models import RunRecord

logger = logging.getLogger(__name__)


class LatencyAggregation(AggregationStrategy):
    """Averages client and server time per endpoint, excluding the warm-up round.

    Round 1 is always the warm-up. A sample counts toward a metric only if the
    measurement is terminal, carries no error, and has a value for that metric.
    Client and server averages are computed independently, so a round without a
    server time can still contribute its client time.

    This is a pure function of its inputs: aggregating the same rounds twice
    gives equal results.
    """

    def get_aggregation_type(self) -> str:
        """Return aggregation type identifier."""
        return "latency"

    def aggregate(
        self,
        runs: Sequence["RunRecord"],
        run_count: int,
        endpoint_ids: Sequence[str],
    ) -> LatencyAggregateResult:
        """Aggregate rounds into per-endpoint averages.

        If fewer than run_count rounds exist the run is incomplete and no
        averages are computed; every endpoint gets an empty AggregateStat.

        Args:
            runs: Round records in execution order
            run_count: Number of rounds the session was configured for
            endpoint_ids: Ids of every registered endpoint

        Returns:
            LatencyAggregateResult with per-endpoint stats and best/worst markers
        """
        relevant = [run for run in runs if run.run_id != WARMUP_RUN_ID]
        metadata = {
            "run_count": run_count,
            "warmup_run_ids": [WARMUP_RUN_ID],
            "relevant_run_ids": [run.run_id for run in relevant],
        }

        if len(runs) < run_count:
            logger.debug(
                f"Skipping aggregation: {len(runs)}/{run_count} rounds available"
            )
            return LatencyAggregateResult(
                aggregation_type=self.get_aggregation_type(),
                complete=False,
                num_runs=len(runs),
                stats={endpoint_id: AggregateStat() for endpoint_id in endpoint_ids},
                metadata=metadata,
            )

        stats = {
            endpoint_id: self._aggregate_endpoint(endpoint_id, relevant)
            for endpoint_id in endpoint_ids
        }

        return LatencyAggregateResult(
            aggregation_type=self.get_aggregation_type(),
            complete=True,
            num_runs=len(runs),
            stats=stats,
            extremes=self._compute_extremes(stats, endpoint_ids),
            metadata=metadata,
        )

    def _aggregate_endpoint(
        self, endpoint_id: str, runs: Sequence["RunRecord"]
    ) -> AggregateStat:
        client_times: list[float] = []
        server_times: list[float] = []
        for run in runs:
            result = run.results.get(endpoint_id)
            if result is None or not result.ok:
                continue
            if result.client_time_ms is not None:
                client_times.append(result.client_time_ms)
            if result.server_time_ms is not None:
                server_times.append(result.server_time_ms)

        return AggregateStat(
            avg_client_time_ms=self._mean(client_times),
            avg_server_time_ms=self._mean(server_times),
            std_client_time_ms=(
                float(np.std(client_times, ddof=1)) if len(client_times) >= 2 else None
            ),
            client_samples=len(client_times),
            server_samples=len(server_times),
        )

    @staticmethod
    def _mean(values: list[float]) -> float | None:
        if not values:
            return None
        return float(np.mean(np.asarray(values, dtype=np.float64)))

    @staticmethod
    def _compute_extremes(
        stats: dict[str, AggregateStat], endpoint_ids: Sequence[str]
    ) -> LatencyExtremes:
        """Find the lowest and highest averages; ties go to the earlier endpoint."""

        def pick(attr: str) -> tuple[Extreme | None, Extreme | None]:
            values = [
                (endpoint_id, getattr(stats[endpoint_id], attr))
                for endpoint_id in endpoint_ids
                if getattr(stats[endpoint_id], attr) is not None
            ]
            if not values:
                return None, None
            best = min(values, key=lambda item: item[1])
            worst = max(values, key=lambda item: item[1])
            return (
                Extreme(endpoint_id=best[0], value_ms=best[1]),
                Extreme(endpoint_id=worst[0], value_ms=worst[1]),
            )

        best_client, worst_client = pick("avg_client_time_ms")
        best_server, worst_server = pick("avg_server_time_ms")
        return LatencyExtremes(
            best_client=best_client,
            worst_client=worst_client,
            best_server=best_server,
            worst_server=worst_server,
        )
