# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Base types for aggregating benchmark rounds."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pydantic import ConfigDict, Field

from querybench.common.models import QueryBenchBaseModel

if TYPE_CHECKING:
    from querybench.orchestrator.models import RunRecord


class AggregateStat(QueryBenchBaseModel):
    """Per-endpoint statistics over the relevant (non warm-up) rounds.

    Attributes:
        avg_client_time_ms: Mean client time, None if no qualifying samples
        avg_server_time_ms: Mean server time, None if no qualifying samples
        std_client_time_ms: Sample standard deviation of client time, None with fewer than 2 samples
        client_samples: Number of rounds that contributed to the client average
        server_samples: Number of rounds that contributed to the server average
    """

    model_config = ConfigDict(frozen=True)

    avg_client_time_ms: float | None = None
    avg_server_time_ms: float | None = None
    std_client_time_ms: float | None = None
    client_samples: int = 0
    server_samples: int = 0


class Extreme(QueryBenchBaseModel):
    """An endpoint holding the best or worst value of a metric."""

    model_config = ConfigDict(frozen=True)

    endpoint_id: str
    value_ms: float


class LatencyExtremes(QueryBenchBaseModel):
    """Best (lowest) and worst (highest) averages across endpoints."""

    model_config = ConfigDict(frozen=True)

    best_client: Extreme | None = None
    worst_client: Extreme | None = None
    best_server: Extreme | None = None
    worst_server: Extreme | None = None


class LatencyAggregateResult(QueryBenchBaseModel):
    """Result of aggregating a sequence of rounds.

    Attributes:
        aggregation_type: Identifier of the strategy that produced this result
        complete: False if the run had fewer rounds than configured; all stats are then empty
        num_runs: Number of rounds that were available
        stats: Per-endpoint statistics
        extremes: Best/worst markers across endpoints
        metadata: Extra details (warm-up policy, relevant run ids, dispatch mode)
    """

    aggregation_type: str
    complete: bool
    num_runs: int
    stats: dict[str, AggregateStat] = Field(default_factory=dict)
    extremes: LatencyExtremes = Field(default_factory=LatencyExtremes)
    metadata: dict[str, Any] = Field(default_factory=dict)


class AggregationStrategy(ABC):
    """Base class for strategies that turn rounds into per-endpoint statistics."""

    @abstractmethod
    def get_aggregation_type(self) -> str:
        """Return aggregation type identifier."""
        pass

    @abstractmethod
    def aggregate(
        self,
        runs: Sequence["RunRecord"],
        run_count: int,
        endpoint_ids: Sequence[str],
    ) -> LatencyAggregateResult:
        """Aggregate rounds into per-endpoint statistics.

        Args:
            runs: Round records in execution order
            run_count: Number of rounds the session was configured for
            endpoint_ids: Ids of every registered endpoint

        Returns:
            LatencyAggregateResult
        """
        pass
