# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for benchmark orchestration."""

from collections.abc import Iterable
from datetime import datetime

from pydantic import Field

from querybench.common.config import BenchmarkConfig
from querybench.common.enums import BenchmarkState
from querybench.common.models import QueryBenchBaseModel
from querybench.measurement.models import MeasurementResult
from querybench.orchestrator.aggregation.base import LatencyAggregateResult


class RunRecord(QueryBenchBaseModel):
    """Results of one round.

    Attributes:
        run_id: 1-based round number
        results: Mapping of endpoint id to measurement, one entry per registered endpoint
    """

    run_id: int = Field(ge=1)
    results: dict[str, MeasurementResult] = Field(default_factory=dict)

    @classmethod
    def start(cls, run_id: int, endpoint_ids: Iterable[str]) -> "RunRecord":
        """Create a record with every endpoint set to a pending placeholder."""
        return cls(
            run_id=run_id,
            results={
                endpoint_id: MeasurementResult.placeholder()
                for endpoint_id in endpoint_ids
            },
        )

    def record(self, endpoint_id: str, result: MeasurementResult) -> None:
        """Replace the placeholder for endpoint_id with a terminal result.

        Raises:
            ValueError: If the endpoint is unknown to this round, the result is
                still pending, or the endpoint already has a terminal result
        """
        if endpoint_id not in self.results:
            raise ValueError(
                f"Endpoint '{endpoint_id}' is not part of run {self.run_id}"
            )
        if result.pending:
            raise ValueError(
                f"Cannot record a pending result for '{endpoint_id}' in run {self.run_id}"
            )
        if self.results[endpoint_id].is_terminal:
            raise ValueError(
                f"Endpoint '{endpoint_id}' already has a result in run {self.run_id}"
            )
        self.results[endpoint_id] = result

    @property
    def is_complete(self) -> bool:
        return all(result.is_terminal for result in self.results.values())

    @property
    def pending_ids(self) -> list[str]:
        return [
            endpoint_id
            for endpoint_id, result in self.results.items()
            if result.pending
        ]


class BenchmarkSession(QueryBenchBaseModel):
    """All state for one benchmark session.

    Owned and mutated only by the orchestrator; observers receive it read-only.

    Attributes:
        config: Configuration the session runs with
        endpoint_ids: Ids of the registered endpoints, in registry order
        state: Lifecycle state of the session
        runs: Round records in execution order
        aggregate: Averages computed after all rounds complete
        error: Top-level error if the orchestration itself failed
        started_at: When execution started
        finished_at: When execution completed or failed
    """

    config: BenchmarkConfig
    endpoint_ids: list[str]
    state: BenchmarkState = BenchmarkState.IDLE
    runs: list[RunRecord] = Field(default_factory=list)
    aggregate: LatencyAggregateResult | None = None
    error: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def current_run(self) -> RunRecord | None:
        return self.runs[-1] if self.runs else None

    @property
    def completed_runs(self) -> int:
        return sum(1 for run in self.runs if run.is_complete)
