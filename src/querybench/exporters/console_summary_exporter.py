# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from querybench.common.enums import BenchmarkState
from querybench.common.exceptions import ConsoleExporterDisabled
from querybench.exporters.exporter_config import ExporterConfig

if TYPE_CHECKING:
    from rich.console import Console

    from querybench.orchestrator.aggregation import Extreme


class ConsoleSummaryExporter:
    """Prints per-endpoint averages as a table.

    The lowest average of each column is shown in green and the highest in
    red. Values are rounded here for display only.
    Self-disables when the session never started a round.
    """

    def __init__(self, exporter_config: ExporterConfig) -> None:
        if not exporter_config.session.runs:
            raise ConsoleExporterDisabled(
                "Console summary exporter is disabled: no rounds were executed"
            )
        self.exporter_config = exporter_config

    async def export(self, console: "Console") -> None:
        console.print(self.build_table())
        session = self.exporter_config.session
        if session.state == BenchmarkState.FAILED:
            console.print(
                Text(
                    f"Benchmark aborted: {session.error}. Partial results are shown above.",
                    style="bold red",
                )
            )

    def build_table(self) -> Table:
        session = self.exporter_config.session
        aggregate = session.aggregate
        relevant = len(aggregate.metadata.get("relevant_run_ids", [])) if aggregate else 0

        table = Table(
            title=f"Query latency ({len(session.runs)} rounds, round 1 excluded as warm-up)",
            caption=None if aggregate and aggregate.complete else "Run incomplete: averages unavailable",
        )
        table.add_column("Endpoint")
        table.add_column("Region")
        table.add_column("Access")
        table.add_column("Cache")
        table.add_column("Avg client (ms)", justify="right")
        table.add_column("Avg server (ms)", justify="right")
        table.add_column("Ok rounds", justify="right")
        table.add_column("Last binding")

        extremes = aggregate.extremes if aggregate else None
        last_run = session.current_run
        for endpoint in self.exporter_config.registry:
            stat = aggregate.stats.get(endpoint.id) if aggregate else None
            last = last_run.results.get(endpoint.id) if last_run else None
            table.add_row(
                endpoint.label,
                str(endpoint.region),
                str(endpoint.access_type),
                "cached" if endpoint.cache_mode else "busted",
                self._cell(
                    stat.avg_client_time_ms if stat else None,
                    endpoint.id,
                    extremes.best_client if extremes else None,
                    extremes.worst_client if extremes else None,
                ),
                self._cell(
                    stat.avg_server_time_ms if stat else None,
                    endpoint.id,
                    extremes.best_server if extremes else None,
                    extremes.worst_server if extremes else None,
                ),
                f"{stat.client_samples}/{relevant}" if stat else "-",
                (last.reported_binding or "-") if last else "-",
            )
        return table

    @staticmethod
    def _cell(
        value: float | None,
        endpoint_id: str,
        best: "Extreme | None",
        worst: "Extreme | None",
    ) -> Text:
        if value is None:
            return Text("-", style="dim")
        style = ""
        if best is not None and best.endpoint_id == endpoint_id:
            style = "bold green"
        elif worst is not None and worst.endpoint_id == endpoint_id:
            style = "bold red"
        return Text(f"{value:.2f}", style=style)
