# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""CSV exporter for per-endpoint aggregate results."""

import csv
import io

from querybench.common.exceptions import DataExporterDisabled
from querybench.exporters.base_exporter import BaseFileExporter
from querybench.exporters.exporter_config import ExporterConfig

HEADER = [
    "endpoint_id",
    "label",
    "region",
    "access_type",
    "cache_mode",
    "avg_client_time_ms",
    "avg_server_time_ms",
    "std_client_time_ms",
    "client_samples",
    "server_samples",
    "client_marker",
    "server_marker",
]


class AggregateCsvExporter(BaseFileExporter):
    """Exports per-endpoint averages to CSV.

    Creates a CSV with two sections:
    - Per-endpoint table (one row per endpoint, with best/worst markers)
    - Metadata section

    Disabled for sessions without an aggregate (aborted runs).
    """

    def __init__(self, config: ExporterConfig) -> None:
        if config.session.aggregate is None:
            raise DataExporterDisabled(
                "Aggregate CSV exporter is disabled: the session has no aggregate results"
            )
        super().__init__(config)

    def get_file_name(self) -> str:
        return "querybench_aggregate.csv"

    def _generate_content(self) -> str:
        aggregate = self._session.aggregate
        extremes = aggregate.extremes
        buf = io.StringIO()
        writer = csv.writer(buf)

        writer.writerow(HEADER)
        for endpoint in self._registry:
            stat = aggregate.stats.get(endpoint.id)
            if stat is None:
                continue
            writer.writerow(
                [
                    endpoint.id,
                    endpoint.label,
                    str(endpoint.region),
                    str(endpoint.access_type),
                    str(endpoint.cache_mode).lower(),
                    self._format_number(stat.avg_client_time_ms),
                    self._format_number(stat.avg_server_time_ms),
                    self._format_number(stat.std_client_time_ms),
                    stat.client_samples,
                    stat.server_samples,
                    self._marker(endpoint.id, extremes.best_client, extremes.worst_client),
                    self._marker(endpoint.id, extremes.best_server, extremes.worst_server),
                ]
            )

        writer.writerow([])
        writer.writerow(["Metadata"])
        writer.writerow(["Field", "Value"])
        writer.writerow(["Aggregation Type", aggregate.aggregation_type])
        writer.writerow(["Complete", str(aggregate.complete).lower()])
        writer.writerow(["Number of Rounds", aggregate.num_runs])
        writer.writerow(["Configured Rounds", aggregate.metadata.get("run_count", "")])
        writer.writerow(
            ["Relevant Rounds", str(aggregate.metadata.get("relevant_run_ids", []))]
        )
        writer.writerow(["Dispatch Mode", aggregate.metadata.get("dispatch_mode", "")])

        return buf.getvalue()

    @staticmethod
    def _marker(endpoint_id, best, worst) -> str:
        # With a single endpoint it is both best and worst; report best.
        if best is not None and best.endpoint_id == endpoint_id:
            return "best"
        if worst is not None and worst.endpoint_id == endpoint_id:
            return "worst"
        return ""

    def _format_number(self, value, decimals: int = 3) -> str:
        """Format a number for CSV output.

        Args:
            value: Number to format
            decimals: Number of decimal places

        Returns:
            str: Formatted number or empty string if None
        """
        if value is None:
            return ""
        if isinstance(value, float):
            return f"{value:.{decimals}f}"
        return str(value)
