# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exporters for benchmark session results."""

from querybench.exporters.aggregate_csv_exporter import AggregateCsvExporter
from querybench.exporters.base_exporter import BaseFileExporter
from querybench.exporters.console_summary_exporter import ConsoleSummaryExporter
from querybench.exporters.exporter_config import ExporterConfig
from querybench.exporters.runs_json_exporter import RunsJsonExporter

__all__ = [
    "AggregateCsvExporter",
    "BaseFileExporter",
    "ConsoleSummaryExporter",
    "ExporterConfig",
    "RunsJsonExporter",
]
