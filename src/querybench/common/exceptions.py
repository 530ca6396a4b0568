# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for querybench.

Per-endpoint failures never raise; they are captured as data on a
MeasurementResult. These exceptions cover configuration problems and
orchestration-level failures only.
"""


class QueryBenchError(Exception):
    """Base class for all querybench errors."""


class RegistryError(QueryBenchError, ValueError):
    """Raised when an endpoint registry is empty, malformed or has duplicate ids."""


class BenchmarkInProgressError(QueryBenchError, RuntimeError):
    """Raised when a benchmark is started while another one is still running."""


class BenchmarkAbortedError(QueryBenchError, RuntimeError):
    """Raised when the orchestration logic itself fails and the run is aborted.

    The partially filled session stays available on the orchestrator.
    """


class DataExporterDisabled(QueryBenchError):
    """Raised by a data exporter that has nothing to export for this session."""


class ConsoleExporterDisabled(QueryBenchError):
    """Raised by a console exporter that has nothing to show for this session."""
