# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command line interface for querybench."""

from typing import Annotated

from cyclopts import App, Parameter

from querybench import __version__
from querybench.common.config import BenchmarkConfig

app = App(
    name="querybench",
    help="Compare database query latency across access paths, regions and cache modes.",
    version=__version__,
)


@app.command(name="run")
def run(
    config: Annotated[BenchmarkConfig | None, Parameter(name="*")] = None,
) -> None:
    """Run a benchmark and print per-endpoint average latencies.

    Args:
        config: Benchmark configuration
    """
    from querybench.cli_runner import run_benchmark

    run_benchmark(config or BenchmarkConfig())


@app.command(name="endpoints")
def endpoints(
    config: Annotated[BenchmarkConfig | None, Parameter(name="*")] = None,
) -> None:
    """List the endpoints a benchmark would measure.

    Args:
        config: Benchmark configuration
    """
    from querybench.cli_runner import print_endpoints

    print_endpoints(config or BenchmarkConfig())
