# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table

from querybench.common.config import BenchmarkConfig
from querybench.common.exceptions import (
    BenchmarkAbortedError,
    ConsoleExporterDisabled,
    DataExporterDisabled,
    RegistryError,
)
from querybench.common.logging import setup_rich_logging
from querybench.exporters import (
    AggregateCsvExporter,
    ConsoleSummaryExporter,
    ExporterConfig,
    RunsJsonExporter,
)
from querybench.orchestrator.models import BenchmarkSession
from querybench.orchestrator.orchestrator import BenchmarkOrchestrator
from querybench.registry import EndpointRegistry, resolve_registry

logger = logging.getLogger(__name__)


class _ProgressReporter:
    """Session observer that drives a progress bar of measured endpoints."""

    def __init__(self, progress: Progress, total: int) -> None:
        self._progress = progress
        self._task_id = progress.add_task("Measuring", total=total)

    def __call__(self, session: BenchmarkSession) -> None:
        done = sum(
            1 for run in session.runs for result in run.results.values() if result.is_terminal
        )
        run = session.current_run
        description = f"Round {run.run_id}/{session.config.run_count}" if run else "Measuring"
        self._progress.update(self._task_id, completed=done, description=description)


def _load_registry(config: BenchmarkConfig) -> EndpointRegistry:
    try:
        return resolve_registry(config)
    except RegistryError as e:
        logger.error(f"Invalid endpoint registry: {e}")
        sys.exit(1)


def run_benchmark(config: BenchmarkConfig) -> None:
    """Run a benchmark session, print the summary and write artifacts.

    Exits with status 1 if the registry is invalid or the run is aborted.
    Partial results of an aborted run are still printed and exported.
    """
    console = Console()
    setup_rich_logging(config.log_level, console=console)

    registry = _load_registry(config)

    logger.info("=" * 80)
    logger.info("Starting query latency benchmark")
    logger.info(f"  Endpoints: {len(registry)} ({', '.join(registry.ids)})")
    logger.info(f"  Rounds: {config.run_count} (round 1 is a warm-up)")
    logger.info(f"  Dispatch: {config.dispatch_mode}")
    logger.info(f"  Delay between rounds: {config.inter_round_delay_seconds}s")
    logger.info("=" * 80)

    session, aborted = asyncio.run(_run_session(config, registry, console))

    if aborted:
        logger.error(f"Benchmark aborted: {session.error}")
        sys.exit(1)


async def _run_session(
    config: BenchmarkConfig, registry: EndpointRegistry, console: Console
) -> tuple[BenchmarkSession, bool]:
    aborted = False
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        reporter = _ProgressReporter(progress, total=config.run_count * len(registry))
        orchestrator = BenchmarkOrchestrator(config, registry, on_update=reporter)
        try:
            session = await orchestrator.execute()
        except BenchmarkAbortedError:
            aborted = True
            session = orchestrator.session

    exporter_config = ExporterConfig(
        session=session,
        registry=registry,
        output_dir=Path(config.artifact_directory),
    )

    try:
        await ConsoleSummaryExporter(exporter_config).export(console)
    except ConsoleExporterDisabled as e:
        logger.debug(str(e))

    if config.export:
        await _export_artifacts(exporter_config)

    return session, aborted


async def _export_artifacts(exporter_config: ExporterConfig) -> list[Path]:
    """Write every enabled file export concurrently."""
    exporters = [RunsJsonExporter(exporter_config)]
    try:
        exporters.append(AggregateCsvExporter(exporter_config))
    except DataExporterDisabled as e:
        logger.debug(str(e))

    paths = await asyncio.gather(*(exporter.export() for exporter in exporters))
    for path in paths:
        logger.info(f"Results written to: {path}")
    return list(paths)


def print_endpoints(config: BenchmarkConfig) -> None:
    """Print the registry a benchmark with this config would use."""
    console = Console()
    setup_rich_logging(config.log_level, console=console)
    registry = _load_registry(config)

    table = Table(title=f"Endpoints ({len(registry)})")
    table.add_column("Id")
    table.add_column("Label")
    table.add_column("Region")
    table.add_column("Access")
    table.add_column("Cache")
    table.add_column("URL", overflow="fold")
    for endpoint in registry:
        table.add_row(
            endpoint.id,
            endpoint.label,
            str(endpoint.region),
            str(endpoint.access_type),
            "cached" if endpoint.cache_mode else "busted",
            endpoint.url,
        )
    console.print(table)
