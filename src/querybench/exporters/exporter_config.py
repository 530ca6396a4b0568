# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Configuration for result exporters."""

from dataclasses import dataclass
from pathlib import Path

from querybench.orchestrator.models import BenchmarkSession
from querybench.registry import EndpointRegistry


@dataclass(slots=True)
class ExporterConfig:
    """Configuration for result exporters.

    Attributes:
        session: Session to export, completed or aborted
        registry: Registry the session ran against, for endpoint metadata
        output_dir: Directory where export files are written
    """

    session: BenchmarkSession
    registry: EndpointRegistry
    output_dir: Path
