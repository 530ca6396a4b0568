# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Base class for file exporters."""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from querybench.exporters.exporter_config import ExporterConfig

logger = logging.getLogger(__name__)


class BaseFileExporter(ABC):
    """Renders a session to text and writes it to a file in the output directory.

    Subclasses provide the file name and the content.
    """

    def __init__(self, config: ExporterConfig) -> None:
        self._config = config
        self._session = config.session
        self._registry = config.registry

    @abstractmethod
    def get_file_name(self) -> str:
        """Return the name of the file written in the output directory."""
        pass

    @abstractmethod
    def _generate_content(self) -> str:
        """Return the full file content."""
        pass

    def get_file_path(self) -> Path:
        return Path(self._config.output_dir) / self.get_file_name()

    async def export(self) -> Path:
        """Write the export file.

        Returns:
            Path of the written file
        """
        path = self.get_file_path()
        content = self._generate_content()
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(path.write_text, content, encoding="utf-8")
        logger.debug(f"Wrote {path}")
        return path
