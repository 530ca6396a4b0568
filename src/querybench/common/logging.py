# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging

from rich.console import Console
from rich.logging import RichHandler

from querybench.common.environment import Environment

_LOG_FORMAT = "%(message)s"
_DATE_FORMAT = "[%X]"


def setup_rich_logging(level: str | int | None = None, console: Console | None = None) -> None:
    """Install a RichHandler on the root logger.

    Replaces any handlers previously installed by this function, so it is safe
    to call more than once (e.g. from tests or repeated CLI invocations).

    Args:
        level: Log level name or number. Defaults to Environment.LOGGING.LEVEL.
        console: Console to log to. Defaults to a stderr console.
    """
    if level is None:
        level = Environment.LOGGING.LEVEL
    if isinstance(level, str):
        level = level.upper()

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=Environment.LOGGING.RICH_TRACEBACKS,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    handler.set_name("querybench")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "querybench":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO, which drowns out benchmark progress.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
