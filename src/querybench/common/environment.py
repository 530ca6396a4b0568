# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Environment variable settings for querybench.

All settings use the `QUERYBENCH_` prefix and are grouped into subsystems:

    QUERYBENCH_HTTP_TIMEOUT=30
    QUERYBENCH_HTTP_CONNECTION_LIMIT=32
    QUERYBENCH_LOGGING_LEVEL=DEBUG

These tune the transport and ambient behavior only. Benchmark parameters
(run count, delay, registry) belong to BenchmarkConfig.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from querybench import __version__


class _HTTPSettings(BaseSettings):
    """HTTP transport settings used by the measurement client."""

    model_config = SettingsConfigDict(env_prefix="QUERYBENCH_HTTP_")

    TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Transport timeout in seconds for connect, read and write. "
        "The orchestrator imposes no timeout of its own.",
    )
    CONNECTION_LIMIT: int = Field(
        default=32,
        ge=1,
        description="Maximum number of simultaneous client connections.",
    )
    ERROR_BODY_MAX_CHARS: int = Field(
        default=200,
        ge=0,
        description="Number of response body characters kept in HTTP error messages.",
    )
    USER_AGENT: str = Field(
        default=f"querybench/{__version__}",
        description="User-Agent header sent with every measurement request.",
    )
    VERIFY_TLS: bool = Field(
        default=True,
        description="Verify server TLS certificates.",
    )


class _LoggingSettings(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="QUERYBENCH_LOGGING_")

    LEVEL: str = Field(
        default="INFO",
        description="Default log level when --log-level is not given.",
    )
    RICH_TRACEBACKS: bool = Field(
        default=True,
        description="Render exception tracebacks with rich.",
    )


class _Environment(BaseSettings):
    """Root of all querybench environment settings."""

    model_config = SettingsConfigDict(env_prefix="QUERYBENCH_")

    HTTP: _HTTPSettings = Field(default_factory=_HTTPSettings)
    LOGGING: _LoggingSettings = Field(default_factory=_LoggingSettings)


Environment = _Environment()
