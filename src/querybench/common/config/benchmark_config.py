# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path
from typing import Annotated, Any

from cyclopts import Parameter
from pydantic import Field, field_validator, model_validator

from querybench.common.config.base_config import BaseConfig
from querybench.common.config.config_defaults import (
    BenchmarkDefaults,
    EndpointDefaults,
    OutputDefaults,
)
from querybench.common.config.groups import Groups
from querybench.common.enums import DispatchMode, Region

# Options that only shape the built-in registry and are meaningless with --endpoints-file.
_BUILTIN_REGISTRY_OPTIONS = {
    "pooled_base_url": "--pooled-base-url",
    "proxied_base_url": "--proxied-base-url",
    "cache_ttl_seconds": "--cache-ttl",
}


class BenchmarkConfig(BaseConfig):
    """A configuration class for a single benchmark session."""

    @field_validator("regions", mode="before")
    @classmethod
    def parse_region_list(cls, v: Any) -> list[Region] | None:
        """Parse comma-separated region names from CLI input.

        Accepts "helsinki,us-east", a single region name, or an already built list.

        Raises:
            ValueError: If a region name is not recognized
        """
        if v is None:
            return None

        if isinstance(v, str | Region):
            v = [v]

        if not isinstance(v, list | tuple):
            raise ValueError(
                f"Internal error: Invalid regions type {type(v).__name__}. "
                f"Expected str, list[str], or None."
            )

        parts: list[str | Region] = []
        for item in v:
            if isinstance(item, str) and not isinstance(item, Region):
                parts.extend(part.strip() for part in item.split(",") if part.strip())
            else:
                parts.append(item)

        regions = []
        for part in parts:
            try:
                regions.append(Region(part))
            except ValueError as err:
                valid = ", ".join(r.value for r in Region)
                raise ValueError(
                    f"Invalid region: '{part}'. Valid regions are: {valid}. "
                    f"Example: --regions helsinki,us-east"
                ) from err
        if not regions:
            raise ValueError(
                "Region filter is empty. Omit --regions to benchmark every region."
            )
        return regions

    @model_validator(mode="after")
    def validate_registry_source(self) -> "BenchmarkConfig":
        """Reject built-in registry options when an endpoints file is given."""
        if self.endpoints_file is None:
            return self
        for field_name, flag in _BUILTIN_REGISTRY_OPTIONS.items():
            if field_name in self.model_fields_set:
                raise ValueError(
                    f"{flag} only applies to the built-in endpoint registry. "
                    f"Either remove {flag} or drop --endpoints-file and use the built-in endpoints."
                )
        return self

    run_count: Annotated[
        int,
        Field(
            ge=2,
            description="Number of rounds to run. Every round measures each endpoint once. "
            "Round 1 is a warm-up and is excluded from averages, so at least 2 rounds are required.",
        ),
        Parameter(
            name=("--run-count",),
            group=Groups.BENCHMARK,
        ),
    ] = BenchmarkDefaults.RUN_COUNT

    inter_round_delay_seconds: Annotated[
        float,
        Field(
            ge=0,
            description="Pause between rounds in seconds. Lets short-lived edge caches settle "
            "and avoids hammering the endpoints back-to-back.",
        ),
        Parameter(
            name=("--inter-round-delay",),
            group=Groups.BENCHMARK,
        ),
    ] = BenchmarkDefaults.INTER_ROUND_DELAY_SECONDS

    dispatch_mode: Annotated[
        DispatchMode,
        Field(
            description="How endpoints are measured within a round: 'serial' measures one at a time "
            "in shuffled order, 'concurrent' issues all requests at once and waits for all of them. "
            "The two are not interchangeable for reproducibility.",
        ),
        Parameter(
            name=("--dispatch-mode",),
            group=Groups.BENCHMARK,
        ),
    ] = BenchmarkDefaults.DISPATCH_MODE

    random_seed: Annotated[
        int | None,
        Field(
            description="Seed for the per-round endpoint shuffle. When unset, every session "
            "uses a fresh random order.",
        ),
        Parameter(
            name=("--random-seed",),
            group=Groups.BENCHMARK,
        ),
    ] = BenchmarkDefaults.RANDOM_SEED

    pooled_base_url: Annotated[
        str,
        Field(
            min_length=1,
            description="Base URL of the worker app serving the direct-pooled /api/* endpoints.",
        ),
        Parameter(
            name=("--pooled-base-url",),
            group=Groups.ENDPOINTS,
        ),
    ] = EndpointDefaults.POOLED_BASE_URL

    proxied_base_url: Annotated[
        str,
        Field(
            min_length=1,
            description="Base URL of the REST proxy service.",
        ),
        Parameter(
            name=("--proxied-base-url",),
            group=Groups.ENDPOINTS,
        ),
    ] = EndpointDefaults.PROXIED_BASE_URL

    cache_ttl_seconds: Annotated[
        int,
        Field(
            ge=0,
            description="Cache TTL hint (cacheTtl query parameter) for the CDN-cacheable REST endpoint.",
        ),
        Parameter(
            name=("--cache-ttl",),
            group=Groups.ENDPOINTS,
        ),
    ] = EndpointDefaults.CACHE_TTL_SECONDS

    endpoints_file: Annotated[
        Path | None,
        Field(
            description="JSON file with a list of endpoint descriptors to use instead of the built-in registry.",
        ),
        Parameter(
            name=("--endpoints-file",),
            group=Groups.ENDPOINTS,
        ),
    ] = None

    regions: Annotated[
        Any,  # CLI accepts string, validator converts to list[Region] | None
        Field(
            description="Comma-separated list of regions to benchmark (e.g. helsinki,us-east). "
            "Defaults to every region.",
        ),
        Parameter(
            name=("--regions",),
            group=Groups.ENDPOINTS,
        ),
    ] = None

    artifact_directory: Annotated[
        Path,
        Field(
            description="Directory where result artifacts are written.",
        ),
        Parameter(
            name=("--artifact-dir",),
            group=Groups.OUTPUT,
        ),
    ] = OutputDefaults.ARTIFACT_DIRECTORY

    export: Annotated[
        bool,
        Field(
            description="Write JSON and CSV artifacts after the run.",
        ),
        Parameter(
            name=("--export",),
            group=Groups.OUTPUT,
        ),
    ] = OutputDefaults.EXPORT

    log_level: Annotated[
        str | None,
        Field(
            description="Log level (DEBUG, INFO, WARNING, ...). Defaults to QUERYBENCH_LOGGING_LEVEL.",
        ),
        Parameter(
            name=("--log-level",),
            group=Groups.OUTPUT,
        ),
    ] = None
