# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass
from pathlib import Path

from querybench.common.enums import DispatchMode


@dataclass(frozen=True)
class BenchmarkDefaults:
    RUN_COUNT = 5
    INTER_ROUND_DELAY_SECONDS = 1.0
    DISPATCH_MODE = DispatchMode.SERIAL
    RANDOM_SEED = None


@dataclass(frozen=True)
class EndpointDefaults:
    POOLED_BASE_URL = "https://bunvhd.tripcafe.org"
    PROXIED_BASE_URL = "https://localhost"
    CACHE_TTL_SECONDS = 60


@dataclass(frozen=True)
class OutputDefaults:
    ARTIFACT_DIRECTORY = Path("./artifacts")
    EXPORT = True
