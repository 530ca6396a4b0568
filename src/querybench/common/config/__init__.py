# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from querybench.common.config.base_config import BaseConfig
from querybench.common.config.benchmark_config import BenchmarkConfig
from querybench.common.config.config_defaults import (
    BenchmarkDefaults,
    EndpointDefaults,
    OutputDefaults,
)
from querybench.common.config.groups import Groups

__all__ = [
    "BaseConfig",
    "BenchmarkConfig",
    "BenchmarkDefaults",
    "EndpointDefaults",
    "Groups",
    "OutputDefaults",
]
