# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from querybench.registry.defaults import (
    build_url,
    default_registry,
    resolve_registry,
)
from querybench.registry.models import EndpointDescriptor
from querybench.registry.registry import EndpointRegistry

__all__ = [
    "EndpointDescriptor",
    "EndpointRegistry",
    "build_url",
    "default_registry",
    "resolve_registry",
]
