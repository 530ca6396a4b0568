# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for benchmark targets."""

from pydantic import ConfigDict, Field

from querybench.common.enums import AccessType, Region
from querybench.common.models import QueryBenchBaseModel


class EndpointDescriptor(QueryBenchBaseModel):
    """A single benchmark target.

    Attributes:
        id: Unique key within the registry (e.g., "cached-query-us-east")
        url: Full request URL, including any cacheTtl hint
        label: Short human-readable name used in reports
        description: Longer description of the access path
        region: Deployment region of the target
        access_type: Direct pooled connection or REST proxied call
        cache_mode: True if responses may be served from the CDN cache
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    id: str = Field(min_length=1)
    url: str = Field(min_length=1)
    label: str
    description: str = ""
    region: Region
    access_type: AccessType = Field(alias="accessType")
    cache_mode: bool = Field(alias="cacheMode")
