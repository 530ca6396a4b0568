# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Built-in endpoint registry.

Direct-pooled targets are served by the worker app under /api/<endpoint>, one
cached and one non-cached pooling configuration per region. REST-proxied
targets are served at the root of the proxy service, which turns the cacheTtl
query parameter into a public Cache-Control max-age.
"""

import httpx

from querybench.common.config import BenchmarkConfig
from querybench.common.constants import CACHE_TTL_PARAM
from querybench.common.enums import AccessType, Region
from querybench.registry.models import EndpointDescriptor
from querybench.registry.registry import EndpointRegistry

_REGION_SUFFIX = {
    Region.HELSINKI: "",
    Region.US_EAST: "-us-east",
    Region.US_WEST: "-us-west",
}

_REGION_LABEL = {
    Region.HELSINKI: "Helsinki",
    Region.US_EAST: "US East",
    Region.US_WEST: "US West",
}


def build_url(base_url: str, path: str, cache_ttl_seconds: int | None = None) -> str:
    """Join path onto base_url and optionally add the cacheTtl hint."""
    url = httpx.URL(base_url).join(path)
    if cache_ttl_seconds is not None:
        url = url.copy_add_param(CACHE_TTL_PARAM, str(cache_ttl_seconds))
    return str(url)


def pooled_endpoints(base_url: str) -> list[EndpointDescriptor]:
    endpoints = []
    for region, suffix in _REGION_SUFFIX.items():
        for cached in (True, False):
            endpoint_id = f"{'cached' if cached else 'non-cached'}-query{suffix}"
            endpoints.append(
                EndpointDescriptor(
                    id=endpoint_id,
                    url=build_url(base_url, f"/api/{endpoint_id}"),
                    label=f"{'Cached' if cached else 'Non-cached'} pool ({_REGION_LABEL[region]})",
                    description=f"Worker query through the {'caching' if cached else 'non-caching'} "
                    f"connection pool in {_REGION_LABEL[region]}.",
                    region=region,
                    access_type=AccessType.DIRECT_POOLED,
                    cache_mode=cached,
                )
            )
    return endpoints


def proxied_endpoints(
    base_url: str, cache_ttl_seconds: int, region: Region = Region.HELSINKI
) -> list[EndpointDescriptor]:
    return [
        EndpointDescriptor(
            id="rest-cached",
            url=build_url(base_url, "/", cache_ttl_seconds),
            label=f"REST proxy, CDN cached ({cache_ttl_seconds}s)",
            description=f"REST service call with a {cache_ttl_seconds}s CDN cache TTL hint.",
            region=region,
            access_type=AccessType.REST_PROXIED,
            cache_mode=True,
        ),
        EndpointDescriptor(
            id="rest-non-cached",
            url=build_url(base_url, "/"),
            label="REST proxy, no cache",
            description="REST service call answered with Cache-Control: no-store.",
            region=region,
            access_type=AccessType.REST_PROXIED,
            cache_mode=False,
        ),
    ]


def default_registry(config: BenchmarkConfig) -> EndpointRegistry:
    """Build the built-in registry from the endpoint options in config."""
    return EndpointRegistry(
        [
            *pooled_endpoints(config.pooled_base_url),
            *proxied_endpoints(config.proxied_base_url, config.cache_ttl_seconds),
        ]
    )


def resolve_registry(config: BenchmarkConfig) -> EndpointRegistry:
    """Return the registry a session should use: from file or built-in, then region-filtered."""
    if config.endpoints_file is not None:
        registry = EndpointRegistry.from_file(config.endpoints_file)
    else:
        registry = default_registry(config)
    return registry.filter_regions(config.regions)
