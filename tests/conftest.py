# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for querybench tests."""

import httpx
import orjson
import pytest

from querybench.common.config import BenchmarkConfig
from querybench.common.enums import AccessType, Region
from querybench.measurement import MeasurementResult
from querybench.registry import EndpointDescriptor, EndpointRegistry


def make_endpoint(endpoint_id: str, **kwargs) -> EndpointDescriptor:
    """Create an EndpointDescriptor with sensible defaults for testing."""
    return EndpointDescriptor(
        id=endpoint_id,
        url=kwargs.pop("url", f"https://bench.test/api/{endpoint_id}"),
        label=kwargs.pop("label", endpoint_id.upper()),
        region=kwargs.pop("region", Region.HELSINKI),
        access_type=kwargs.pop("access_type", AccessType.DIRECT_POOLED),
        cache_mode=kwargs.pop("cache_mode", False),
        **kwargs,
    )


def make_result(
    client_time_ms: float = 10.0,
    server_time_ms: float | None = 2.0,
    binding: str = "DB",
    **kwargs,
) -> MeasurementResult:
    """Create a successful MeasurementResult."""
    return MeasurementResult(
        client_time_ms=client_time_ms,
        server_time_ms=server_time_ms,
        reported_binding=binding,
        http_status=200,
        **kwargs,
    )


def envelope_response(
    time_ms: float | None = 5.0, binding: str | None = "DB", error: str | None = None, data=None
) -> httpx.Response:
    """Build a 200 response carrying a wire envelope."""
    body = {"data": data, "error": error}
    if time_ms is not None:
        body["timeMs"] = time_ms
    if binding is not None:
        body["binding"] = binding
    return httpx.Response(200, content=orjson.dumps(body))


@pytest.fixture
def endpoints() -> list[EndpointDescriptor]:
    return [make_endpoint("a"), make_endpoint("b"), make_endpoint("c")]


@pytest.fixture
def registry(endpoints) -> EndpointRegistry:
    return EndpointRegistry(endpoints)


@pytest.fixture
def config(tmp_path) -> BenchmarkConfig:
    """Fast config: three rounds, no delay, fixed seed."""
    return BenchmarkConfig(
        run_count=3,
        inter_round_delay_seconds=0,
        random_seed=42,
        artifact_directory=tmp_path / "artifacts",
    )


@pytest.fixture
def helpers():
    """Expose builder helpers to test modules."""

    class Helpers:
        endpoint = staticmethod(make_endpoint)
        result = staticmethod(make_result)
        envelope_response = staticmethod(envelope_response)

    return Helpers
