# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Single-request latency measurement."""

import logging
import time

import httpx

from querybench.common.constants import NANOS_PER_MILLIS, NO_CACHE_HEADERS
from querybench.common.enums import EnvelopeKind, ErrorKind
from querybench.common.environment import Environment
from querybench.measurement.envelope import parse_envelope
from querybench.measurement.models import MeasurementResult

logger = logging.getLogger(__name__)

__all__ = [
    "create_http_client",
    "measure",
]


def create_http_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create the HTTP client shared by all measurements of a session.

    Timeouts and connection limits come from Environment.HTTP. The orchestrator
    adds no timeout of its own.

    Args:
        transport: Optional transport override (e.g. httpx.MockTransport in tests)
    """
    return httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(Environment.HTTP.TIMEOUT),
        limits=httpx.Limits(max_connections=Environment.HTTP.CONNECTION_LIMIT),
        headers={"User-Agent": Environment.HTTP.USER_AGENT},
        verify=Environment.HTTP.VERIFY_TLS,
        follow_redirects=True,
    )


def _elapsed_ms(start_ns: int) -> float:
    return (time.perf_counter_ns() - start_ns) / NANOS_PER_MILLIS


def _truncate(text: str) -> str:
    limit = Environment.HTTP.ERROR_BODY_MAX_CHARS
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


async def measure(client: httpx.AsyncClient, url: str) -> MeasurementResult:
    """Issue one GET to url and time it.

    Client time runs from just before the request is sent until the response
    headers arrive. It includes network transit and all server-side work and is
    never adjusted by the time the server reports in the body.

    Never raises for per-request problems: transport failures, non-2xx statuses
    and malformed bodies all come back as error-shaped MeasurementResults.

    Args:
        client: Shared HTTP client
        url: Request URL, including any cache hints

    Returns:
        Terminal MeasurementResult
    """
    start_ns = time.perf_counter_ns()
    client_time_ms: float | None = None
    try:
        async with client.stream("GET", url, headers=NO_CACHE_HEADERS) as response:
            client_time_ms = _elapsed_ms(start_ns)
            body = await response.aread()
    except Exception as e:
        elapsed = client_time_ms if client_time_ms is not None else _elapsed_ms(start_ns)
        message = f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
        logger.debug(f"Transport error for {url}: {message}")
        return MeasurementResult.failure(ErrorKind.TRANSPORT, message, elapsed)

    if not response.is_success:
        text = body.decode(response.encoding or "utf-8", errors="replace")
        message = f"HTTP {response.status_code}: {_truncate(text)}"
        logger.debug(f"HTTP error for {url}: {message}")
        return MeasurementResult.failure(
            ErrorKind.HTTP, message, client_time_ms, http_status=response.status_code
        )

    envelope = parse_envelope(body)
    if envelope.kind == EnvelopeKind.INVALID:
        logger.debug(f"Invalid response body from {url}: {envelope.reason}")
        return MeasurementResult.failure(
            ErrorKind.STRUCTURAL,
            envelope.reason,
            client_time_ms,
            http_status=response.status_code,
        )

    return MeasurementResult(
        client_time_ms=client_time_ms,
        server_time_ms=envelope.server_time_ms,
        reported_binding=envelope.binding,
        error=envelope.error,
        error_kind=ErrorKind.APPLICATION if envelope.error is not None else None,
        http_status=response.status_code,
        data=envelope.data,
    )
