# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for single endpoint measurements."""

from typing import Any

from pydantic import ConfigDict, Field, model_validator

from querybench.common.constants import ERROR_BINDING, PENDING_BINDING
from querybench.common.enums import ErrorKind
from querybench.common.models import QueryBenchBaseModel


class MeasurementResult(QueryBenchBaseModel):
    """Outcome of measuring one endpoint in one round.

    A result is either a pending placeholder or terminal. Terminal results are
    never changed; a round replaces the placeholder exactly once.

    Attributes:
        client_time_ms: Wall-clock round trip observed by the client, up to the
            response headers (or up to the failure). None only while pending.
        server_time_ms: Processing time reported inside the response body
        reported_binding: Backend that served the request, or a sentinel
            ("Pending...", "Error")
        error: Error message, if the measurement failed or the body carried one
        error_kind: Where the error came from
        http_status: HTTP status code, if a response was received
        data: Row payload from the response body
        pending: True for the placeholder created when a round starts
    """

    model_config = ConfigDict(frozen=True)

    client_time_ms: float | None = None
    server_time_ms: float | None = None
    reported_binding: str | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    http_status: int | None = None
    data: Any = None
    pending: bool = Field(default=False)

    @model_validator(mode="after")
    def validate_terminal_client_time(self) -> "MeasurementResult":
        """Only the pending placeholder may lack a client time."""
        if not self.pending and self.client_time_ms is None:
            raise ValueError(
                "A completed measurement must have a client time. "
                "Use MeasurementResult.placeholder() for endpoints not yet measured."
            )
        return self

    @classmethod
    def placeholder(cls) -> "MeasurementResult":
        """Create the placeholder shown before an endpoint has been measured."""
        return cls(reported_binding=PENDING_BINDING, pending=True)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        client_time_ms: float,
        http_status: int | None = None,
    ) -> "MeasurementResult":
        """Create an error-shaped result for a failed request."""
        return cls(
            client_time_ms=client_time_ms,
            server_time_ms=None,
            reported_binding=ERROR_BINDING,
            error=message,
            error_kind=kind,
            http_status=http_status,
        )

    @property
    def is_terminal(self) -> bool:
        return not self.pending

    @property
    def ok(self) -> bool:
        """True if terminal and error-free, i.e. eligible for averaging."""
        return not self.pending and self.error is None
