# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Validation of the JSON envelope returned by every benchmark target.

Wire contract:

    {
        "data": <row object> | [<row object>] | null,
        "timeMs": <number>,
        "binding": <string>,
        "error": <string> | null
    }

timeMs and binding are required unless error is set.
"""

from dataclasses import dataclass
from typing import Any

import orjson
from pydantic import ConfigDict, Field, StrictFloat, StrictInt, StrictStr, ValidationError

from querybench.common.enums import EnvelopeKind
from querybench.common.models import QueryBenchBaseModel

__all__ = [
    "ParsedEnvelope",
    "ResponseEnvelope",
    "parse_envelope",
]


class ResponseEnvelope(QueryBenchBaseModel):
    """Type-checked view of a response body. Field presence is checked separately."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    data: Any = None
    time_ms: StrictFloat | StrictInt | None = Field(default=None, alias="timeMs")
    binding: StrictStr | None = None
    error: StrictStr | None = None


@dataclass(frozen=True, slots=True)
class ParsedEnvelope:
    """Tagged result of parsing a response body.

    Attributes:
        kind: VALID_SUCCESS, VALID_ERROR or INVALID
        server_time_ms: timeMs from the body, if present
        binding: binding from the body, if present
        error: The body's own error string (VALID_ERROR only)
        data: The body's data payload
        reason: Why the body was rejected (INVALID only)
    """

    kind: EnvelopeKind
    server_time_ms: float | None = None
    binding: str | None = None
    error: str | None = None
    data: Any = None
    reason: str | None = None

    @classmethod
    def invalid(cls, reason: str) -> "ParsedEnvelope":
        return cls(kind=EnvelopeKind.INVALID, reason=reason)


def parse_envelope(body: bytes | str) -> ParsedEnvelope:
    """Parse and validate a response body against the wire contract.

    Never raises; malformed input is reported as an INVALID envelope.
    """
    try:
        raw = orjson.loads(body)
    except orjson.JSONDecodeError as e:
        return ParsedEnvelope.invalid(f"Response body is not valid JSON: {e}")

    if not isinstance(raw, dict):
        return ParsedEnvelope.invalid(
            f"Response body must be a JSON object, got {type(raw).__name__}"
        )

    try:
        envelope = ResponseEnvelope.model_validate(raw)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(loc) for loc in err["loc"]) for err in e.errors()
        )
        return ParsedEnvelope.invalid(f"Response body has invalid field types: {fields}")

    server_time_ms = float(envelope.time_ms) if envelope.time_ms is not None else None

    if envelope.error is not None:
        return ParsedEnvelope(
            kind=EnvelopeKind.VALID_ERROR,
            server_time_ms=server_time_ms,
            binding=envelope.binding,
            error=envelope.error,
            data=envelope.data,
        )

    missing = [
        name
        for name, value in (("timeMs", envelope.time_ms), ("binding", envelope.binding))
        if value is None
    ]
    if missing:
        return ParsedEnvelope.invalid(
            f"Response body is missing required field(s): {', '.join(missing)}"
        )

    return ParsedEnvelope(
        kind=EnvelopeKind.VALID_SUCCESS,
        server_time_ms=server_time_ms,
        binding=envelope.binding,
        data=envelope.data,
    )
