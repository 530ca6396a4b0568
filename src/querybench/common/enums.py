# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from enum import Enum


class CaseInsensitiveStrEnum(str, Enum):
    """String enum that accepts values regardless of case (e.g. from the CLI)."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class Region(CaseInsensitiveStrEnum):
    """Deployment regions that benchmark targets are hosted in."""

    HELSINKI = "helsinki"
    US_EAST = "us-east"
    US_WEST = "us-west"


class AccessType(CaseInsensitiveStrEnum):
    """How a benchmark target reaches the database."""

    DIRECT_POOLED = "direct-pooled"
    """Serverless worker using a pooled connection fabric."""

    REST_PROXIED = "rest-proxied"
    """Long-running REST service in front of the database."""


class ErrorKind(CaseInsensitiveStrEnum):
    """Classification of a failed or error-carrying measurement."""

    TRANSPORT = "transport"
    HTTP = "http"
    STRUCTURAL = "structural"
    APPLICATION = "application"


class EnvelopeKind(CaseInsensitiveStrEnum):
    """Outcome of validating a response body against the wire contract."""

    VALID_SUCCESS = "valid_success"
    VALID_ERROR = "valid_error"
    INVALID = "invalid"


class DispatchMode(CaseInsensitiveStrEnum):
    """Execution discipline for the measurements within a round."""

    SERIAL = "serial"
    CONCURRENT = "concurrent"


class BenchmarkState(CaseInsensitiveStrEnum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
