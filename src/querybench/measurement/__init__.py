# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from querybench.measurement.envelope import (
    ParsedEnvelope,
    ResponseEnvelope,
    parse_envelope,
)
from querybench.measurement.measure import create_http_client, measure
from querybench.measurement.models import MeasurementResult

__all__ = [
    "MeasurementResult",
    "ParsedEnvelope",
    "ResponseEnvelope",
    "create_http_client",
    "measure",
    "parse_envelope",
]
