# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Aggregation strategies for benchmark rounds."""

from querybench.orchestrator.aggregation.base import (
    AggregateStat,
    AggregationStrategy,
    Extreme,
    LatencyAggregateResult,
    LatencyExtremes,
)
from querybench.orchestrator.aggregation.latency import LatencyAggregation

__all__ = [
    "AggregateStat",
    "AggregationStrategy",
    "Extreme",
    "LatencyAggregateResult",
    "LatencyAggregation",
    "LatencyExtremes",
]
