# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Dispatch strategies for measuring the endpoints of a round."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence

from querybench.common.enums import DispatchMode
from querybench.registry.models import EndpointDescriptor

logger = logging.getLogger(__name__)

__all__ = [
    "ConcurrentDispatch",
    "DispatchStrategy",
    "MeasureCallback",
    "SerialDispatch",
    "create_dispatch_strategy",
]

MeasureCallback = Callable[[EndpointDescriptor], Awaitable[None]]
"""Measures one endpoint and records its result. Must not raise for endpoint failures."""


class DispatchStrategy(ABC):
    """Base class for dispatch strategies.

    A strategy decides how the (already shuffled) endpoints of one round are
    measured. A session uses the same strategy for every round; the two
    disciplines produce different client times and are not interchangeable.
    """

    @property
    @abstractmethod
    def mode(self) -> DispatchMode:
        """Return the dispatch mode this strategy implements."""
        pass

    @abstractmethod
    async def dispatch(
        self, endpoints: Sequence[EndpointDescriptor], measure_one: MeasureCallback
    ) -> None:
        """Measure every endpoint exactly once.

        Args:
            endpoints: Endpoints in shuffled order
            measure_one: Callback that measures and records a single endpoint
        """
        pass


class SerialDispatch(DispatchStrategy):
    """Measures one endpoint at a time, strictly in shuffled order.

    Completion order equals shuffle order and no two requests compete for the
    client's network at the same time.
    """

    @property
    def mode(self) -> DispatchMode:
        return DispatchMode.SERIAL

    async def dispatch(
        self, endpoints: Sequence[EndpointDescriptor], measure_one: MeasureCallback
    ) -> None:
        for endpoint in endpoints:
            await measure_one(endpoint)


class ConcurrentDispatch(DispatchStrategy):
    """Starts every measurement at once and waits for all of them.

    Results are recorded as each request resolves, so completion order is
    unspecified. If a callback raises, the remaining measurements still finish
    before the first exception is re-raised.
    """

    @property
    def mode(self) -> DispatchMode:
        return DispatchMode.CONCURRENT

    async def dispatch(
        self, endpoints: Sequence[EndpointDescriptor], measure_one: MeasureCallback
    ) -> None:
        outcomes = await asyncio.gather(
            *(measure_one(endpoint) for endpoint in endpoints),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome


def create_dispatch_strategy(mode: DispatchMode) -> DispatchStrategy:
    """Return the strategy for the given dispatch mode."""
    if mode == DispatchMode.SERIAL:
        return SerialDispatch()
    if mode == DispatchMode.CONCURRENT:
        return ConcurrentDispatch()
    raise ValueError(f"Unsupported dispatch mode: {mode!r}")
