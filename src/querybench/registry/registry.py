# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

import orjson
from pydantic import TypeAdapter, ValidationError

from querybench.common.enums import Region
from querybench.common.exceptions import RegistryError
from querybench.registry.models import EndpointDescriptor

logger = logging.getLogger(__name__)

__all__ = [
    "EndpointRegistry",
]

_DESCRIPTOR_LIST = TypeAdapter(list[EndpointDescriptor])


class EndpointRegistry:
    """Immutable collection of benchmark targets keyed by unique id.

    Order is kept only for display; the orchestrator re-shuffles every round.
    """

    def __init__(self, endpoints: Iterable[EndpointDescriptor]) -> None:
        self._endpoints = tuple(endpoints)
        if not self._endpoints:
            raise RegistryError(
                "Endpoint registry is empty. At least one endpoint is required to run a benchmark."
            )

        seen: set[str] = set()
        duplicates: list[str] = []
        for endpoint in self._endpoints:
            if endpoint.id in seen:
                duplicates.append(endpoint.id)
            seen.add(endpoint.id)
        if duplicates:
            raise RegistryError(
                f"Duplicate endpoint ids in registry: {', '.join(sorted(set(duplicates)))}. "
                "Every endpoint id must be unique."
            )

        self._by_id = {endpoint.id: endpoint for endpoint in self._endpoints}

    @classmethod
    def from_file(cls, path: Path) -> "EndpointRegistry":
        """Load a registry from a JSON file containing a list of endpoint descriptors.

        Raises:
            RegistryError: If the file cannot be read, is not valid JSON, or
                does not describe a valid, non-empty, duplicate-free registry
        """
        path = Path(path)
        try:
            raw = orjson.loads(path.read_bytes())
        except OSError as e:
            raise RegistryError(f"Cannot read endpoints file {path}: {e}") from e
        except orjson.JSONDecodeError as e:
            raise RegistryError(f"Endpoints file {path} is not valid JSON: {e}") from e

        try:
            endpoints = _DESCRIPTOR_LIST.validate_python(raw)
        except ValidationError as e:
            raise RegistryError(
                f"Endpoints file {path} does not contain a valid list of endpoints:\n{e}"
            ) from e

        logger.debug(f"Loaded {len(endpoints)} endpoints from {path}")
        return cls(endpoints)

    def filter_regions(self, regions: Iterable[Region] | None) -> "EndpointRegistry":
        """Return a registry restricted to the given regions (all regions if None)."""
        if regions is None:
            return self
        wanted = set(regions)
        return EndpointRegistry(e for e in self._endpoints if e.region in wanted)

    @property
    def ids(self) -> list[str]:
        return [endpoint.id for endpoint in self._endpoints]

    def get(self, endpoint_id: str) -> EndpointDescriptor:
        return self._by_id[endpoint_id]

    def as_list(self) -> list[EndpointDescriptor]:
        return list(self._endpoints)

    def __contains__(self, endpoint_id: object) -> bool:
        return endpoint_id in self._by_id

    def __iter__(self) -> Iterator[EndpointDescriptor]:
        return iter(self._endpoints)

    def __len__(self) -> int:
        return len(self._endpoints)

    def __repr__(self) -> str:
        return f"EndpointRegistry({self.ids!r})"
