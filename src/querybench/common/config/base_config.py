# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Any

from pydantic import BaseModel, ConfigDict


class BaseConfig(BaseModel):
    """Base class for all user-facing configuration models."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="forbid",
        validate_assignment=True,
    )

    def to_export_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict, omitting unset optional values."""
        return self.model_dump(mode="json", exclude_none=True)
