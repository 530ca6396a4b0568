# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from querybench.common.models.base_models import QueryBenchBaseModel

__all__ = [
    "QueryBenchBaseModel",
]
