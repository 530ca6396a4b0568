# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from cyclopts import Group


class Groups:
    """CLI help groups, in display order."""

    BENCHMARK = Group.create_ordered("Benchmark")
    ENDPOINTS = Group.create_ordered("Endpoints")
    OUTPUT = Group.create_ordered("Output")
