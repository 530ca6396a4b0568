# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

NANOS_PER_MILLIS = 1_000_000

# Sentinel bindings shown in place of a backend identifier.
PENDING_BINDING = "Pending..."
ERROR_BINDING = "Error"

# Round 1 is always a warm-up and never contributes to averages.
WARMUP_RUN_ID = 1

# Asks browser and intermediate caches to revalidate. Edge caches may still answer.
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

CACHE_TTL_PARAM = "cacheTtl"
