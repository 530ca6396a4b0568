# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""JSON exporter for the full session: config, every round and the aggregate."""

import orjson

from querybench.exporters.base_exporter import BaseFileExporter


class RunsJsonExporter(BaseFileExporter):
    """Exports a session to JSON.

    Output structure:
    {
        "state": "completed",
        "error": null,
        "started_at": "...",
        "finished_at": "...",
        "config": {...},
        "endpoints": [{...}, ...],
        "runs": [{"run_id": 1, "results": {...}}, ...],
        "aggregate": {...} | null
    }

    Partial sessions (aborted runs) are exported as-is, including pending placeholders.
    """

    def get_file_name(self) -> str:
        return "querybench_runs.json"

    def _generate_content(self) -> str:
        session = self._session
        output = {
            "state": str(session.state),
            "error": session.error,
            "started_at": session.started_at.isoformat() if session.started_at else None,
            "finished_at": session.finished_at.isoformat() if session.finished_at else None,
            "config": session.config.to_export_dict(),
            "endpoints": [
                endpoint.model_dump(mode="json") for endpoint in self._registry
            ],
            "runs": [run.model_dump(mode="json") for run in session.runs],
            "aggregate": (
                session.aggregate.model_dump(mode="json")
                if session.aggregate is not None
                else None
            ),
        }
        return orjson.dumps(output, option=orjson.OPT_INDENT_2).decode("utf-8")
