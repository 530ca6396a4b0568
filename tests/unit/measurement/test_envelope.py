# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for response envelope parsing."""

import orjson
import pytest
from hypothesis import given
from hypothesis import strategies as st

from querybench.common.enums import EnvelopeKind
from querybench.measurement import parse_envelope


class TestParseEnvelopeValid:
    def test_success(self):
        parsed = parse_envelope(
            orjson.dumps({"data": {"id": 1}, "timeMs": 12.5, "binding": "HYPERDRIVE", "error": None})
        )
        assert parsed.kind == EnvelopeKind.VALID_SUCCESS
        assert parsed.server_time_ms == 12.5
        assert parsed.binding == "HYPERDRIVE"
        assert parsed.data == {"id": 1}
        assert parsed.error is None

    def test_integer_time_becomes_float(self):
        parsed = parse_envelope(b'{"timeMs": 7, "binding": "DB"}')
        assert parsed.kind == EnvelopeKind.VALID_SUCCESS
        assert parsed.server_time_ms == 7.0
        assert isinstance(parsed.server_time_ms, float)

    def test_accepts_str_body(self):
        assert parse_envelope('{"timeMs": 1.0, "binding": "DB"}').kind == EnvelopeKind.VALID_SUCCESS

    def test_extra_fields_ignored(self):
        parsed = parse_envelope(b'{"timeMs": 1.0, "binding": "DB", "region": "eu"}')
        assert parsed.kind == EnvelopeKind.VALID_SUCCESS

    def test_error_without_timing_is_valid(self):
        """timeMs and binding are optional once the body reports an error."""
        parsed = parse_envelope(b'{"data": null, "error": "relation does not exist"}')
        assert parsed.kind == EnvelopeKind.VALID_ERROR
        assert parsed.error == "relation does not exist"
        assert parsed.server_time_ms is None

    def test_error_with_timing_keeps_values(self):
        parsed = parse_envelope(b'{"timeMs": 3, "binding": "DB", "error": "boom"}')
        assert parsed.kind == EnvelopeKind.VALID_ERROR
        assert parsed.server_time_ms == 3.0
        assert parsed.binding == "DB"


class TestParseEnvelopeInvalid:
    @pytest.mark.parametrize(
        "body,reason",
        [
            (b"<html>502 Bad Gateway</html>", "not valid JSON"),
            (b"", "not valid JSON"),
            (b"[1, 2]", "must be a JSON object, got list"),
            (b"null", "must be a JSON object, got NoneType"),
            (b'{"binding": "DB"}', "missing required field(s): timeMs"),
            (b'{"timeMs": 1.0}', "missing required field(s): binding"),
            (b"{}", "missing required field(s): timeMs, binding"),
            (b'{"timeMs": "12", "binding": "DB"}', "invalid field types: timeMs"),
            (b'{"timeMs": true, "binding": "DB"}', "invalid field types"),
            (b'{"timeMs": 1.0, "binding": 5}', "invalid field types: binding"),
            (b'{"timeMs": 1.0, "binding": "DB", "error": 42}', "invalid field types: error"),
        ],
    )
    def test_rejected(self, body, reason):
        parsed = parse_envelope(body)
        assert parsed.kind == EnvelopeKind.INVALID
        assert reason in parsed.reason
        assert parsed.server_time_ms is None
        assert parsed.binding is None


class TestParseEnvelopeProperties:
    @given(st.binary(max_size=64))
    def test_never_raises(self, body):
        parsed = parse_envelope(body)
        assert parsed.kind in set(EnvelopeKind)

    @given(
        time_ms=st.floats(min_value=0, max_value=1e6, allow_nan=False),
        binding=st.text(min_size=1, max_size=20),
    )
    def test_well_formed_success_is_accepted(self, time_ms, binding):
        parsed = parse_envelope(orjson.dumps({"timeMs": time_ms, "binding": binding, "error": None}))
        assert parsed.kind == EnvelopeKind.VALID_SUCCESS
        assert parsed.server_time_ms == time_ms
        assert parsed.binding == binding
