"""Tests for _casters.py — primitive kind parsers, formatters and resolve_kind."""

from datetime import timedelta
from typing import Annotated, Optional

import pytest

from flagconf._casters import (
    PRIMITIVE_KINDS,
    _format_duration,
    _format_float,
    _parse_bool,
    _parse_duration,
    _parse_float,
    _parse_int,
    _parse_uint,
    resolve_kind,
)
from flagconf._types import Conf, Int64, Kind, Uint, Uint64


class TestParseBool:
    @pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
    def test_truthy_strings(self, value):
        assert _parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False"])
    def test_falsy_strings(self, value):
        assert _parse_bool(value) is False

    @pytest.mark.parametrize("value", ["yes", "", "tRuE", " true"])
    def test_invalid_string_raises(self, value):
        with pytest.raises(ValueError, match="parse error"):
            _parse_bool(value)


class TestParseInt:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1", 1),
            ("-42", -42),
            ("+7", 7),
            ("0x1F", 31),
            ("0o17", 15),
            ("0b101", 5),
            ("010", 8),
            ("1_000", 1000),
            ("0", 0),
        ],
    )
    def test_valid(self, value, expected):
        assert _parse_int(value) == expected

    @pytest.mark.parametrize("value", ["notint", "", " 1", "1.0", "08", "--1", "0x"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="parse error"):
            _parse_int(value)

    def test_out_of_range(self):
        assert _parse_int(str(2**63 - 1)) == 2**63 - 1
        with pytest.raises(ValueError, match="value out of range"):
            _parse_int(str(2**63))


class TestParseUint:
    def test_valid(self):
        assert _parse_uint("18446744073709551615") == 2**64 - 1

    def test_sign_rejected(self):
        with pytest.raises(ValueError, match="parse error"):
            _parse_uint("-1")
        with pytest.raises(ValueError, match="parse error"):
            _parse_uint("+1")

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="value out of range"):
            _parse_uint(str(2**64))


class TestFloat:
    @pytest.mark.parametrize(
        "value, expected",
        [("1.0", 1.0), ("1e3", 1000.0), ("-2.5", -2.5), ("0x1p-2", 0.25), ("inf", float("inf"))],
    )
    def test_parse(self, value, expected):
        assert _parse_float(value) == expected

    def test_parse_invalid(self):
        with pytest.raises(ValueError, match="parse error"):
            _parse_float("one")

    @pytest.mark.parametrize("value", ["1e400", "0x1p2000", "-0x1p2000"])
    def test_parse_overflow(self, value):
        with pytest.raises(ValueError, match="value out of range"):
            _parse_float(value)

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.0, "0"),
            (1.0, "1"),
            (1.5, "1.5"),
            (-2.25, "-2.25"),
            (100.0, "100"),
            (123456.0, "123456"),
            (1e6, "1e+06"),
            (0.0001, "0.0001"),
            (0.00001, "1e-05"),
            (float("inf"), "+Inf"),
        ],
    )
    def test_format(self, value, expected):
        assert _format_float(value) == expected


class TestDuration:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("0", timedelta(0)),
            ("1m", timedelta(minutes=1)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("1.5s", timedelta(seconds=1.5)),
            (".5s", timedelta(milliseconds=500)),
            ("300ms", timedelta(milliseconds=300)),
            ("10us", timedelta(microseconds=10)),
            ("10µs", timedelta(microseconds=10)),
            ("-1.5h", -timedelta(hours=1.5)),
            ("+2h45m", timedelta(hours=2, minutes=45)),
            ("1000ns", timedelta(microseconds=1)),
        ],
    )
    def test_parse(self, value, expected):
        assert _parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "1", "1x", "h", ".s", "1h-5m", "-", "1e3s"])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError, match="parse error"):
            _parse_duration(value)

    @pytest.mark.parametrize(
        "value, expected",
        [
            (timedelta(0), "0s"),
            (timedelta(minutes=1), "1m0s"),
            (timedelta(hours=1), "1h0m0s"),
            (timedelta(seconds=90), "1m30s"),
            (timedelta(seconds=1.5), "1.5s"),
            (timedelta(milliseconds=300), "300ms"),
            (timedelta(microseconds=10), "10µs"),
            (-timedelta(minutes=2), "-2m0s"),
            (timedelta(days=1), "24h0m0s"),
        ],
    )
    def test_format(self, value, expected):
        assert _format_duration(value) == expected


class TestResolveKind:
    @pytest.mark.parametrize(
        "annotation, kind",
        [
            (bool, Kind.BOOL),
            (int, Kind.INT),
            (float, Kind.FLOAT64),
            (str, Kind.STRING),
            (timedelta, Kind.DURATION),
        ],
    )
    def test_builtin_annotations(self, annotation, kind):
        assert resolve_kind(annotation).kind is kind

    @pytest.mark.parametrize("alias, kind", [(Int64, Kind.INT64), (Uint, Kind.UINT), (Uint64, Kind.UINT64)])
    def test_width_aliases(self, alias, kind):
        metadata = alias.__metadata__ + (Conf("x"),)
        assert resolve_kind(int, metadata).kind is kind

    @pytest.mark.parametrize("annotation", [list[int], dict[str, str], Optional[str], bytes, object])
    def test_unsupported(self, annotation):
        assert resolve_kind(annotation) is None

    def test_every_kind_has_table_entry(self):
        assert set(PRIMITIVE_KINDS) == set(Kind)

    def test_zero_values(self):
        assert PRIMITIVE_KINDS[Kind.STRING].zero == ""
        assert PRIMITIVE_KINDS[Kind.DURATION].zero == timedelta(0)
        assert PRIMITIVE_KINDS[Kind.BOOL].zero is False

    def test_unstripped_annotated_is_unsupported(self):
        assert resolve_kind(Annotated[int, Conf("x")]) is None
