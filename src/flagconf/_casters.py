"""Parse and format helpers for the primitive option kinds.

Every supported kind has one ``PrimitiveKind`` entry in ``PRIMITIVE_KINDS``
carrying its parser, formatter and zero value. Parsers accept the same syntax
as Go's ``flag`` package and raise ``ValueError("parse error")`` or
``ValueError("value out of range")``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Any, Callable, Iterable

from ._types import INT64_MAX, INT64_MIN, UINT64_MAX, Kind

_PARSE_ERROR = "parse error"
_RANGE_ERROR = "value out of range"


# ---------------------------------------------------------------------------
# Bool
# ---------------------------------------------------------------------------

_TRUTHY = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSY = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _parse_bool(value: str) -> bool:
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(_PARSE_ERROR)


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------


def _parse_integer(value: str, *, signed: bool, low: int, high: int) -> int:
    """Parse with base prefixes (``0x``, ``0o``, ``0b``, leading ``0`` octal)."""
    if not value or value != value.strip():
        raise ValueError(_PARSE_ERROR)

    body = value
    negative = False
    if body[0] in "+-":
        if not signed:
            raise ValueError(_PARSE_ERROR)
        negative = body[0] == "-"
        body = body[1:]
    if not body or body[0] in "+-":
        raise ValueError(_PARSE_ERROR)

    try:
        if len(body) > 1 and body[0] == "0" and (body[1].isdigit() or body[1] == "_"):
            number = int(body, 8)
        else:
            number = int(body, 0)
    except ValueError:
        raise ValueError(_PARSE_ERROR) from None

    if negative:
        number = -number
    if not low <= number <= high:
        raise ValueError(_RANGE_ERROR)
    return number


def _parse_int(value: str) -> int:
    return _parse_integer(value, signed=True, low=INT64_MIN, high=INT64_MAX)


def _parse_uint(value: str) -> int:
    return _parse_integer(value, signed=False, low=0, high=UINT64_MAX)


# ---------------------------------------------------------------------------
# Float
# ---------------------------------------------------------------------------


def _parse_float(value: str) -> float:
    if not value or value != value.strip():
        raise ValueError(_PARSE_ERROR)
    try:
        if value.lstrip("+-")[:2].lower() == "0x":
            number = float.fromhex(value)
        else:
            number = float(value)
    except OverflowError:  # float.fromhex past the float range
        raise ValueError(_RANGE_ERROR) from None
    except ValueError:
        raise ValueError(_PARSE_ERROR) from None
    if math.isinf(number) and "inf" not in value.lower():
        raise ValueError(_RANGE_ERROR)
    return number


def _format_float(value: float) -> str:
    """Shortest representation, switching to exponent form like ``%g``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    point = len(digits) + exponent
    prefix = "-" if sign else ""

    exp10 = point - 1
    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'-' if exp10 < 0 else '+'}{abs(exp10):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{prefix}{digits}{'0' * (point - len(digits))}"
    return f"{prefix}{digits[:point]}.{digits[point:]}"


# ---------------------------------------------------------------------------
# Duration
# ---------------------------------------------------------------------------

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE

_UNITS = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "µs": _MICROSECOND,  # micro sign
    "μs": _MICROSECOND,  # greek mu
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
}

_DURATION_PART = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def _parse_duration(value: str) -> timedelta:
    """Parse ``1h30m``, ``1.5s``, ``-300ms`` and friends."""
    text = value
    negative = False
    if text[:1] in ("-", "+"):
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(_PARSE_ERROR)

    total = 0
    position = 0
    while position < len(text):
        match = _DURATION_PART.match(text, position)
        whole, fraction, unit = match.group(1), match.group(2), match.group(3)
        if not whole and not fraction:
            raise ValueError(_PARSE_ERROR)
        scale = _UNITS.get(unit)
        if scale is None:
            raise ValueError(_PARSE_ERROR)
        total += int(whole or "0") * scale
        if fraction:
            total += int(fraction) * scale // 10 ** len(fraction)
        if total > INT64_MAX:
            raise ValueError(_PARSE_ERROR)
        position = match.end()

    micros = (total + 500) // 1000
    return -timedelta(microseconds=micros) if negative else timedelta(microseconds=micros)


def _to_nanoseconds(value: timedelta) -> int:
    return ((value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds) * 1000


def _fraction(number: int, precision: int) -> str:
    whole, rest = divmod(number, 10**precision)
    digits = f"{rest:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def _format_duration(value: timedelta) -> str:
    """Render like Go's ``Duration.String``: ``0s``, ``1.5s``, ``1h0m0s``."""
    nanos = _to_nanoseconds(value)
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos < _SECOND:
        if nanos < _MICROSECOND:
            return f"{sign}{nanos}ns"
        if nanos < _MILLISECOND:
            return f"{sign}{_fraction(nanos, 3)}µs"
        return f"{sign}{_fraction(nanos, 6)}ms"

    seconds, rest = divmod(nanos, _SECOND)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    text = f"{_fraction(seconds * _SECOND + rest, 9)}s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return sign + text


# ---------------------------------------------------------------------------
# Kind table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PrimitiveKind:
    """How one primitive kind is parsed, rendered and zeroed."""

    kind: Kind
    parse: Callable[[str], Any]
    format: Callable[[Any], str]
    zero: Any

    @property
    def metavar(self) -> str:
        return self.kind.value


PRIMITIVE_KINDS: dict[Kind, PrimitiveKind] = {
    Kind.BOOL: PrimitiveKind(Kind.BOOL, _parse_bool, _format_bool, False),
    Kind.INT: PrimitiveKind(Kind.INT, _parse_int, str, 0),
    Kind.INT64: PrimitiveKind(Kind.INT64, _parse_int, str, 0),
    Kind.UINT: PrimitiveKind(Kind.UINT, _parse_uint, str, 0),
    Kind.UINT64: PrimitiveKind(Kind.UINT64, _parse_uint, str, 0),
    Kind.FLOAT64: PrimitiveKind(Kind.FLOAT64, _parse_float, _format_float, 0.0),
    Kind.STRING: PrimitiveKind(Kind.STRING, str, str, ""),
    Kind.DURATION: PrimitiveKind(Kind.DURATION, _parse_duration, _format_duration, timedelta(0)),
}

_ANNOTATION_KINDS: dict[Any, Kind] = {
    bool: Kind.BOOL,
    int: Kind.INT,
    float: Kind.FLOAT64,
    str: Kind.STRING,
    timedelta: Kind.DURATION,
}

_INT_WIDTHS = frozenset({Kind.INT64, Kind.UINT, Kind.UINT64})


def resolve_kind(annotation: Any, metadata: Iterable[Any] = ()) -> PrimitiveKind | None:
    """Map a field annotation to its primitive kind, or ``None`` if unsupported.

    ``int`` fields pick up a width from a ``Kind`` marker in their metadata
    (see ``Int64``, ``Uint``, ``Uint64``).
    """
    try:
        kind = _ANNOTATION_KINDS.get(annotation)
    except TypeError:  # unhashable annotation
        return None
    if kind is None:
        return None
    if kind is Kind.INT:
        for item in metadata:
            if isinstance(item, Kind) and item in _INT_WIDTHS:
                kind = item
                break
    return PRIMITIVE_KINDS[kind]
