"""Conversion between cell text and typed values."""

from __future__ import annotations

import locale
import math
import re
import struct
from enum import Enum
from functools import lru_cache
from typing import Union

from .params import ConverterParams

__all__ = ["NoConverterError", "ValueKind", "Converter"]


class NoConverterError(TypeError):
    """Raised when a value kind has no conversion to or from text."""

    def __init__(self, message: str = "unsupported conversion datatype") -> None:
        super().__init__(message)


class ValueKind(Enum):
    """The datatypes that cell text can be converted to and from."""

    STR = "str"
    INT = "int"
    LONG = "long"
    LONG_LONG = "long long"
    UNSIGNED = "unsigned"
    UNSIGNED_LONG = "unsigned long"
    UNSIGNED_LONG_LONG = "unsigned long long"
    FLOAT = "float"
    DOUBLE = "double"
    LONG_DOUBLE = "long double"
    CHAR = "char"

    @property
    def is_integer(self) -> bool:
        return self in _INTEGER_LAYOUT

    @property
    def is_floating(self) -> bool:
        return self in _FLOAT_KINDS


# (bit width, signed) of each integer kind.
_INTEGER_LAYOUT = {
    ValueKind.INT: (32, True),
    ValueKind.LONG: (64, True),
    ValueKind.LONG_LONG: (64, True),
    ValueKind.UNSIGNED: (32, False),
    ValueKind.UNSIGNED_LONG: (64, False),
    ValueKind.UNSIGNED_LONG_LONG: (64, False),
}

_FLOAT_KINDS = frozenset({ValueKind.FLOAT, ValueKind.DOUBLE, ValueKind.LONG_DOUBLE})

_PYTHON_TYPES = {
    str: ValueKind.STR,
    int: ValueKind.LONG_LONG,
    float: ValueKind.DOUBLE,
}

_FLT_MIN = 1.1754943508222875e-38
_DBL_MIN = 2.2250738585072014e-308

_INTEGER_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")

_CLASSIC_FLOAT = re.compile(
    r"[ \t\n\v\f\r]*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)

KindLike = Union[ValueKind, type]


def _resolve_kind(kind: KindLike) -> ValueKind:
    if isinstance(kind, ValueKind):
        return kind
    try:
        return _PYTHON_TYPES[kind]  # type: ignore[index]
    except (KeyError, TypeError):
        raise NoConverterError() from None


@lru_cache(maxsize=None)
def _float_prefix(point: str) -> re.Pattern[str]:
    p = re.escape(point)
    return re.compile(
        r"[ \t\n\v\f\r]*(?P<sign>[+-]?)(?:"
        r"(?P<hex>0[xX](?:[0-9a-fA-F]+(?:" + p + r"[0-9a-fA-F]*)?|"
        + p + r"[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?)"
        r"|(?P<inf>[iI][nN][fF](?:[iI][nN][iI][tT][yY])?)"
        r"|(?P<nan>[nN][aA][nN](?:\([0-9A-Za-z_]*\))?)"
        r"|(?P<dec>(?:[0-9]+(?:" + p + r"[0-9]*)?|" + p + r"[0-9]+)"
        r"(?:[eE][+-]?[0-9]+)?)"
        r")"
    )


def _wrap_integer(value: int, kind: ValueKind) -> int:
    bits, signed = _INTEGER_LAYOUT[kind]
    wrapped = value % (1 << bits)
    if signed and wrapped >= 1 << (bits - 1):
        wrapped -= 1 << bits
    return wrapped


def _round_float32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _parse_integer(text: str, kind: ValueKind) -> int:
    match = _INTEGER_PREFIX.match(text)
    if match is None:
        raise ValueError(f"no integer conversion: {text!r}")
    sign, digits = match.groups()
    magnitude = int(digits)
    bits, signed = _INTEGER_LAYOUT[kind]
    if signed:
        value = -magnitude if sign == "-" else magnitude
        if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
            raise OverflowError(f"integer out of range: {text!r}")
        return value
    # Unsigned parsing works on the full 64-bit range and wraps negatives.
    if magnitude >= 1 << 64:
        raise OverflowError(f"integer out of range: {text!r}")
    value = (-magnitude if sign == "-" else magnitude) % (1 << 64)
    return value % (1 << bits)


def _has_nonzero_digit(mantissa: str) -> bool:
    return any(ch in "123456789abcdefABCDEF" for ch in mantissa)


def _check_range(value: float, text: str, nonzero: bool, kind: ValueKind) -> float:
    if kind is ValueKind.FLOAT:
        if math.isinf(value):
            raise OverflowError(f"floating-point value out of range: {text!r}")
        value = _round_float32(value)
        smallest = _FLT_MIN
    else:
        smallest = _DBL_MIN
    if math.isinf(value):
        raise OverflowError(f"floating-point value out of range: {text!r}")
    if nonzero and abs(value) < smallest:
        raise OverflowError(f"floating-point value out of range: {text!r}")
    return value


def _parse_float_locale(text: str, kind: ValueKind) -> float:
    point = locale.localeconv()["decimal_point"] or "."
    match = _float_prefix(point).match(text)
    if match is None:
        raise ValueError(f"no floating-point conversion: {text!r}")
    negative = match.group("sign") == "-"
    if match.group("inf") is not None:
        return -math.inf if negative else math.inf
    if match.group("nan") is not None:
        return -math.nan if negative else math.nan
    hex_part = match.group("hex")
    if hex_part is not None:
        mantissa = re.split(r"[pP]", hex_part[2:])[0]
        try:
            value = float.fromhex(hex_part.replace(point, "."))
        except OverflowError:
            raise OverflowError(f"floating-point value out of range: {text!r}") from None
    else:
        dec = match.group("dec")
        mantissa = re.split(r"[eE]", dec)[0]
        value = float(dec.replace(point, "."))
    if negative:
        value = -value
    nonzero = _has_nonzero_digit(mantissa)
    if nonzero and value == 0.0:
        raise OverflowError(f"floating-point value out of range: {text!r}")
    return _check_range(value, text, nonzero, kind)


def _parse_float_classic(text: str, kind: ValueKind) -> float:
    if _CLASSIC_FLOAT.fullmatch(text) is None:
        raise ValueError("istringstream: no conversion")
    value = float(text)
    if kind is ValueKind.FLOAT:
        value = _round_float32(value)
    if math.isinf(value):
        raise ValueError("istringstream: no conversion")
    return value


class Converter:
    """Converts cell text to typed values and typed values to cell text.

    Subclass and override :meth:`to_value` or :meth:`to_str` to customise
    how particular kinds are converted.
    """

    def __init__(self, params: ConverterParams | None = None) -> None:
        self.params = params if params is not None else ConverterParams()

    def to_str(self, value: object, kind: KindLike = ValueKind.STR) -> str:
        """Return the text representation of ``value`` as ``kind``."""
        kind = _resolve_kind(kind)
        if kind is ValueKind.STR:
            return str(value)
        if kind.is_integer:
            return str(_wrap_integer(int(value), kind))  # type: ignore[call-overload]
        if kind is ValueKind.CHAR:
            return chr(value) if isinstance(value, int) else str(value)
        number = float(value)  # type: ignore[arg-type]
        if kind is ValueKind.FLOAT:
            return "%.9g" % _round_float32(number)
        if kind is ValueKind.DOUBLE:
            return "%.17g" % number
        return "%g" % number

    def to_value(self, text: str, kind: KindLike = ValueKind.STR) -> object:
        """Return ``text`` converted to ``kind``.

        Invalid numbers raise :class:`ValueError` and numbers out of range
        raise :class:`OverflowError`, unless the parameters ask for a
        default value instead.
        """
        kind = _resolve_kind(kind)
        if kind is ValueKind.STR:
            return text
        if kind.is_integer:
            try:
                return _parse_integer(text, kind)
            except (ValueError, OverflowError):
                if not self.params.has_default_converter:
                    raise
                return _wrap_integer(int(self.params.default_integer), kind)
        if kind.is_floating:
            try:
                if self.params.numeric_locale:
                    return _parse_float_locale(text, kind)
                return _parse_float_classic(text, kind)
            except (ValueError, OverflowError):
                if not self.params.has_default_converter:
                    raise
                default = float(self.params.default_float)
                return _round_float32(default) if kind is ValueKind.FLOAT else default
        return text[:1] or "\0"