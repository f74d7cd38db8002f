"""
dashopt type conversion and range validation for option-arguments.

Overview
- Type: the scalar conversion targets an option may request. STR means “no
  conversion” (the raw text is kept); every other member is numeric and carries
  its native domain (LP64 sizes; CHAR is a signed 8-bit integer).
- convert(text, type): parse option-argument text into the requested type.
- check_bounds(value, type, min, max): compare a converted value against the
  configured bounds (string length for STR, numeric value otherwise).

Parsing rules
- Integers: optional sign, then decimal digits or a 0x/0o/0b prefixed literal.
  Leading zeros are decimal ("010" is ten). Underscores and whitespace are
  rejected.
- Floats: optional sign, decimal/scientific notation, "inf"/"infinity", "nan".
  FLT values are rounded to single precision first, so "3.4028235e38" is
  FLT_MAX. DBL and LDBL are Python floats: LDBL is limited to the range and
  precision of a double, so "1e400" is rejected for both.
- Empty text and trailing garbage always fail with ConversionError, and so does
  a value outside the native domain of the type.

Comparisons between ints and floats are exact in Python, so a single pair of
bounds covers the whole domain of every numeric type without precision loss.
"""
import math
import re
import struct
import sys
from enum import IntEnum

from .faults import ConversionError, RangeError, FaultCode
from .utils import Unset


class Type(IntEnum):
    STR = 0
    CHAR = 1
    SCHAR = 2
    UCHAR = 3
    SHRT = 4
    USHRT = 5
    INT = 6
    UINT = 7
    LONG = 8
    ULONG = 9
    LLONG = 10
    ULLONG = 11
    FLT = 12
    DBL = 13
    LDBL = 14

    @property
    def numeric(self):
        return self is not Type.STR

    @property
    def integral(self):
        return Type.CHAR <= self <= Type.ULLONG

    @property
    def domain(self):
        """
        (low, high) inclusive range of values representable by this type.
        """
        return _DOMAINS[self]

    @property
    def label(self):
        return _LABELS[self]

    @property
    def noun(self):
        """
        Label with its indefinite article ("an 8-bit integer", "a string").
        """
        return ("an " if self.label[0] in "aeiou8" else "a ") + self.label


_FLT_MAX = 3.4028234663852886e+38

_DOMAINS = {
    Type.STR: (-math.inf, math.inf),
    Type.CHAR: (-2 ** 7, 2 ** 7 - 1),
    Type.SCHAR: (-2 ** 7, 2 ** 7 - 1),
    Type.UCHAR: (0, 2 ** 8 - 1),
    Type.SHRT: (-2 ** 15, 2 ** 15 - 1),
    Type.USHRT: (0, 2 ** 16 - 1),
    Type.INT: (-2 ** 31, 2 ** 31 - 1),
    Type.UINT: (0, 2 ** 32 - 1),
    Type.LONG: (-2 ** 63, 2 ** 63 - 1),
    Type.ULONG: (0, 2 ** 64 - 1),
    Type.LLONG: (-2 ** 63, 2 ** 63 - 1),
    Type.ULLONG: (0, 2 ** 64 - 1),
    Type.FLT: (-_FLT_MAX, _FLT_MAX),
    Type.DBL: (-sys.float_info.max, sys.float_info.max),
    Type.LDBL: (-sys.float_info.max, sys.float_info.max),
}

_LABELS = {
    Type.STR: "string",
    Type.CHAR: "8-bit integer",
    Type.SCHAR: "8-bit signed integer",
    Type.UCHAR: "8-bit unsigned integer",
    Type.SHRT: "16-bit signed integer",
    Type.USHRT: "16-bit unsigned integer",
    Type.INT: "32-bit signed integer",
    Type.UINT: "32-bit unsigned integer",
    Type.LONG: "64-bit signed integer",
    Type.ULONG: "64-bit unsigned integer",
    Type.LLONG: "64-bit signed integer",
    Type.ULLONG: "64-bit unsigned integer",
    Type.FLT: "single-precision number",
    Type.DBL: "double-precision number",
    Type.LDBL: "long double-precision number",
}

_INTEGER = re.compile(r"([+-]?)(?:0([xob])([0-9a-f]+)|([0-9]+))", re.IGNORECASE)
_FLOAT = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?|inf(?:inity)?|nan)", re.IGNORECASE)


def _parse_integer(text):
    if not (match := _INTEGER.fullmatch(text)):
        raise ValueError(text)
    sign, prefix, digits, decimal = match.groups()
    if decimal is not None:
        value = int(decimal, 10)
    else:
        # "0b12" passes the pattern; int() rejects the digits for the radix
        value = int(digits, {"x": 16, "o": 8, "b": 2}[prefix.lower()])
    return -value if sign == "-" else value


def _parse_float(text):
    if not _FLOAT.fullmatch(text):
        raise ValueError(text)
    return float(text)


def _round_single(value):
    # rounds like strtof; finite values past FLT_MAX after rounding become inf
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def convert(text, type=Type.STR, /):
    """
    Convert option-argument text to the requested type.

    Returns the text unchanged for Type.STR. Raises ConversionError when the
    text is empty, is not fully consumed by the numeric parse, or denotes a
    value the type cannot represent.
    """
    if not isinstance(text, str):
        raise TypeError("convert() first argument must be a string")
    type = Type(type)

    if type is Type.STR:
        return text

    if not text:
        raise ConversionError(
            "empty value cannot be converted to %s" % type.noun,
            title="conversion error",
            code=FaultCode.CONVERSION_FAILED,
            hint="provide %s" % type.noun,
        )

    try:
        value = _parse_integer(text) if type.integral else _parse_float(text)
    except ValueError:
        raise ConversionError(
            "value %r is not a valid %s" % (text, type.label),
            title="conversion error",
            code=FaultCode.CONVERSION_FAILED,
            hint="use %s (for example: %s)" % (type.noun, "42" if type.integral else "0.5"),
        ) from None

    low, high = type.domain
    # an explicit "inf" is accepted; a literal that overflows to inf is not
    explicit = math.isnan(value) or (math.isinf(value) and "inf" in text.lower())
    if type is Type.FLT and not explicit:
        value = _round_single(value)
    if not explicit and not low <= value <= high:
        raise ConversionError(
            "value %r does not fit in %s" % (text, type.noun),
            title="conversion error",
            code=FaultCode.CONVERSION_FAILED,
            hint="use a value between %s and %s" % (low, high),
        )

    return value


def check_bounds(value, type=Type.STR, /, min=Unset, max=Unset):
    """
    Validate a converted value against the configured bounds.

    For Type.STR the bounds apply to the string length; for numeric types they
    apply to the value itself. Unset bounds are not checked. Returns the value
    unchanged, or raises RangeError.
    """
    type = Type(type)
    if type is Type.STR:
        measure, unit = len(value), " characters"
    else:
        measure, unit = value, ""

    if min is not Unset and measure < min:
        message = ("value %r is shorter than %s%s" if type is Type.STR else "value %r is below the minimum of %s%s")
        raise RangeError(
            message % (value, min, unit),
            title="value out of range",
            code=FaultCode.OUT_OF_RANGE,
            hint=_describe(min, max, unit),
        )
    if max is not Unset and measure > max:
        message = ("value %r is longer than %s%s" if type is Type.STR else "value %r is above the maximum of %s%s")
        raise RangeError(
            message % (value, max, unit),
            title="value out of range",
            code=FaultCode.OUT_OF_RANGE,
            hint=_describe(min, max, unit),
        )
    return value


def _describe(min, max, unit):
    if min is not Unset and max is not Unset:
        return "use a value between %s and %s%s" % (min, max, unit)
    if min is not Unset:
        return "use a value of at least %s%s" % (min, unit)
    return "use a value of at most %s%s" % (max, unit)


__all__ = (
    "Type",
    "convert",
    "check_bounds",
)
