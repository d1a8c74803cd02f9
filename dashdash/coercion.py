"""
Dashdash type coercion: raw string tokens → typed scalars.

Each supported kind has one strict converter; the parser picks it through the
declaration's Default.kind (never through the token's shape). Converters raise
ValueError with a short reason; the binder wraps that into an
UncastableValueError naming the declaration and the token.

Accepted literals
- bool:      1 t T TRUE true True / 0 f F FALSE false False
- string:    anything
- int:       [+-]?[0-9]+ within the signed 64-bit range
- float64:   [+-]?(d+[.d*] | .d+)([eE][+-]?d+)?, finite
- timestamp: YYYY-MM-DD hh:mm (24h, zero-padded)
- duration:  [+-]?(<number><unit>)+ or 0, units ns us µs μs ms s m h (e.g. 1h30m, 1.5s, 300ms)
"""
import math
import re
from datetime import datetime, timedelta
from decimal import Decimal

from .kinds import Kind

_BOOLEANS = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}

_INT = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -2 ** 63
_INT_MAX = 2 ** 63 - 1

_FLOAT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_TIMESTAMP = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

_DURATION = re.compile(r"[+-]?(?:(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:ns|us|µs|μs|ms|s|m|h))+|0)")
_DURATION_PART = re.compile(r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}


def _to_bool(token):
    try:
        return _BOOLEANS[token]
    except KeyError:
        raise ValueError("not a boolean literal") from None


def _to_string(token):
    return token


def _to_int(token):
    if not _INT.fullmatch(token):
        raise ValueError("not a base-10 integer")
    if not _INT_MIN <= (value := int(token)) <= _INT_MAX:
        raise ValueError("integer out of range")
    return value


def _to_float(token):
    if not _FLOAT.fullmatch(token):
        raise ValueError("not a decimal number")
    if math.isinf(value := float(token)):
        raise ValueError("number out of range")
    return value


def _to_timestamp(token):
    if not _TIMESTAMP.fullmatch(token):
        raise ValueError("not a 'YYYY-MM-DD hh:mm' timestamp")
    # strptime still rejects impossible dates such as 2021-02-30
    return datetime.strptime(token, TIMESTAMP_FORMAT)


def _to_duration(token):
    """
    parse a unit-suffixed duration literal into a timedelta.

    the sum is computed in nanoseconds with decimals (no float drift), limited to
    the signed 64-bit nanosecond range, then rounded to timedelta's microsecond
    resolution.
    """
    if not _DURATION.fullmatch(token):
        raise ValueError("not a duration literal")

    sign = -1 if token.startswith("-") else 1
    nanoseconds = sum(
        (Decimal(number) * _DURATION_UNITS[unit] for number, unit in _DURATION_PART.findall(token)),
        Decimal(0),
    )
    if not _INT_MIN <= (nanoseconds := sign * nanoseconds) <= _INT_MAX:
        raise ValueError("duration out of range")

    microseconds = (nanoseconds / 1_000).to_integral_value()
    return timedelta(microseconds=int(microseconds))


_CONVERTERS = {
    Kind.BOOL: _to_bool,
    Kind.STRING: _to_string,
    Kind.INT: _to_int,
    Kind.FLOAT: _to_float,
    Kind.TIMESTAMP: _to_timestamp,
    Kind.DURATION: _to_duration,
}


def coerce(token, default, /):
    """
    convert a raw token into the kind fixed by a declaration's default.

    parameters
    - token: str, the raw value (already split from any 'name=' prefix).
    - default: Default | Kind, the declaration's default (its kind is used; a
      choice set uses the kind shared by its elements).

    raises
    - ValueError: when the token is not a valid literal of that kind.
    """
    kind = default if isinstance(default, Kind) else default.kind
    return _CONVERTERS[kind](str(token))


__all__ = (
    "TIMESTAMP_FORMAT",
    "coerce",
)
