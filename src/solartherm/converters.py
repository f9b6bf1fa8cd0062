"""Token converters for the controller's status frame.

Every token arrives as text. These helpers turn a single token into a Python
value according to the slot's declared representation, raising
:class:`~solartherm.exceptions.FieldParseError` with the offending tag and
the literal token when it does not parse. Nothing here defaults a bad value
to zero.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from typing import Any

from .exceptions import FieldParseError
from .quantities import Current, Energy, Power, Temperature, Voltage
from .schema import FieldRole, FieldSpec, StatusTag

_logger = logging.getLogger(__name__)

__all__ = [
    "parse_unsigned",
    "parse_float",
    "parse_flag",
    "parse_text",
    "scale",
    "convert",
]

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
# Plain decimal notation with optional exponent; no underscores, no inf/nan
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_unsigned(tag: StatusTag, raw: str) -> int:
    """Parse an unsigned base-10 integer token.

    Args:
        tag: Slot being converted, used in the error.
        raw: Token text.

    Returns:
        The parsed integer.

    Raises:
        FieldParseError: If the token is not an unsigned integer.

    Example:
        >>> parse_unsigned(StatusTag.STATUS, "12")
        12
    """
    if not _UNSIGNED_RE.fullmatch(raw):
        raise FieldParseError(tag, raw, "unsigned integer")
    return int(raw)


def parse_float(tag: StatusTag, raw: str) -> float:
    """Parse a finite decimal number token.

    Raises:
        FieldParseError: If the token is not a finite decimal number.

    Example:
        >>> parse_float(StatusTag.SOLARSPANNUNG, "189.5")
        189.5
    """
    if not _FLOAT_RE.fullmatch(raw):
        raise FieldParseError(tag, raw, "number")
    value = float(raw)
    if not math.isfinite(value):
        raise FieldParseError(tag, raw, "finite number")
    return value


def parse_flag(tag: StatusTag, raw: str) -> bool:
    """Parse a flag token.

    The device sends flags as unsigned integers: zero is off, any other
    value is on. A non-numeric token is an error, not ``False``.

    Example:
        >>> parse_flag(StatusTag.AC_RELAIS, "0")
        False
        >>> parse_flag(StatusTag.AC_RELAIS, "2")
        True
    """
    if not _UNSIGNED_RE.fullmatch(raw):
        raise FieldParseError(tag, raw, "flag (unsigned integer)")
    return int(raw) != 0


def parse_text(tag: StatusTag, raw: str) -> str:
    """Return the token verbatim. An empty token is a valid, absent value."""
    return raw


def scale(value: float, divisor: float) -> float:
    """Divide ``value`` by the slot's fixed scale factor.

    Example:
        >>> scale(235, 10.0)
        23.5
    """
    return value / divisor


def _temperature(spec: FieldSpec, raw: str) -> Temperature:
    if spec.divisor is None:
        return Temperature(celsius=parse_unsigned(spec.tag, raw))
    return Temperature(
        celsius=scale(parse_float(spec.tag, raw), spec.divisor)
    )


def _scaled(spec: FieldSpec, raw: str) -> float:
    return scale(parse_float(spec.tag, raw), spec.divisor or 1.0)


def _voltage(spec: FieldSpec, raw: str) -> Voltage:
    return Voltage(volts=_scaled(spec, raw))


def _current(spec: FieldSpec, raw: str) -> Current:
    return Current(amperes=_scaled(spec, raw))


def _power(spec: FieldSpec, raw: str) -> Power:
    return Power(watts=_scaled(spec, raw))


def _energy(spec: FieldSpec, raw: str) -> Energy:
    return Energy(watt_hours=_scaled(spec, raw))


_CONVERTERS: dict[FieldRole, Callable[[FieldSpec, str], Any]] = {
    FieldRole.TEMPERATURE: _temperature,
    FieldRole.VOLTAGE: _voltage,
    FieldRole.CURRENT: _current,
    FieldRole.POWER: _power,
    FieldRole.ENERGY: _energy,
    FieldRole.COUNTER: lambda spec, raw: parse_unsigned(spec.tag, raw),
    FieldRole.FLAG: lambda spec, raw: parse_flag(spec.tag, raw),
    FieldRole.TEXT: lambda spec, raw: parse_text(spec.tag, raw),
}


def convert(spec: FieldSpec, raw: str) -> Any:
    """Convert one bound token according to its schema slot.

    Args:
        spec: Schema slot of the token.
        raw: Token text.

    Returns:
        The typed value: a quantity, ``int``, ``bool`` or ``str``.

    Raises:
        FieldParseError: If the token does not parse.
        ValueError: If ``spec`` is a reserved slot.
    """
    if spec.is_reserved:
        raise ValueError(f"Reserved slot {spec.tag.value} has no converter")
    value = _CONVERTERS[spec.role](spec, raw)
    _logger.debug("Converted %s: %r -> %r", spec.tag.value, raw, value)
    return value
