"""Positional field schema of the controller's status frame.

The controller answers a status poll with one tab-separated line. There is
no self-description in the frame: the Nth token always belongs to the Nth
slot below, so the definition order of :class:`StatusTag` *is* the wire
format. A firmware update that reorders fields must be handled here.

Reserved slots carry values whose meaning is unknown. They are kept only so
that the slots after them stay aligned, and are never surfaced in output.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

__all__ = [
    "StatusTag",
    "FieldRole",
    "FieldSpec",
    "STATUS_SCHEMA",
    "position_of",
    "spec_for",
    "record_tags",
]


class StatusTag(Enum):
    """One tag per wire position, in wire order.

    The value of each member is the name of the matching
    :class:`~solartherm.models.StatusRecord` attribute.
    """

    RESERVED_0 = "reserved_0"  # Command echo ("dr")
    FIRMWARE = "firmware"
    BETRIEBSTAG = "betriebstag"  # Operating day counter
    STATUS = "status"
    DC_TRENNER = "dc_trenner"  # DC disconnect
    DC_RELAIS = "dc_relais"
    AC_RELAIS = "ac_relais"
    WASSERTEMP = "wassertemp"
    WASSERTEMP_MIN = "wassertemp_min"
    WASSERTEMP_MAX = "wassertemp_max"
    SOLLTEMP_SOLAR = "solltemp_solar"
    SOLLTEMP_NETZ = "solltemp_netz"
    GERAETETEMP = "geraetetemp"
    ISO_MESSUNG = "iso_messung"  # Insulation resistance measurement
    SOLARSPANNUNG = "solarspannung"
    RESERVED_5 = "reserved_5"
    SOLARSTROM = "solarstrom"
    SOLARLEISTUNG = "solarleistung"
    SOLARENERGIE_HEUTE = "solarenergie_heute"
    SOLARENERGIE_GESAMT = "solarenergie_gesamt"
    NETZENERGIE_HEUTE = "netzenergie_heute"
    RESERVED_6 = "reserved_6"
    RESERVED_7 = "reserved_7"
    RESERVED_8 = "reserved_8"
    RESERVED_9 = "reserved_9"
    RESERVED_10 = "reserved_10"
    RESERVED_11 = "reserved_11"
    RESERVED_12 = "reserved_12"
    SERIENNUMMER = "seriennummer"
    RESERVED_13 = "reserved_13"
    RESERVED_14 = "reserved_14"


class FieldRole(Enum):
    """Semantic role of a schema slot, which selects its converter."""

    TEMPERATURE = "temperature"
    VOLTAGE = "voltage"
    CURRENT = "current"
    POWER = "power"
    ENERGY = "energy"
    COUNTER = "counter"
    FLAG = "flag"
    TEXT = "text"
    RESERVED = "reserved"


class FieldSpec(NamedTuple):
    """A single schema slot.

    Attributes:
        tag: Wire position tag.
        role: Semantic role.
        divisor: Fixed scale factor applied to the parsed wire value.
            ``None`` means the wire value is an unsigned integer that is
            used as-is.
    """

    tag: StatusTag
    role: FieldRole
    divisor: float | None = None

    @property
    def is_reserved(self) -> bool:
        return self.role is FieldRole.RESERVED


def _reserved(tag: StatusTag) -> FieldSpec:
    return FieldSpec(tag, FieldRole.RESERVED)


# Tenths of a degree on the wire
_DECI = 10.0
# W and Wh on the wire, already in natural units; kW and kWh are derived
# by the quantities
_UNIT = 1.0

STATUS_SCHEMA: tuple[FieldSpec, ...] = (
    _reserved(StatusTag.RESERVED_0),
    FieldSpec(StatusTag.FIRMWARE, FieldRole.TEXT),
    FieldSpec(StatusTag.BETRIEBSTAG, FieldRole.COUNTER),
    FieldSpec(StatusTag.STATUS, FieldRole.COUNTER),
    FieldSpec(StatusTag.DC_TRENNER, FieldRole.FLAG),
    FieldSpec(StatusTag.DC_RELAIS, FieldRole.FLAG),
    FieldSpec(StatusTag.AC_RELAIS, FieldRole.FLAG),
    FieldSpec(StatusTag.WASSERTEMP, FieldRole.TEMPERATURE, _DECI),
    FieldSpec(StatusTag.WASSERTEMP_MIN, FieldRole.TEMPERATURE, _DECI),
    FieldSpec(StatusTag.WASSERTEMP_MAX, FieldRole.TEMPERATURE, _DECI),
    FieldSpec(StatusTag.SOLLTEMP_SOLAR, FieldRole.TEMPERATURE, _DECI),
    FieldSpec(StatusTag.SOLLTEMP_NETZ, FieldRole.TEMPERATURE, _DECI),
    # Whole degrees, unsigned
    FieldSpec(StatusTag.GERAETETEMP, FieldRole.TEMPERATURE),
    FieldSpec(StatusTag.ISO_MESSUNG, FieldRole.COUNTER),
    FieldSpec(StatusTag.SOLARSPANNUNG, FieldRole.VOLTAGE, 1.0),
    _reserved(StatusTag.RESERVED_5),
    FieldSpec(StatusTag.SOLARSTROM, FieldRole.CURRENT, 1.0),
    FieldSpec(StatusTag.SOLARLEISTUNG, FieldRole.POWER, _UNIT),
    FieldSpec(StatusTag.SOLARENERGIE_HEUTE, FieldRole.ENERGY, _UNIT),
    FieldSpec(StatusTag.SOLARENERGIE_GESAMT, FieldRole.ENERGY, _UNIT),
    FieldSpec(StatusTag.NETZENERGIE_HEUTE, FieldRole.ENERGY, _UNIT),
    _reserved(StatusTag.RESERVED_6),
    _reserved(StatusTag.RESERVED_7),
    _reserved(StatusTag.RESERVED_8),
    _reserved(StatusTag.RESERVED_9),
    _reserved(StatusTag.RESERVED_10),
    _reserved(StatusTag.RESERVED_11),
    _reserved(StatusTag.RESERVED_12),
    FieldSpec(StatusTag.SERIENNUMMER, FieldRole.TEXT),
    _reserved(StatusTag.RESERVED_13),
    _reserved(StatusTag.RESERVED_14),
)

if tuple(spec.tag for spec in STATUS_SCHEMA) != tuple(StatusTag):
    raise RuntimeError("STATUS_SCHEMA is out of sync with StatusTag order")

_POSITIONS: dict[StatusTag, int] = {
    spec.tag: index for index, spec in enumerate(STATUS_SCHEMA)
}

_RECORD_TAGS: tuple[StatusTag, ...] = tuple(
    spec.tag for spec in STATUS_SCHEMA if not spec.is_reserved
)


def position_of(tag: StatusTag) -> int:
    """Return the zero-based wire position of ``tag``.

    Example:
        >>> position_of(StatusTag.FIRMWARE)
        1
    """
    return _POSITIONS[tag]


def spec_for(tag: StatusTag) -> FieldSpec:
    """Return the :class:`FieldSpec` of ``tag``."""
    return STATUS_SCHEMA[_POSITIONS[tag]]


def record_tags() -> tuple[StatusTag, ...]:
    """Return the non-reserved tags in wire order."""
    return _RECORD_TAGS
