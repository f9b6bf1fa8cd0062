"""Data models for decoded controller status.

:class:`StatusRecord` holds one fully decoded status frame. It is frozen:
a record is built once per poll by :func:`solartherm.decoder.decode_frame`
and never mutated afterwards.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .quantities import Current, Energy, Power, Temperature, Voltage

_logger = logging.getLogger(__name__)

__all__ = ["SolarthermBaseModel", "StatusRecord"]


class SolarthermBaseModel(BaseModel):
    """Base model for all solartherm models."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class StatusRecord(SolarthermBaseModel):
    """Decoded status of the controller."""

    # Water
    wassertemp: Temperature = Field(description="Current water temperature")
    wassertemp_min: Temperature = Field(
        description="Minimum water temperature"
    )
    wassertemp_max: Temperature = Field(
        description="Maximum water temperature"
    )
    solltemp_solar: Temperature = Field(
        description="Target water temperature when heating from solar"
    )
    solltemp_netz: Temperature = Field(
        description="Target water temperature when heating from the grid"
    )

    # Solar, current values
    solarspannung: Voltage = Field(description="PV input voltage")
    solarstrom: Current = Field(description="PV input current")
    solarleistung: Power = Field(description="PV input power")

    # History
    solarenergie_heute: Energy = Field(
        description="Solar energy harvested today"
    )
    solarenergie_gesamt: Energy = Field(
        description="Solar energy harvested over the device lifetime"
    )
    netzenergie_heute: Energy = Field(
        description="Energy drawn from the grid today"
    )

    # State
    iso_messung: int = Field(
        ge=0, description="Insulation resistance measurement"
    )
    geraetetemp: Temperature = Field(description="Device temperature")
    status: int = Field(ge=0, description="Device status code")
    dc_trenner: bool = Field(description="DC disconnect closed")
    dc_relais: bool = Field(description="DC relay closed")
    ac_relais: bool = Field(description="AC relay closed")

    # Misc
    betriebstag: int = Field(ge=0, description="Operating day counter")
    firmware: str = Field(description="Firmware version, empty if unknown")
    seriennummer: str = Field(description="Serial number, empty if unknown")

    def display_items(self) -> list[tuple[str, str, str]]:
        """Return ``(category, label, value)`` rows for presentation.

        The rows come in a fixed order with every quantity rendered at its
        fixed precision, so templates can substitute them positionally.
        """
        return [
            ("WATER", "Water Temperature", self.wassertemp.format()),
            ("WATER", "Water Temperature Min", self.wassertemp_min.format()),
            ("WATER", "Water Temperature Max", self.wassertemp_max.format()),
            ("WATER", "Target Solar", self.solltemp_solar.format()),
            ("WATER", "Target Grid", self.solltemp_netz.format()),
            ("SOLAR", "Voltage", self.solarspannung.format()),
            ("SOLAR", "Current", self.solarstrom.format()),
            ("SOLAR", "Power", self.solarleistung.format_watts()),
            ("SOLAR", "Power (kW)", self.solarleistung.format_kilowatts()),
            (
                "HISTORY",
                "Solar Energy Today",
                self.solarenergie_heute.format_kilowatt_hours(),
            ),
            (
                "HISTORY",
                "Solar Energy Total",
                self.solarenergie_gesamt.format_kilowatt_hours(),
            ),
            (
                "HISTORY",
                "Grid Energy Today",
                self.netzenergie_heute.format_kilowatt_hours(),
            ),
            ("STATE", "Insulation Measurement", str(self.iso_messung)),
            ("STATE", "Device Temperature", self.geraetetemp.format()),
            ("STATE", "Status Code", str(self.status)),
            ("STATE", "DC Disconnect", _on_off(self.dc_trenner)),
            ("STATE", "DC Relay", _on_off(self.dc_relais)),
            ("STATE", "AC Relay", _on_off(self.ac_relais)),
            ("DEVICE", "Operating Day", str(self.betriebstag)),
            ("DEVICE", "Firmware", self.firmware or "-"),
            ("DEVICE", "Serial Number", self.seriennummer or "-"),
        ]

    def to_dict(self) -> dict[str, Any]:
        """Return a flat JSON-friendly dict in canonical units.

        Quantities are flattened to ``<field>_<unit>`` keys, e.g.
        ``wassertemp_c`` or ``solarleistung_w``.
        """
        data: dict[str, Any] = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, Temperature):
                data[f"{name}_c"] = value.celsius
            elif isinstance(value, Voltage):
                data[f"{name}_v"] = value.volts
            elif isinstance(value, Current):
                data[f"{name}_a"] = value.amperes
            elif isinstance(value, Power):
                data[f"{name}_w"] = value.watts
            elif isinstance(value, Energy):
                data[f"{name}_wh"] = value.watt_hours
            else:
                data[name] = value
        return data


def _on_off(value: bool) -> str:
    return "On" if value else "Off"
