"""Unit-typed quantities for decoded status values.

Each quantity stores its value in one canonical unit and converts to the
display units on demand, so scale constants never leak into callers:

- Temperature: degrees Celsius
- Voltage: volts
- Current: amperes
- Power: watts (also rendered in kilowatts)
- Energy: watt-hours (also rendered in kilowatt-hours)

Quantities are immutable pydantic models and compare by value.
"""

from __future__ import annotations

from abc import abstractmethod

from pydantic import BaseModel, ConfigDict

__all__ = [
    "Quantity",
    "Temperature",
    "Voltage",
    "Current",
    "Power",
    "Energy",
]

# Fixed display precision (decimal places) per unit
TEMPERATURE_PRECISION = 1
VOLTAGE_PRECISION = 1
CURRENT_PRECISION = 2
WATT_PRECISION = 1
KILOWATT_PRECISION = 3
WATT_HOUR_PRECISION = 0
KILOWATT_HOUR_PRECISION = 3


def _format(value: float, precision: int, unit: str) -> str:
    return f"{value:.{precision}f} {unit}"


class Quantity(BaseModel):
    """Base class for physical quantities.

    Subclasses define :meth:`format`; the base class cannot be instantiated.
    """

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def format(self) -> str:
        """Render in the quantity's primary display unit."""

    def __str__(self) -> str:
        return self.format()


class Temperature(Quantity):
    """Temperature in degrees Celsius.

    Example:
        >>> temp = Temperature(celsius=23.5)
        >>> temp.format()
        '23.5 °C'
    """

    celsius: float

    def to_fahrenheit(self) -> float:
        """Convert to Fahrenheit.

        Returns:
            Temperature in Fahrenheit.
        """
        return self.celsius * 9 / 5 + 32

    def format(self) -> str:
        return _format(self.celsius, TEMPERATURE_PRECISION, "°C")

    def format_fahrenheit(self) -> str:
        return _format(self.to_fahrenheit(), TEMPERATURE_PRECISION, "°F")


class Voltage(Quantity):
    """Electric potential in volts."""

    volts: float

    def format(self) -> str:
        return _format(self.volts, VOLTAGE_PRECISION, "V")


class Current(Quantity):
    """Electric current in amperes."""

    amperes: float

    def format(self) -> str:
        return _format(self.amperes, CURRENT_PRECISION, "A")


class Power(Quantity):
    """Power, stored in watts.

    Example:
        >>> power = Power(watts=217.29)
        >>> power.format_watts()
        '217.3 W'
        >>> power.format_kilowatts()
        '0.217 kW'
    """

    watts: float

    @property
    def kilowatts(self) -> float:
        return self.watts / 1000.0

    def format_watts(self) -> str:
        return _format(self.watts, WATT_PRECISION, "W")

    def format_kilowatts(self) -> str:
        return _format(self.kilowatts, KILOWATT_PRECISION, "kW")

    def format(self) -> str:
        return self.format_watts()


class Energy(Quantity):
    """Energy, stored in watt-hours.

    Example:
        >>> energy = Energy(watt_hours=778)
        >>> energy.format_watt_hours()
        '778 Wh'
        >>> energy.format_kilowatt_hours()
        '0.778 kWh'
    """

    watt_hours: float

    @property
    def kilowatt_hours(self) -> float:
        return self.watt_hours / 1000.0

    def format_watt_hours(self) -> str:
        return _format(self.watt_hours, WATT_HOUR_PRECISION, "Wh")

    def format_kilowatt_hours(self) -> str:
        return _format(self.kilowatt_hours, KILOWATT_HOUR_PRECISION, "kWh")

    def format(self) -> str:
        return self.format_kilowatt_hours()
