#!/usr/bin/env python3
"""Example: Poll the controller once and print a few values."""

import sys

from pydantic import ValidationError

from solartherm import (
    SerialSettings,
    SolarthermError,
    read_status,
)
from solartherm.transport import source_from_settings


def main() -> int:
    try:
        settings = SerialSettings.from_env()
    except ValidationError as e:
        print(f"Invalid settings: {e}")
        return 1

    try:
        record = read_status(source_from_settings(settings))
    except SolarthermError as e:
        print(f"Error: {e}")
        return 1

    print(f"Firmware:      {record.firmware}")
    print(f"Water:         {record.wassertemp}")
    print(
        f"Solar power:   {record.solarleistung.format_watts()} "
        f"({record.solarleistung.format_kilowatts()})"
    )
    print(f"Today:         {record.solarenergie_heute.format_kilowatt_hours()}")
    print(f"AC relay:      {'on' if record.ac_relais else 'off'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
