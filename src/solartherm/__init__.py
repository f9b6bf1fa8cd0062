"""Read and decode the status of a solar-thermal controller.

The controller reports its status as one tab-separated line on its serial
port. This package polls it, decodes the line into a typed, unit-aware
:class:`StatusRecord` and presents the result on the command line or over
HTTP.

Example:
    >>> from solartherm import SampleFrameSource, read_status
    >>> record = read_status(SampleFrameSource())
    >>> record.wassertemp.format()
    '23.5 °C'
"""

from .decoder import decode_frame, decode_tokens, read_status
from .exceptions import (
    DecodeError,
    FieldMissingError,
    FieldParseError,
    FrameEncodingError,
    SolarthermError,
    TransportError,
)
from .models import StatusRecord
from .quantities import Current, Energy, Power, Temperature, Voltage
from .schema import STATUS_SCHEMA, FieldRole, FieldSpec, StatusTag
from .transport import (
    SAMPLE_FRAME,
    FrameSource,
    SampleFrameSource,
    SerialFrameSource,
    SerialSettings,
)

__version__ = "0.3.0"

__all__ = [
    "__version__",
    # Decoding
    "decode_frame",
    "decode_tokens",
    "read_status",
    "StatusRecord",
    # Schema
    "STATUS_SCHEMA",
    "FieldRole",
    "FieldSpec",
    "StatusTag",
    # Quantities
    "Current",
    "Energy",
    "Power",
    "Temperature",
    "Voltage",
    # Sources
    "SAMPLE_FRAME",
    "FrameSource",
    "SampleFrameSource",
    "SerialFrameSource",
    "SerialSettings",
    # Exceptions
    "SolarthermError",
    "TransportError",
    "DecodeError",
    "FrameEncodingError",
    "FieldMissingError",
    "FieldParseError",
]
