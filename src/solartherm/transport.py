"""Frame sources: where raw status frames come from.

A frame source returns one raw, LF-terminated frame per call to
:meth:`FrameSource.read_frame` or raises
:class:`~solartherm.exceptions.TransportError`. Sources do no decoding.

- :class:`SerialFrameSource` polls the controller over its RS-232 port.
- :class:`SampleFrameSource` returns a canned frame, for demos and tests.
"""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod

import serial
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import TransportError

_logger = logging.getLogger(__name__)

__all__ = [
    "SAMPLE_FRAME",
    "POLL_COMMAND",
    "SerialSettings",
    "FrameSource",
    "SerialFrameSource",
    "SampleFrameSource",
    "source_from_settings",
]

#: Status poll command understood by the controller
POLL_COMMAND = b"rs\r\n"
FRAME_TERMINATOR = b"\n"

#: A real status frame captured from a controller
SAMPLE_FRAME = (
    b"dr\tV1.31\t35\t12\t1\t1\t1\t235\t175\t245\t759\t650\t25\t90\t189.5"
    b"\t190.03\t1.1435\t217.29\t778\t91725\t0\t-7\t7.9\t525\t368\t358\t240"
    b"\t1\t12010023021000023\t759\t6\r\n"
)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in ("1", "true", "yes")


class SerialSettings(BaseModel):
    """Serial connection settings.

    Defaults match the controller's factory RS-232 setup.
    """

    model_config = ConfigDict(frozen=True)

    port: str = "/dev/ttyUSB0"
    baudrate: int = Field(default=9600, gt=0)
    timeout: float = Field(default=5.0, gt=0)
    use_sample: bool = False

    @classmethod
    def from_env(cls) -> SerialSettings:
        """Load settings from ``SOLARTHERM_*`` environment variables.

        Recognized variables: ``SOLARTHERM_SERIAL_PORT``,
        ``SOLARTHERM_BAUDRATE``, ``SOLARTHERM_TIMEOUT`` and
        ``SOLARTHERM_SAMPLE`` (``1`` selects the sample source).
        Unset variables keep their defaults.
        """
        values: dict[str, object] = {}
        if port := os.getenv("SOLARTHERM_SERIAL_PORT"):
            values["port"] = port
        if baudrate := os.getenv("SOLARTHERM_BAUDRATE"):
            values["baudrate"] = baudrate
        if timeout := os.getenv("SOLARTHERM_TIMEOUT"):
            values["timeout"] = timeout
        values["use_sample"] = _env_flag("SOLARTHERM_SAMPLE")
        return cls.model_validate(values)


class FrameSource(ABC):
    """Supplies one raw status frame per call."""

    @abstractmethod
    def read_frame(self) -> bytes:
        """Return one raw frame, terminated by a line feed.

        Raises:
            TransportError: If no complete frame could be obtained.
        """

    def describe(self) -> str:
        return type(self).__name__


class SampleFrameSource(FrameSource):
    """Frame source that always returns the same canned frame."""

    def __init__(self, frame: bytes = SAMPLE_FRAME) -> None:
        self.frame = frame

    def read_frame(self) -> bytes:
        _logger.debug("Returning sample frame (%d bytes)", len(self.frame))
        return self.frame

    def describe(self) -> str:
        return "sample data"


class SerialFrameSource(FrameSource):
    """Poll the controller over a serial port.

    The port is opened for each poll and closed afterwards. Access is
    serialized with a lock, so concurrent callers never interleave their
    commands on the line.

    Example:
        >>> source = SerialFrameSource(SerialSettings(port="/dev/ttyUSB0"))
        >>> raw = source.read_frame()
    """

    def __init__(self, settings: SerialSettings | None = None) -> None:
        self.settings = settings or SerialSettings()
        self._lock = threading.Lock()

    def describe(self) -> str:
        return f"{self.settings.port} @ {self.settings.baudrate} baud"

    def _open(self) -> serial.Serial:
        return serial.Serial(
            port=self.settings.port,
            baudrate=self.settings.baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=self.settings.timeout,
        )

    def read_frame(self) -> bytes:
        port = self.settings.port
        with self._lock:
            try:
                with self._open() as conn:
                    _logger.debug("Sending poll command to %s", port)
                    conn.reset_input_buffer()
                    conn.write(POLL_COMMAND)
                    conn.flush()
                    data = conn.read_until(FRAME_TERMINATOR)
            except serial.SerialException as e:
                _logger.error(f"Serial error on {port}: {e}")
                raise TransportError(
                    f"Serial communication with {port} failed: {e}",
                    port=port,
                ) from e

        if not data.endswith(FRAME_TERMINATOR):
            raise TransportError(
                f"No complete frame from {port} within "
                f"{self.settings.timeout:g}s (got {len(data)} bytes)",
                port=port,
            )
        _logger.debug("Read %d bytes from %s", len(data), port)
        return bytes(data)


def source_from_settings(settings: SerialSettings) -> FrameSource:
    """Return the frame source selected by ``settings``."""
    if settings.use_sample:
        return SampleFrameSource()
    return SerialFrameSource(settings)
