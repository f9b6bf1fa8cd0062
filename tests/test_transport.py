"""Tests for frame sources."""

import threading
from unittest.mock import MagicMock, patch

import pytest
import serial

from solartherm.exceptions import TransportError
from solartherm.transport import (
    POLL_COMMAND,
    SAMPLE_FRAME,
    SampleFrameSource,
    SerialFrameSource,
    SerialSettings,
    source_from_settings,
)


def _mock_port(data: bytes) -> MagicMock:
    port = MagicMock()
    port.__enter__.return_value = port
    port.__exit__.return_value = False
    port.read_until.return_value = data
    return port


class TestSerialSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "SOLARTHERM_SERIAL_PORT",
            "SOLARTHERM_BAUDRATE",
            "SOLARTHERM_TIMEOUT",
            "SOLARTHERM_SAMPLE",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = SerialSettings.from_env()
        assert settings.port == "/dev/ttyUSB0"
        assert settings.baudrate == 9600
        assert settings.timeout == 5.0
        assert settings.use_sample is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SOLARTHERM_SERIAL_PORT", "/dev/ttyS1")
        monkeypatch.setenv("SOLARTHERM_BAUDRATE", "19200")
        monkeypatch.setenv("SOLARTHERM_TIMEOUT", "2.5")
        monkeypatch.setenv("SOLARTHERM_SAMPLE", "1")
        settings = SerialSettings.from_env()
        assert settings.port == "/dev/ttyS1"
        assert settings.baudrate == 19200
        assert settings.timeout == 2.5
        assert settings.use_sample is True

    def test_rejects_bad_values(self):
        with pytest.raises(ValueError):
            SerialSettings(baudrate=0)


def test_sample_source_returns_frame():
    assert SampleFrameSource().read_frame() == SAMPLE_FRAME
    assert SampleFrameSource(b"x\n").read_frame() == b"x\n"


def test_source_from_settings():
    assert isinstance(
        source_from_settings(SerialSettings(use_sample=True)),
        SampleFrameSource,
    )
    assert isinstance(
        source_from_settings(SerialSettings()), SerialFrameSource
    )


class TestSerialFrameSource:
    def test_polls_and_reads_one_line(self):
        port = _mock_port(SAMPLE_FRAME)
        settings = SerialSettings(port="/dev/ttyS3", baudrate=9600, timeout=1)
        with patch(
            "solartherm.transport.serial.Serial", return_value=port
        ) as cls:
            frame = SerialFrameSource(settings).read_frame()

        assert frame == SAMPLE_FRAME
        port.write.assert_called_once_with(POLL_COMMAND)
        port.read_until.assert_called_once_with(b"\n")
        kwargs = cls.call_args.kwargs
        assert kwargs["port"] == "/dev/ttyS3"
        assert kwargs["baudrate"] == 9600
        assert kwargs["timeout"] == 1

    def test_timeout_without_line_feed(self):
        port = _mock_port(b"dr\tV1.31")
        with patch("solartherm.transport.serial.Serial", return_value=port):
            with pytest.raises(TransportError) as excinfo:
                SerialFrameSource().read_frame()
        assert excinfo.value.port == "/dev/ttyUSB0"
        assert "No complete frame" in str(excinfo.value)

    def test_open_failure(self):
        with patch(
            "solartherm.transport.serial.Serial",
            side_effect=serial.SerialException("could not open port"),
        ):
            with pytest.raises(TransportError) as excinfo:
                SerialFrameSource().read_frame()
        assert "could not open port" in str(excinfo.value)
        assert excinfo.value.to_dict()["port"] == "/dev/ttyUSB0"

    def test_concurrent_polls_are_serialized(self):
        active = 0
        overlap = False
        guard = threading.Lock()

        def slow_read(_terminator):
            nonlocal active, overlap
            with guard:
                active += 1
                overlap = overlap or active > 1
            threading.Event().wait(0.01)
            with guard:
                active -= 1
            return SAMPLE_FRAME

        port = _mock_port(SAMPLE_FRAME)
        port.read_until.side_effect = slow_read
        source = SerialFrameSource()
        with patch("solartherm.transport.serial.Serial", return_value=port):
            threads = [
                threading.Thread(target=source.read_frame) for _ in range(4)
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        assert not overlap
        assert port.write.call_count == 4
