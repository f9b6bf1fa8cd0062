"""Basic tests for CLI entry point."""

import json
import sys
from unittest.mock import patch

import pytest
import serial

from solartherm.cli.__main__ import main, parse_args, run


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "SOLARTHERM_SERIAL_PORT",
        "SOLARTHERM_BAUDRATE",
        "SOLARTHERM_TIMEOUT",
        "SOLARTHERM_SAMPLE",
    ):
        monkeypatch.delenv(name, raising=False)


def _exit_code(args: list[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(args)
    return excinfo.value.code


def test_cli_help():
    """Test that CLI help command works."""
    with patch.object(sys, "argv", ["solartherm", "--help"]):
        with pytest.raises(SystemExit) as excinfo:
            run()
        assert excinfo.value.code == 0


def test_cli_no_args():
    """Test that CLI without a command fails."""
    with patch.object(sys, "argv", ["solartherm"]):
        with pytest.raises(SystemExit) as excinfo:
            run()
        assert excinfo.value.code != 0


def test_raw_and_json_are_exclusive():
    with pytest.raises(SystemExit):
        parse_args(["status", "--raw", "--json"])


def test_serve_defaults():
    args = parse_args(["serve"])
    assert args.host == "0.0.0.0"
    assert args.http_port == 3000


def test_status_plain(plain_output, capsys):
    assert _exit_code(["--sample", "status"]) == 0
    out = capsys.readouterr().out
    assert "DEVICE STATUS" in out
    assert "Water Temperature" in out
    assert "23.5 °C" in out
    assert "12010023021000023" in out


def test_status_json(plain_output, capsys):
    assert _exit_code(["--sample", "status", "--json"]) == 0
    out = capsys.readouterr().out
    data = json.loads(out[out.index("{") :])
    assert data["wassertemp_c"] == pytest.approx(23.5)
    assert data["firmware"] == "V1.31"


def test_status_raw(plain_output, capsys):
    assert _exit_code(["--sample", "status", "--raw"]) == 0
    out = capsys.readouterr().out
    assert "wassertemp" in out
    assert "'235'" in out


def test_sample_from_env(plain_output, capsys, monkeypatch):
    monkeypatch.setenv("SOLARTHERM_SAMPLE", "1")
    assert _exit_code(["status"]) == 0
    assert "Water Temperature" in capsys.readouterr().out


def test_transport_failure(plain_output, capsys):
    with patch(
        "solartherm.transport.serial.Serial",
        side_effect=serial.SerialException("could not open port"),
    ):
        assert _exit_code(["--port", "/dev/ttyS9", "status"]) == 1
    out = capsys.readouterr().out
    assert "Device Communication Failed" in out
    assert "could not open port" in out


def test_invalid_settings(plain_output, capsys):
    assert _exit_code(["--sample", "--baudrate", "0", "status"]) == 1
    assert "Invalid Settings" in capsys.readouterr().out
