"""Tests for CLI output formatting."""

from solartherm.cli.output_formatters import (
    frame_token_rows,
    print_device_status,
)
from solartherm.cli.rich_output import OutputFormatter
from solartherm.decoder import decode_frame


def test_print_device_status(plain_output, sample_frame, capsys):
    print_device_status(decode_frame(sample_frame))
    lines = capsys.readouterr().out.splitlines()
    assert "DEVICE STATUS" in lines
    assert "WATER" in lines and "DEVICE" in lines
    assert any(
        line.startswith("  Water Temperature ") and line.endswith("23.5 °C")
        for line in lines
    )


def test_print_device_status_empty_text(
    plain_output, sample_tokens, build_frame, capsys
):
    sample_tokens[1] = ""
    print_device_status(decode_frame(build_frame(sample_tokens)))
    out = capsys.readouterr().out
    firmware = next(line for line in out.splitlines() if "Firmware" in line)
    assert firmware.endswith("  -")


def test_frame_token_rows(sample_frame):
    rows = frame_token_rows(sample_frame)
    assert rows[0] == (0, "reserved_0", "dr")
    assert rows[1] == (1, "firmware", "V1.31")
    assert rows[7] == (7, "wassertemp", "235")


def test_frame_token_rows_surplus(sample_tokens, build_frame):
    rows = frame_token_rows(build_frame(sample_tokens + ["extra"]))
    position, name, token = rows[-1]
    assert name == "(surplus)"
    assert token == "extra"
    assert position == len(sample_tokens)


def test_plain_error(capsys):
    OutputFormatter(use_rich=False).print_error(
        "boom", title="Oops", details=["first", "second"]
    )
    assert capsys.readouterr().out == "Oops: boom\n  - first\n  - second\n"


def test_plain_json(capsys):
    OutputFormatter(use_rich=False).print_json_highlighted({"a": 1})
    assert capsys.readouterr().out == '{\n  "a": 1\n}\n'


def test_plain_status_table(capsys):
    OutputFormatter(use_rich=False).print_status_table(
        [("A", "One", "1"), ("B", "Two", "2")], title="T"
    )
    out = capsys.readouterr().out
    assert "T\n" in out
    assert "  One  1" in out
    assert "  Two  2" in out
