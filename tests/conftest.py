"""Shared fixtures for solartherm tests."""

import pytest

from solartherm.cli import rich_output
from solartherm.transport import SAMPLE_FRAME

# Sample frame split into tokens, without the line terminator
SAMPLE_TOKENS = SAMPLE_FRAME.decode().rstrip("\r\n").split("\t")


def _build_frame(tokens: list[str], terminator: str = "\r\n") -> bytes:
    return ("\t".join(tokens) + terminator).encode()


@pytest.fixture
def sample_frame() -> bytes:
    """A real status frame captured from a controller."""
    return SAMPLE_FRAME


@pytest.fixture
def sample_tokens() -> list[str]:
    """Tokens of the sample frame, as a fresh list per test."""
    return list(SAMPLE_TOKENS)


@pytest.fixture
def build_frame():
    """Join tokens back into a raw frame."""
    return _build_frame


@pytest.fixture
def plain_output(monkeypatch):
    """Force plain-text CLI output and a fresh global formatter."""
    monkeypatch.setenv("SOLARTHERM_NO_RICH", "1")
    monkeypatch.setattr(rich_output, "_formatter", None)
    yield
    rich_output._formatter = None
