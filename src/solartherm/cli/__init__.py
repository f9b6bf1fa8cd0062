"""Command-line interface for solartherm."""

from .__main__ import main, run

__all__ = ["main", "run"]
