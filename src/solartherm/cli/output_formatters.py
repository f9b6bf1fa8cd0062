"""Output formatting utilities for CLI."""

from solartherm.frame import tokenize
from solartherm.models import StatusRecord
from solartherm.schema import STATUS_SCHEMA

from .rich_output import get_formatter


def print_device_status(record: StatusRecord) -> None:
    """Print a status record through the active formatter."""
    get_formatter().print_status_table(record.display_items())


def frame_token_rows(raw: bytes | str) -> list[tuple[int, str, str]]:
    """
    Pair each raw token with its schema slot name.

    Tokens past the end of the schema are labelled ``(surplus)``.

    Args:
        raw: Raw frame

    Returns:
        List of (position, slot name, token) tuples
    """
    rows: list[tuple[int, str, str]] = []
    for position, token in enumerate(tokenize(raw)):
        if position < len(STATUS_SCHEMA):
            name = STATUS_SCHEMA[position].tag.value
        else:
            name = "(surplus)"
        rows.append((position, name, token))
    return rows
