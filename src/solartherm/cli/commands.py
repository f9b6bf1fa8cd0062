"""Command handlers for CLI operations."""

import logging

from solartherm.decoder import decode_frame
from solartherm.server import run_server
from solartherm.transport import FrameSource

from .output_formatters import (
    frame_token_rows,
    print_device_status,
)
from .rich_output import get_formatter

_logger = logging.getLogger(__name__)


def handle_status_request(
    source: FrameSource, raw: bool = False, as_json: bool = False
) -> None:
    """Poll once and print the decoded status.

    Args:
        source: Frame source to poll
        raw: Print the raw tokens next to their slot names instead
        as_json: Print the decoded status as JSON
    """
    _logger.info("Fetch new data from %s", source.describe())
    frame = source.read_frame()
    formatter = get_formatter()

    if raw:
        formatter.print_tokens(frame_token_rows(frame))
        return

    record = decode_frame(frame)
    if as_json:
        formatter.print_json_highlighted(record.to_dict())
    else:
        print_device_status(record)


def handle_serve_request(source: FrameSource, host: str, port: int) -> None:
    """Run the HTTP status server until interrupted."""
    run_server(source, host=host, port=port)
