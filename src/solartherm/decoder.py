"""Status frame decoder.

Decoding runs in three stages:

1. :func:`~solartherm.frame.tokenize` splits the raw frame on tabs.
2. :func:`~solartherm.frame.bind` pairs tokens with schema slots by position.
3. Each slot the record needs is looked up and converted in wire order.

Decoding is all-or-nothing. The first missing or malformed slot (in wire
order) aborts the decode with its exception; a caller never sees a
partially filled record. Decoding is pure and keeps no state, so any number
of threads or tasks may decode concurrently.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .converters import convert
from .frame import BoundFrame, bind, tokenize
from .models import StatusRecord
from .schema import record_tags, spec_for

if TYPE_CHECKING:
    from .transport import FrameSource

_logger = logging.getLogger(__name__)

__all__ = ["decode_frame", "decode_tokens", "decode_bound", "read_status"]


def decode_bound(bound: BoundFrame) -> StatusRecord:
    """Build a :class:`StatusRecord` from an already bound frame.

    Raises:
        FieldMissingError: If a required slot has no token.
        FieldParseError: If a token fails to parse.
    """
    values: dict[str, Any] = {}
    for tag in record_tags():
        raw = bound.lookup(tag)
        values[tag.value] = convert(spec_for(tag), raw)
    return StatusRecord(**values)


def decode_tokens(tokens: list[str]) -> StatusRecord:
    """Decode a frame that has already been split into tokens."""
    return decode_bound(bind(tokens))


def decode_frame(raw: bytes | str) -> StatusRecord:
    """Decode one raw status frame.

    Args:
        raw: One device response line, LF or CRLF terminated.

    Returns:
        The decoded, immutable status record.

    Raises:
        FrameEncodingError: If ``raw`` is not valid UTF-8.
        FieldMissingError: If the frame ends before a required slot.
        FieldParseError: If a slot's token does not parse.

    Example:
        >>> record = decode_frame(SAMPLE_FRAME)
        >>> record.wassertemp.format()
        '23.5 °C'
    """
    tokens = tokenize(raw)
    _logger.debug("Decoding frame with %d tokens", len(tokens))
    record = decode_tokens(tokens)
    _logger.debug(
        "Decoded status: firmware=%s serial=%s",
        record.firmware,
        record.seriennummer,
    )
    return record


def read_status(source: FrameSource) -> StatusRecord:
    """Fetch a fresh frame from ``source`` and decode it.

    This blocks for as long as the source does. Nothing is cached: every
    call polls the device again.

    Raises:
        TransportError: If the source cannot deliver a frame.
        DecodeError: If the frame cannot be decoded.
    """
    _logger.info("Fetch new data from %s", source.describe())
    return decode_frame(source.read_frame())
