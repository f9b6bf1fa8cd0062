"""Tokenizing and positional binding of raw status frames."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from .exceptions import FieldMissingError, FrameEncodingError
from .schema import STATUS_SCHEMA, StatusTag, position_of

_logger = logging.getLogger(__name__)

__all__ = ["FIELD_SEPARATOR", "BoundFrame", "tokenize", "bind"]

FIELD_SEPARATOR = "\t"
FRAME_ENCODING = "utf-8"


def tokenize(raw: bytes | str) -> list[str]:
    """Split a raw frame into its tab-separated tokens.

    The trailing line terminator (LF or CRLF) is removed first, so it never
    ends up inside the last token. Tokens are otherwise returned untouched,
    including empty ones.

    Args:
        raw: Frame bytes as read from the device, or already-decoded text.

    Returns:
        Tokens in wire order.

    Raises:
        FrameEncodingError: If ``raw`` is not valid UTF-8.
        TypeError: If ``raw`` is neither bytes nor str.

    Example:
        >>> tokenize(b"dr\\tV1.31\\t35\\r\\n")
        ['dr', 'V1.31', '35']
    """
    if isinstance(raw, (bytes, bytearray, memoryview)):
        try:
            text = bytes(raw).decode(FRAME_ENCODING)
        except UnicodeDecodeError as e:
            raise FrameEncodingError(str(e)) from e
    elif isinstance(raw, str):
        text = raw
    else:
        raise TypeError(
            f"Frame must be bytes or str, got {type(raw).__name__}"
        )

    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]

    return text.split(FIELD_SEPARATOR)


class BoundFrame(Mapping[StatusTag, str]):
    """Read-only mapping of schema tags to their tokens.

    Tags past the end of the frame are absent. Use :meth:`lookup` to fetch a
    token that the caller requires; it raises
    :class:`~solartherm.exceptions.FieldMissingError` instead of ``KeyError``.
    """

    def __init__(self, tokens: list[str]) -> None:
        # zip stops at the shorter side: missing tags stay unbound and
        # surplus tokens are dropped
        self._tokens: dict[StatusTag, str] = {
            spec.tag: token
            for spec, token in zip(STATUS_SCHEMA, tokens, strict=False)
        }
        self.token_count = len(tokens)
        if self.token_count > len(STATUS_SCHEMA):
            _logger.debug(
                "Ignoring %d surplus token(s) past the schema",
                self.token_count - len(STATUS_SCHEMA),
            )

    def __getitem__(self, tag: StatusTag) -> str:
        return self._tokens[tag]

    def __iter__(self) -> Iterator[StatusTag]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def lookup(self, tag: StatusTag) -> str:
        """Return the token bound to ``tag``.

        Raises:
            FieldMissingError: If the frame ended before ``tag``'s position.
        """
        try:
            return self._tokens[tag]
        except KeyError:
            raise FieldMissingError(tag, position_of(tag)) from None

    def __repr__(self) -> str:
        return f"BoundFrame({len(self)} of {len(STATUS_SCHEMA)} slots)"


def bind(tokens: list[str]) -> BoundFrame:
    """Pair each schema tag with the token at the same position."""
    return BoundFrame(tokens)
