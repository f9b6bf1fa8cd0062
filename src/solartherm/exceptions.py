"""Exception hierarchy for solartherm.

All errors raised by the library derive from :class:`SolarthermError` so
callers can catch everything with a single ``except`` clause, or pick the
specific failure they care about:

- :class:`TransportError`: the frame source could not deliver a frame.
- :class:`DecodeError`: a frame was delivered but could not be decoded.

  - :class:`FrameEncodingError`: the raw bytes are not valid text.
  - :class:`FieldMissingError`: a required slot has no token.
  - :class:`FieldParseError`: a token does not parse as its declared type.

Example:
    >>> try:
    ...     record = decode_frame(raw)
    ... except FieldParseError as e:
    ...     print(e.tag, e.raw_value)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .schema import StatusTag

__all__ = [
    "SolarthermError",
    "TransportError",
    "DecodeError",
    "FrameEncodingError",
    "FieldMissingError",
    "FieldParseError",
]


class SolarthermError(Exception):
    """Base class for all solartherm errors."""

    #: Short machine-readable error kind, used in JSON error payloads.
    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable description of the error."""
        return {"error": self.kind, "message": self.message}


class TransportError(SolarthermError):
    """The frame source failed to deliver a frame.

    Raised for serial port open/read failures and for reads that time out
    before a line feed arrives.
    """

    kind = "transport_error"

    def __init__(self, message: str, *, port: str | None = None) -> None:
        super().__init__(message)
        self.port = port

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.port is not None:
            data["port"] = self.port
        return data


class DecodeError(SolarthermError):
    """Base class for frame decoding failures."""

    kind = "decode_error"


class FrameEncodingError(DecodeError):
    """The raw frame bytes are not valid UTF-8 text."""

    kind = "frame_encoding_error"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Frame is not valid UTF-8 text: {reason}")
        self.reason = reason


class FieldMissingError(DecodeError):
    """A slot required by the status record has no corresponding token."""

    kind = "field_missing"

    def __init__(self, tag: StatusTag, position: int) -> None:
        super().__init__(
            f"Field '{tag.value}' (position {position}) is missing "
            "from the frame"
        )
        self.tag = tag
        self.position = position

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.tag.value
        data["position"] = self.position
        return data


class FieldParseError(DecodeError):
    """A token is present but does not parse as its declared type."""

    kind = "field_parse_error"

    def __init__(
        self, tag: StatusTag, raw_value: str, expected: str = "number"
    ) -> None:
        super().__init__(
            f"Field '{tag.value}' has invalid value {raw_value!r} "
            f"(expected {expected})"
        )
        self.tag = tag
        self.raw_value = raw_value
        self.expected = expected

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.tag.value
        data["raw_value"] = self.raw_value
        data["expected"] = self.expected
        return data
