from __future__ import annotations


class Base64DecodeError(ValueError):
    """Raised when Base64 input is malformed."""


class InvalidPaddingError(Base64DecodeError):
    """Raised when a padding symbol appears where a quad cannot end.

    ``position`` is the zero-based index of the offending symbol within its quad.
    """

    def __init__(self, message: str = "Invalid base64 padding.", *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class DecoderStateError(RuntimeError):
    """Raised when the decode state machine reaches a state it never enters when driven correctly."""
