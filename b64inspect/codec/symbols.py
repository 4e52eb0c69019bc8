"""Classification of raw input bytes into Base64 symbols.

Both the standard (``+``, ``/``) and URL-safe (``-``, ``_``) alphabets are
accepted, and may be mixed within one stream. Bytes outside the alphabet
that are not ``=`` are noise and classify to ``None``.
"""

from __future__ import annotations

import string
from typing import Optional, Tuple

from .types import PADDING, Symbol

STANDARD_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
URLSAFE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"
PADDING_CHAR = "="


def _build_table() -> Tuple[Optional[Symbol], ...]:
    table: list[Optional[Symbol]] = [None] * 256
    for alphabet in (STANDARD_ALPHABET, URLSAFE_ALPHABET):
        for value, char in enumerate(alphabet):
            table[ord(char)] = Symbol(value)
    table[ord(PADDING_CHAR)] = Symbol(PADDING)
    return tuple(table)


_SYMBOL_TABLE = _build_table()


def classify(byte: int) -> Optional[Symbol]:
    """Return the symbol for ``byte``, or None when the byte should be skipped."""
    return _SYMBOL_TABLE[byte]


__all__ = ["classify", "STANDARD_ALPHABET", "URLSAFE_ALPHABET", "PADDING_CHAR"]
