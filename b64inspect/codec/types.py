from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

PADDING = 64
"""Symbol value reserved for the ``=`` padding character."""

TRIPLET_SIZE = 3


@dataclass(frozen=True)
class Symbol:
    """A classified Base64 character: a 6-bit value or the padding marker."""

    value: int

    @property
    def is_padding(self) -> bool:
        return self.value == PADDING


@dataclass
class PendingOutput:
    """Decoded bytes of one quad, drained front to back."""

    values: List[int] = field(default_factory=lambda: [0, 0, 0])
    length: int = 0

    @classmethod
    def empty(cls) -> "PendingOutput":
        return cls()

    @classmethod
    def of(cls, *values: int) -> "PendingOutput":
        if len(values) > TRIPLET_SIZE:
            raise ValueError(f"A quad decodes to at most {TRIPLET_SIZE} bytes, got {len(values)}")
        padded = list(values) + [0] * (TRIPLET_SIZE - len(values))
        return cls(values=padded, length=len(values))

    def __len__(self) -> int:
        return self.length

    def pop(self) -> int:
        """Remove and return the oldest pending byte."""
        if self.length == 0:
            raise IndexError("pop from empty pending output")
        first = self.values[0]
        self.values[0] = self.values[1]
        self.values[1] = self.values[2]
        self.values[2] = 0
        self.length -= 1
        return first

    def as_bytes(self) -> bytes:
        return bytes(self.values[: self.length])
