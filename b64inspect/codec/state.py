from __future__ import annotations

from .errors import DecoderStateError, InvalidPaddingError
from .types import PendingOutput, Symbol, TRIPLET_SIZE

_ZERO = Symbol(0)


class DecodeState:
    """Four-symbol Base64 decode state machine.

    ``count`` is the number of symbols accumulated for the current quad.
    Feeding the fourth symbol completes the quad, resets ``count`` to 0 and
    returns the 1-3 decoded bytes. Padding may only occupy the last two
    positions of a quad.
    """

    def __init__(self) -> None:
        self.seen = [_ZERO] * TRIPLET_SIZE
        self.count = 0

    def add(self, symbol: Symbol) -> PendingOutput:
        """Feed one symbol, returning decoded bytes (empty unless a quad completed)."""
        if self.count in (0, 1):
            if symbol.is_padding:
                raise InvalidPaddingError(
                    f"Padding cannot occupy position {self.count + 1} of a quad.",
                    position=self.count,
                )
            self.seen[self.count] = symbol
            self.count += 1
            return PendingOutput.empty()

        if self.count == 2:
            self.seen[2] = symbol
            self.count = 3
            return PendingOutput.empty()

        if self.count == 3:
            self.count = 0
            return self._complete(symbol)

        raise DecoderStateError(f"Invalid decode state: {self.count} symbols pending")

    def _complete(self, last: Symbol) -> PendingOutput:
        first, second, third = (s.value for s in self.seen)
        byte1 = (first << 2 | (second >> 4) & 0b11) & 0xFF

        if self.seen[2].is_padding:
            if not last.is_padding:
                raise InvalidPaddingError(
                    "Padding in position 3 of a quad must be followed by padding.",
                    position=3,
                )
            return PendingOutput.of(byte1)

        byte2 = ((second & 0b1111) << 4 | (third >> 2) & 0b1111) & 0xFF
        if last.is_padding:
            return PendingOutput.of(byte1, byte2)

        byte3 = ((third & 0b11) << 6 | last.value) & 0xFF
        return PendingOutput.of(byte1, byte2, byte3)

    @property
    def pending(self) -> int:
        """Symbols held for an incomplete quad."""
        return self.count

    def reset(self) -> None:
        self.seen = [_ZERO] * TRIPLET_SIZE
        self.count = 0
