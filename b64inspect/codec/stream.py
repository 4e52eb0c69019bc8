from __future__ import annotations

import io
import logging
from typing import BinaryIO, Optional

from .config import DecoderConfig
from .errors import Base64DecodeError
from .state import DecodeState
from .symbols import classify
from .types import PendingOutput

logger = logging.getLogger(__name__)


class StreamingBase64Decoder(io.RawIOBase):
    """Pull-based Base64 decoder over a byte source.

    Raw Base64 text is read from ``source`` only when the caller asks for
    decoded bytes, so arbitrarily large inputs are decoded in constant
    memory. Bytes outside the Base64 alphabets (line breaks, spaces, ...)
    are skipped. The source may be anything with ``readinto`` or ``read``
    that signals exhaustion by returning no data.

    The decoder is itself a readable raw stream and can be wrapped in
    ``io.BufferedReader`` or passed wherever a binary file is expected.

    A quad left incomplete when the source runs dry is dropped without
    error. Malformed padding raises :class:`InvalidPaddingError` and leaves
    the decoder permanently failed.
    """

    def __init__(
        self,
        source: BinaryIO,
        *,
        config: Optional[DecoderConfig] = None,
        close_source: bool = True,
    ) -> None:
        super().__init__()
        self._source = source
        self._config = config or DecoderConfig()
        self._config.validate()
        self._close_source = close_source

        self._state = DecodeState()
        self._pending = PendingOutput.empty()
        self._buffer = bytearray()
        self._offset = 0
        self._length = 0
        self._eof = False
        self._error: Optional[Base64DecodeError] = None

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> Optional[int]:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        if self._error is not None:
            raise self._error

        with memoryview(b) as view, view.cast("B") as out:
            requested = len(out)
            written = 0
            while written < requested:
                while not self._pending:
                    if self._offset < self._length:
                        raw = self._buffer[self._offset]
                        self._offset += 1
                    else:
                        if self._eof:
                            return written
                        filled = self._refill(requested - written)
                        if filled is None:
                            # Non-blocking source with nothing available yet.
                            return written or None
                        if filled == 0:
                            self._finish()
                            return written
                        raw = self._buffer[0]
                        self._offset = 1

                    symbol = classify(raw)
                    if symbol is None:
                        continue
                    try:
                        self._pending = self._state.add(symbol)
                    except Base64DecodeError as exc:
                        self._error = exc
                        raise

                out[written] = self._pending.pop()
                written += 1
            return written

    def _refill(self, wanted: int) -> Optional[int]:
        to_read = max(wanted, self._config.min_refill_bytes)
        if len(self._buffer) < to_read:
            self._buffer.extend(bytes(to_read - len(self._buffer)))

        readinto = getattr(self._source, "readinto", None)
        if readinto is not None:
            with memoryview(self._buffer) as view, view[:to_read] as target:
                filled = readinto(target)
        else:
            data = self._source.read(to_read)
            if data is None:
                filled = None
            else:
                filled = len(data)
                self._buffer[:filled] = data

        self._offset = 0
        self._length = filled or 0
        logger.debug("staging_refill requested=%s filled=%s", to_read, filled)
        return filled

    def _finish(self) -> None:
        self._eof = True
        self._offset = 0
        self._length = 0
        if self._state.pending:
            logger.debug("source_exhausted dropped_symbols=%s", self._state.pending)

    def close(self) -> None:
        if not self.closed and self._close_source:
            close = getattr(self._source, "close", None)
            if close is not None:
                close()
        super().close()


def decode_stream(
    source: BinaryIO,
    sink: BinaryIO,
    *,
    chunk_size: int = 1024,
    config: Optional[DecoderConfig] = None,
) -> int:
    """Decode everything from ``source`` into ``sink``; return the number of bytes written."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    decoder = StreamingBase64Decoder(source, config=config, close_source=False)
    buffer = bytearray(chunk_size)
    total = 0
    with memoryview(buffer) as view:
        while True:
            count = decoder.readinto(buffer)
            if count is None:
                continue
            if count == 0:
                break
            sink.write(view[:count])
            total += count
    return total


def decode_bytes(data: bytes, *, config: Optional[DecoderConfig] = None) -> bytes:
    """Decode an in-memory Base64 payload with the streaming decoder's rules."""
    with StreamingBase64Decoder(io.BytesIO(data), config=config) as decoder:
        return decoder.readall()
