from .config import DecoderConfig
from .errors import Base64DecodeError, DecoderStateError, InvalidPaddingError
from .state import DecodeState
from .stream import StreamingBase64Decoder, decode_bytes, decode_stream
from .symbols import classify
from .types import PADDING, PendingOutput, Symbol

__all__ = [
    "Base64DecodeError",
    "DecoderStateError",
    "InvalidPaddingError",
    "DecodeState",
    "DecoderConfig",
    "PADDING",
    "PendingOutput",
    "StreamingBase64Decoder",
    "Symbol",
    "classify",
    "decode_bytes",
    "decode_stream",
]
