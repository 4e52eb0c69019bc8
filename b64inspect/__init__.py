"""Streaming Base64 decoding for byte sources."""

from importlib.metadata import PackageNotFoundError, version

from .codec import decode_bytes, decode_stream, StreamingBase64Decoder

try:
    __version__ = version("b64inspect")
except PackageNotFoundError:  # pragma: no cover - fallback during local execution
    __version__ = "0.0.0"

__all__ = ["__version__", "StreamingBase64Decoder", "decode_bytes", "decode_stream"]
