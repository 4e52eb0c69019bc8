from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ..errors import ConfigError


@dataclass
class DecoderConfig:
    # Floor for the staging refill; the decoder otherwise reads as many raw
    # bytes as the caller asked for decoded ones.
    min_refill_bytes: int = 1

    def validate(self) -> None:
        if not isinstance(self.min_refill_bytes, int) or self.min_refill_bytes < 1:
            raise ConfigError(f"decoder.min_refill_bytes must be a positive integer, got {self.min_refill_bytes!r}")

    def to_dict(self) -> Dict:
        return {"min_refill_bytes": self.min_refill_bytes}
