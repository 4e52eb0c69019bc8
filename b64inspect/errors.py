from __future__ import annotations


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""
