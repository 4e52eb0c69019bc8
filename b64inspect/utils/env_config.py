"""Environment variable overrides for configuration values.

Variables follow the pattern ``B64I_{PATH_TO_PROPERTY}``: the prefix, then
the config path components joined by underscores, all UPPERCASE.

Examples:
    B64I_SYSTEM_LOG_LEVEL=DEBUG
    B64I_OUTPUT_CHUNK_SIZE=4096
    B64I_DECODER_MIN_REFILL_BYTES=512
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "B64I"


class EnvConfigError(Exception):
    """Raised when environment variable configuration fails."""


def parse_env_value(value: str, existing_value: Any) -> Any:
    """Parse an environment variable string using the type of the value it replaces.

    Examples:
        >>> parse_env_value("123", 0)
        123
        >>> parse_env_value("hello", "")
        'hello'
    """
    if value == "" or value.lower() in ("null", "none"):
        return None

    target_type = type(existing_value) if existing_value is not None else str

    if target_type is int:
        try:
            return int(value)
        except ValueError as exc:
            raise EnvConfigError(f"Cannot parse '{value}' as integer") from exc

    return value


def _build_env_var_name(path: List[str], prefix: str) -> str:
    """
    >>> _build_env_var_name(["output", "chunk_size"], "B64I")
    'B64I_OUTPUT_CHUNK_SIZE'
    """
    parts = [prefix] + path
    return "_".join(part.upper() for part in parts)


def apply_env_overrides(
    config_dict: Dict[str, Any],
    prefix: str = DEFAULT_PREFIX,
    path: List[str] | None = None,
) -> Dict[str, Any]:
    """Recursively apply environment variable overrides to a config dict.

    Nested dicts are walked so individual values can be set; lists are left
    untouched.

    Raises:
        EnvConfigError: If an environment variable value cannot be parsed
    """
    if path is None:
        path = []

    result = dict(config_dict)

    for key, value in result.items():
        current_path = path + [key]

        if isinstance(value, list):
            continue

        if isinstance(value, dict):
            result[key] = apply_env_overrides(value, prefix, current_path)
            continue

        env_var_name = _build_env_var_name(current_path, prefix)
        env_value = os.environ.get(env_var_name)
        if env_value is None:
            continue

        try:
            parsed_value = parse_env_value(env_value, value)
        except EnvConfigError as exc:
            raise EnvConfigError(
                f"Failed to parse environment variable {env_var_name}: {exc}"
            ) from exc
        result[key] = parsed_value
        logger.info(
            "config_override_from_env var=%s value_type=%s path=%s",
            env_var_name,
            type(parsed_value).__name__,
            ".".join(current_path),
        )

    return result


__all__ = ["apply_env_overrides", "parse_env_value", "EnvConfigError", "DEFAULT_PREFIX"]
