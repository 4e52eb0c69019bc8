from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml
from dotenv import load_dotenv

from .codec.config import DecoderConfig
from .errors import ConfigError
from .utils.dict_utils import deep_merge
from .utils.env_config import DEFAULT_PREFIX, apply_env_overrides

logger = logging.getLogger(__name__)

OUTPUT_MODES = ("raw", "text")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class OutputConfig:
    chunk_size: int = 1024
    mode: str = "raw"  # raw | text

    def validate(self) -> None:
        if not isinstance(self.chunk_size, int) or self.chunk_size < 1:
            raise ConfigError(f"output.chunk_size must be a positive integer, got {self.chunk_size!r}")
        if self.mode not in OUTPUT_MODES:
            raise ConfigError(f"output.mode must be one of {', '.join(OUTPUT_MODES)}, got {self.mode!r}")

    def to_dict(self) -> Dict:
        return {"chunk_size": self.chunk_size, "mode": self.mode}


@dataclass
class SystemConfig:
    log_level: str = "WARNING"

    def validate(self) -> None:
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"system.log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    def to_dict(self) -> Dict:
        return {"log_level": self.log_level}


@dataclass
class Config:
    system: SystemConfig = field(default_factory=SystemConfig)
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict:
        return {
            "system": self.system.to_dict(),
            "decoder": self.decoder.to_dict(),
            "output": self.output.to_dict(),
        }

    def validate(self) -> "Config":
        self.system.validate()
        self.decoder.validate()
        self.output.validate()
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        system = data.get("system") or {}
        decoder = data.get("decoder") or {}
        output = data.get("output") or {}

        try:
            return cls(
                system=SystemConfig(**system),
                decoder=DecoderConfig(**decoder),
                output=OutputConfig(**output),
            )
        except TypeError as exc:
            raise ConfigError(f"Unknown configuration key: {exc}") from exc

    @classmethod
    def from_yaml(cls, paths: Iterable[Path]) -> "Config":
        """Load and merge YAML config files over the defaults.

        Files are merged left-to-right, later files overriding earlier ones.
        Missing paths are skipped with a warning.
        """
        return cls.from_dict(cls._merge_yaml(paths))

    @classmethod
    def load(
        cls,
        paths: Optional[Iterable[Path]] = None,
        *,
        dotenv_path: Optional[str] = None,
        env_prefix: str = DEFAULT_PREFIX,
    ) -> "Config":
        """Build the effective configuration: defaults, YAML files, then environment."""
        load_dotenv(dotenv_path)
        merged = cls._merge_yaml(paths or [])
        merged = apply_env_overrides(merged, prefix=env_prefix)
        return cls.from_dict(merged).validate()

    @staticmethod
    def _merge_yaml(paths: Iterable[Path]) -> Dict[str, Any]:
        merged_dict = Config().to_dict()

        for path in paths:
            path = Path(path)
            if not path.is_file():
                logger.warning("Config path does not exist or is not a file: %s", path)
                continue
            try:
                with path.open("r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {path} must contain a mapping at the top level")
            merged_dict = deep_merge(merged_dict, data)

        return merged_dict


DEFAULT_CONFIG = Config()
