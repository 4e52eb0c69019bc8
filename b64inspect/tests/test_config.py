"""Tests for configuration loading."""

from __future__ import annotations

import os

import pytest

from b64inspect.config import Config, ConfigError, DEFAULT_CONFIG
from b64inspect.utils.dict_utils import deep_merge
from b64inspect.utils.env_config import EnvConfigError, apply_env_overrides, parse_env_value


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("B64I_OUTPUT_CHUNK_SIZE", "B64I_OUTPUT_MODE", "B64I_SYSTEM_LOG_LEVEL", "B64I_DECODER_MIN_REFILL_BYTES"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Config()
    assert config.output.chunk_size == 1024
    assert config.output.mode == "raw"
    assert config.decoder.min_refill_bytes == 1
    assert config.system.log_level == "WARNING"
    assert DEFAULT_CONFIG.to_dict() == config.to_dict()


def test_from_yaml_merges_left_to_right(tmp_path):
    first = tmp_path / "first.yaml"
    second = tmp_path / "second.yaml"
    first.write_text("output:\n  chunk_size: 16\n  mode: text\n", encoding="utf-8")
    second.write_text("output:\n  chunk_size: 32\n", encoding="utf-8")

    config = Config.from_yaml([first, second])

    assert config.output.chunk_size == 32
    assert config.output.mode == "text"
    assert config.decoder.min_refill_bytes == 1


def test_from_yaml_skips_missing_files(tmp_path):
    config = Config.from_yaml([tmp_path / "missing.yaml"])
    assert config.to_dict() == Config().to_dict()


def test_from_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        Config.from_yaml([path])


def test_unknown_key_is_config_error():
    with pytest.raises(ConfigError, match="Unknown configuration key"):
        Config.from_dict({"output": {"colour": "red"}})


def test_load_applies_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("decoder:\n  min_refill_bytes: 8\n", encoding="utf-8")
    monkeypatch.setenv("B64I_OUTPUT_CHUNK_SIZE", "4096")
    monkeypatch.setenv("B64I_DECODER_MIN_REFILL_BYTES", "512")

    config = Config.load([path])

    assert config.output.chunk_size == 4096
    assert config.decoder.min_refill_bytes == 512


def test_load_reads_dotenv(tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("B64I_OUTPUT_MODE=text\n", encoding="utf-8")

    try:
        config = Config.load([], dotenv_path=str(dotenv))
    finally:
        os.environ.pop("B64I_OUTPUT_MODE", None)

    assert config.output.mode == "text"


def test_load_validates(monkeypatch):
    monkeypatch.setenv("B64I_OUTPUT_MODE", "hex")
    with pytest.raises(ConfigError, match="output.mode"):
        Config.load([])


def test_empty_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("B64I_SYSTEM_LOG_LEVEL", "")
    with pytest.raises(ConfigError, match="system.log_level"):
        Config.load([])


def test_unknown_log_level_is_rejected():
    config = Config.from_dict({"system": {"log_level": "LOUD"}})
    with pytest.raises(ConfigError, match="system.log_level"):
        config.validate()


def test_log_level_is_case_insensitive():
    Config.from_dict({"system": {"log_level": "debug"}}).validate()


def test_empty_integer_override_is_rejected(monkeypatch):
    monkeypatch.setenv("B64I_OUTPUT_CHUNK_SIZE", "")
    with pytest.raises(ConfigError, match="output.chunk_size"):
        Config.load([])


def test_load_rejects_unparseable_env(monkeypatch):
    monkeypatch.setenv("B64I_OUTPUT_CHUNK_SIZE", "lots")
    with pytest.raises(EnvConfigError, match="B64I_OUTPUT_CHUNK_SIZE"):
        Config.load([])


class TestParseEnvValue:
    def test_integer(self):
        assert parse_env_value("123", 0) == 123
        with pytest.raises(EnvConfigError, match="Cannot parse .* as integer"):
            parse_env_value("1.5", 0)

    def test_null_variants(self):
        assert parse_env_value("", "x") is None
        assert parse_env_value("None", "x") is None

    def test_string(self):
        assert parse_env_value("DEBUG", "INFO") == "DEBUG"


def test_apply_env_overrides_nested(monkeypatch):
    monkeypatch.setenv("TEST_A_B", "5")
    result = apply_env_overrides({"a": {"b": 1, "c": [1, 2]}, "d": "x"}, prefix="TEST")
    assert result == {"a": {"b": 5, "c": [1, 2]}, "d": "x"}


def test_deep_merge_replaces_scalars_and_merges_dicts():
    base = {"a": {"b": 1, "c": 2}, "d": [1]}
    assert deep_merge(base, {"a": {"c": 3}, "d": [2]}) == {"a": {"b": 1, "c": 3}, "d": [2]}
    assert deep_merge(base, None) == base
