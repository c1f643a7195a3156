"""Unit tests for configuration loading."""
import sys
import pytest
from unittest.mock import patch
from pydantic import ValidationError
from stakepool.core.config import PoolConfig, configure_logging, get_log_level, load_config

def test_default_config(monkeypatch):
    """Test configuration defaults."""
    monkeypatch.delenv("STAKEPOOL_LOG_LEVEL", raising=False)
    config = load_config()
    assert isinstance(config, PoolConfig)
    assert config.total_reward == 1_000_000
    assert config.log_level == "INFO"
    assert config.stakes == {}

def test_load_yaml_config(tmp_path):
    """Test loading configuration from YAML."""
    config_path = tmp_path / "pool.yaml"
    config_path.write_text(
        "total_reward: 500\n"
        "log_level: DEBUG\n"
        "stakes:\n"
        "  Alice: 1\n"
        "  Bob: 4\n"
    )
    config = load_config(config_path)
    assert config.total_reward == 500
    assert config.log_level == "DEBUG"
    assert config.stakes == {"Alice": 1, "Bob": 4}

def test_load_empty_yaml_config(tmp_path):
    """Test an empty file falls back to defaults."""
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")
    assert load_config(config_path).total_reward == 1_000_000

def test_invalid_config(tmp_path):
    """Test a negative reward is rejected."""
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("total_reward: -5\n")
    with pytest.raises(ValidationError):
        load_config(config_path)

def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")

def test_env_log_level(env_setup, tmp_path):
    """Test the environment overrides the configured log level."""
    assert get_log_level() == "DEBUG"
    config_path = tmp_path / "pool.yaml"
    config_path.write_text("log_level: WARNING\n")
    assert load_config(config_path).log_level == "DEBUG"

def test_log_level_default(monkeypatch):
    monkeypatch.delenv("STAKEPOOL_LOG_LEVEL", raising=False)
    assert get_log_level() == "INFO"
    assert get_log_level("warning") == "WARNING"

def test_configure_logging():
    """Test loguru is reset to a single stderr sink."""
    with patch('stakepool.core.config.logger') as mock_logger:
        configure_logging("debug")
        mock_logger.remove.assert_called_once_with()
        mock_logger.add.assert_called_once_with(sys.stderr, level="DEBUG")

def test_config_log_level_is_validated(tmp_path):
    """Test an unknown log level in the file is rejected."""
    config_path = tmp_path / "loud.yaml"
    config_path.write_text("log_level: LOUD\n")
    with pytest.raises(ValidationError):
        load_config(config_path)

def test_config_log_level_is_upper_cased(tmp_path, monkeypatch):
    monkeypatch.delenv("STAKEPOOL_LOG_LEVEL", raising=False)
    config_path = tmp_path / "pool.yaml"
    config_path.write_text("log_level: warning\n")
    assert load_config(config_path).log_level == "WARNING"

def test_env_log_level_is_validated(tmp_path, monkeypatch):
    """Test an unknown log level in the environment is rejected."""
    monkeypatch.setenv("STAKEPOOL_LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        load_config()

@pytest.mark.parametrize("content", ["- Alice\n- Bob\n", "42\n", "just text\n"])
def test_config_must_be_a_mapping(tmp_path, content):
    """Test a file whose top level is not a mapping is a validation error."""
    config_path = tmp_path / "list.yaml"
    config_path.write_text(content)
    with pytest.raises(ValidationError):
        load_config(config_path)

def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("LOUD")
