"""Tests for configuration management."""

import json

import pytest

from linkwatch.core.config import ConfigError, MonitorConfig
from linkwatch.core.validators import ValidationError


def test_config_default_values():
    """Test default configuration values."""
    config = MonitorConfig()
    assert config.check_interval_ms == 30000
    assert config.ping_url == "/api/health"
    assert config.timeout_ms == 5000
    assert config.enable_periodic_check is True
    assert config.timeout_s == 5.0
    assert config.check_interval_s == 30.0


def test_from_mapping_accepts_camel_case():
    """Test camelCase option names map onto fields."""
    config = MonitorConfig.from_mapping(
        {"checkIntervalMs": 15000, "pingUrl": "/healthz", "timeoutMs": 800, "enablePeriodicCheck": False}
    )
    assert config.check_interval_ms == 15000
    assert config.ping_url == "/healthz"
    assert config.timeout_ms == 800
    assert config.enable_periodic_check is False


def test_from_mapping_ignores_unknown_keys():
    config = MonitorConfig.from_mapping({"timeout_ms": 100, "retries": 3})
    assert config.timeout_ms == 100


@pytest.mark.parametrize(
    "overrides",
    [
        {"timeout_ms": 0},
        {"timeout_ms": -5},
        {"check_interval_ms": "30000"},
        {"check_interval_ms": True},
        {"ping_url": "api/health"},
        {"ping_url": "ftp://erp.test/health"},
        {"ping_url": "/api/ health"},
        {"base_url": "erp.test"},
        {"enable_periodic_check": "yes"},
    ],
)
def test_invalid_values_rejected(overrides):
    """Test invalid option values raise ValidationError."""
    with pytest.raises(ValidationError):
        MonitorConfig(**overrides)


def test_resolve_ping_url():
    """Test absolute and relative ping URL resolution."""
    absolute = MonitorConfig(ping_url="https://erp.test/health")
    relative = MonitorConfig(ping_url="/api/health", base_url="https://erp.test/app/")

    assert absolute.resolve_ping_url() == "https://erp.test/health"
    assert relative.resolve_ping_url() == "https://erp.test/api/health"

    with pytest.raises(ValidationError):
        MonitorConfig(ping_url="/api/health", base_url=None).resolve_ping_url()


def test_load_json(tmp_path):
    """Test loading a JSON config file."""
    config_file = tmp_path / "monitor.json"
    config_file.write_text(json.dumps({"pingUrl": "https://erp.test/ping", "timeoutMs": 1500}), encoding="utf-8")

    config = MonitorConfig.load(config_file)
    assert config.ping_url == "https://erp.test/ping"
    assert config.timeout_ms == 1500


def test_load_yaml(tmp_path):
    """Test loading a YAML config file."""
    config_file = tmp_path / "monitor.yml"
    config_file.write_text("check_interval_ms: 60000\nbase_url: https://erp.test\n", encoding="utf-8")

    config = MonitorConfig.load(config_file)
    assert config.check_interval_ms == 60000
    assert config.resolve_ping_url() == "https://erp.test/api/health"


def test_load_empty_yaml_uses_defaults(tmp_path):
    config_file = tmp_path / "monitor.yaml"
    config_file.write_text("", encoding="utf-8")

    assert MonitorConfig.load(config_file).timeout_ms == 5000


def test_load_invalid_json(tmp_path):
    """Test malformed files raise ConfigError."""
    config_file = tmp_path / "monitor.json"
    config_file.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        MonitorConfig.load(config_file)


def test_load_non_mapping(tmp_path):
    config_file = tmp_path / "monitor.yaml"
    config_file.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        MonitorConfig.load(config_file)


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        MonitorConfig.load(tmp_path / "missing.json")


def test_to_dict_round_trip():
    config = MonitorConfig(timeout_ms=900, base_url="https://erp.test")
    assert MonitorConfig.from_mapping(config.to_dict()) == config
