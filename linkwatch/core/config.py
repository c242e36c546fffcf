"""Configuration management for linkwatch monitors."""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import yaml
from loguru import logger

from linkwatch.core.constants import (DEFAULT_BASE_URL,
                                      DEFAULT_CHECK_INTERVAL_MS,
                                      DEFAULT_ENABLE_PERIODIC_CHECK,
                                      DEFAULT_PING_URL, DEFAULT_TIMEOUT_MS)
from linkwatch.core.validators import (ValidationError, validate_base_url,
                                       validate_ping_url,
                                       validate_positive_ms)

# Option names as written in front-end style config files
_CAMEL_CASE_KEYS = {
    "checkIntervalMs": "check_interval_ms",
    "pingUrl": "ping_url",
    "timeoutMs": "timeout_ms",
    "enablePeriodicCheck": "enable_periodic_check",
    "baseUrl": "base_url",
}


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or parsed."""

    pass


@dataclass
class MonitorConfig:
    """
    Options supplied at monitor construction. All have defaults.

    The default ping_url is the path "/api/health", which needs base_url (or
    LINKWATCH_BASE_URL) before a monitor can use it. MonitorConfig() itself is
    valid; resolve_ping_url() raises ValidationError until an origin is set.
    """

    check_interval_ms: int = DEFAULT_CHECK_INTERVAL_MS
    ping_url: str = DEFAULT_PING_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    enable_periodic_check: bool = DEFAULT_ENABLE_PERIODIC_CHECK
    base_url: Optional[str] = field(default=DEFAULT_BASE_URL)

    def __post_init__(self):
        validate_positive_ms("check_interval_ms", self.check_interval_ms)
        validate_positive_ms("timeout_ms", self.timeout_ms)
        validate_ping_url(self.ping_url)
        validate_base_url(self.base_url)
        if not isinstance(self.enable_periodic_check, bool):
            raise ValidationError("enable_periodic_check must be a boolean")

    @property
    def check_interval_s(self) -> float:
        return self.check_interval_ms / 1000.0

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0

    def resolve_ping_url(self) -> str:
        """
        Get the absolute URL the prober should hit.

        Raises:
            ValidationError: If ping_url is a bare path and no base_url is set
        """
        if self.ping_url.startswith("/"):
            if not self.base_url:
                raise ValidationError(f"ping_url {self.ping_url!r} is relative but no base_url is configured")
            return urljoin(self.base_url, self.ping_url)
        return self.ping_url

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "MonitorConfig":
        """
        Build a config from a dict, accepting snake_case or camelCase keys.

        Unknown keys are ignored with a warning.
        """
        known = {f for f in cls.__dataclass_fields__}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known:
                logger.warning(f"[MonitorConfig] Ignoring unknown option: {key}")
                continue
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def load(cls, config_file: Path) -> "MonitorConfig":
        """
        Load configuration from a JSON or YAML file (chosen by suffix).

        Raises:
            ConfigError: If the file is unreadable or not a mapping
            ValidationError: If an option value is invalid
        """
        config_file = Path(config_file)
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                if config_file.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config {config_file}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config {config_file} must contain a mapping, got {type(data).__name__}")

        logger.debug(f"[MonitorConfig] Loaded {config_file}")
        return cls.from_mapping(data)
