"""Core types, configuration and logging for linkwatch."""

from linkwatch.core.config import ConfigError, MonitorConfig
from linkwatch.core.types import ConnectivityState, ProbeOutcome, QualityTier
from linkwatch.core.validators import ValidationError

__all__ = [
    "ConfigError",
    "ConnectivityState",
    "MonitorConfig",
    "ProbeOutcome",
    "QualityTier",
    "ValidationError",
]
