"""Core types and enums."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class QualityTier(Enum):
    """Discrete buckets summarizing measured round-trip latency."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    OFFLINE = "offline"
    UNKNOWN = "unknown"

    def __str__(self):
        return self.value


class ProbeOutcome(Enum):
    """How a single health-check request ended."""

    OK = "ok"
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"
    HTTP_STATUS = "http_status"
    CANCELLED = "cancelled"

    def __str__(self):
        return self.value


@dataclass
class ConnectivityState:
    """Best current estimate of the path to the backend."""

    is_online: bool
    last_checked_at: Optional[datetime] = None
    latency_ms: Optional[int] = None
    quality_tier: QualityTier = QualityTier.UNKNOWN
    is_checking: bool = False

    @property
    def is_offline(self) -> bool:
        return not self.is_online

    def to_dict(self) -> dict:
        return {
            "is_online": self.is_online,
            "last_checked_at": self.last_checked_at.isoformat() if self.last_checked_at else None,
            "latency_ms": self.latency_ms,
            "quality_tier": self.quality_tier.value,
            "is_checking": self.is_checking,
        }
