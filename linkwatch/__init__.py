"""linkwatch - Connectivity monitor for web console clients."""

__version__ = "0.1.0"
__author__ = "linkwatch contributors"
__description__ = "Reconciles host signals and health-check probes into one connectivity status"

from linkwatch.core.config import MonitorConfig
from linkwatch.core.types import ConnectivityState, QualityTier
from linkwatch.services.monitor import ConnectivityMonitor

__all__ = ["ConnectivityMonitor", "ConnectivityState", "MonitorConfig", "QualityTier", "__version__"]
