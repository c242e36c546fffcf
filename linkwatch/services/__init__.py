"""
Services subpackage - All connectivity monitoring parts.

- classify: Latency -> quality tier (pure)
- Prober: One bounded, cancellable health check
- StatusStore: Sole owner of ConnectivityState
- EventBridge: Host signals -> probes / overrides
- Scheduler: Periodic silent probes while online
- ConnectivityMonitor: Facade that wires and tears down all of the above
- HostSignal: Signal types emitted by the host (facts, not state)
"""

from linkwatch.services.event_bridge import EventBridge
from linkwatch.services.host_environment import HostEnvironment, SystemHost
from linkwatch.services.monitor import ConnectivityMonitor
from linkwatch.services.prober import CancelToken, Prober, ProbeResult
from linkwatch.services.quality_classifier import classify
from linkwatch.services.scheduler import Scheduler
from linkwatch.services.signals import HostSignal
from linkwatch.services.status_store import StatusStore

__all__ = [
    "CancelToken",
    "ConnectivityMonitor",
    "EventBridge",
    "HostEnvironment",
    "HostSignal",
    "Prober",
    "ProbeResult",
    "Scheduler",
    "StatusStore",
    "SystemHost",
    "classify",
]
