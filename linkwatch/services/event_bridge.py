"""Event Bridge - Translates host signals into probes and immediate overrides."""

from typing import Callable, List

from loguru import logger

from linkwatch.services.host_environment import HostEnvironment
from linkwatch.services.signals import HostSignal
from linkwatch.services.status_store import StatusStore


class EventBridge:
    """
    Listens to the host and writes through the StatusStore entry points.

    - ONLINE: override to online (quality unknown), then a silent probe
    - OFFLINE: fail-fast override to offline, no probe
    - VISIBLE: silent probe, only while online
    """

    def __init__(self, host: HostEnvironment, store: StatusStore):
        self._host = host
        self._store = store
        self._unsubscribers: List[Callable[[], None]] = []

    @property
    def is_attached(self) -> bool:
        return bool(self._unsubscribers)

    def attach(self):
        """Subscribe to all host signals. Calling twice does nothing."""
        if self._unsubscribers:
            return
        self._unsubscribers = [
            self._host.subscribe(HostSignal.ONLINE, self._handle_online),
            self._host.subscribe(HostSignal.OFFLINE, self._handle_offline),
            self._host.subscribe(HostSignal.VISIBLE, self._handle_visible),
        ]
        logger.debug("[EventBridge] Attached to host signals")

    def close(self):
        """Release every subscription."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        logger.debug("[EventBridge] Detached from host signals")

    def _handle_online(self):
        logger.info("[EventBridge] Host detected online")
        self._store.apply_immediate_override(True)
        # Verify with an actual connectivity check
        self._store.start_probe(silent=True)

    def _handle_offline(self):
        logger.info("[EventBridge] Host detected offline")
        self._store.apply_immediate_override(False)

    def _handle_visible(self):
        if not self._store.read().is_online:
            return
        logger.debug("[EventBridge] Host became visible, checking connectivity")
        self._store.start_probe(silent=True)
