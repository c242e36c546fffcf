"""
Connectivity Monitor - Lifecycle facade over the monitoring parts.

Wires Prober, StatusStore, EventBridge and Scheduler for one consumer and
owns their construction and teardown:
- Construction validates configuration (fatal on bad ping_url)
- start() attaches host signals, runs the initial probe, arms the timer
- stop() releases subscriptions, clears the timer, cancels the probe
"""

from typing import Callable, Optional

import httpx
from loguru import logger

from linkwatch.core.config import MonitorConfig
from linkwatch.core.types import ConnectivityState, QualityTier
from linkwatch.services import status_presenter
from linkwatch.services.event_bridge import EventBridge
from linkwatch.services.host_environment import HostEnvironment
from linkwatch.services.prober import Prober
from linkwatch.services.scheduler import Scheduler
from linkwatch.services.status_store import StateListener, StatusStore


class ConnectivityMonitor:
    """
    Facade exposed to UI collaborators.

    Collaborators read `status` (or subscribe) and may call `recheck()`;
    nothing else writes the state.
    """

    def __init__(
        self,
        config: Optional[MonitorConfig] = None,
        host: Optional[HostEnvironment] = None,
        client: Optional[httpx.AsyncClient] = None,
        prober: Optional[Prober] = None,
    ):
        """
        Initialize the monitor.

        Args:
            config: Monitor options, defaults when omitted
            host: Source of online/offline/visibility signals
            client: Shared HTTP client for the default prober
            prober: Replaces the default prober entirely

        Raises:
            ValidationError: If the ping URL cannot be resolved. This includes
                ConnectivityMonitor() with all defaults when no base_url is
                configured, since the default ping_url is a bare path.
        """
        self._config = config or MonitorConfig()
        self._ping_url = self._config.resolve_ping_url()
        self._host = host or HostEnvironment()
        self._prober = prober or Prober(client=client, host_online=self._host.is_online)

        self._store = StatusStore(
            prober=self._prober,
            ping_url=self._ping_url,
            timeout_ms=self._config.timeout_ms,
            host_online=self._host.is_online,
        )
        self._bridge = EventBridge(self._host, self._store)
        self._scheduler = Scheduler(
            self._store,
            check_interval_ms=self._config.check_interval_ms,
            enabled=self._config.enable_periodic_check,
        )
        self._running = False

    async def __aenter__(self) -> "ConnectivityMonitor":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    def start(self):
        """Start monitoring. Must be called from a running event loop."""
        if self._running or self._store.closed:
            return
        self._running = True

        self._bridge.attach()
        if self._host.is_online():
            self._store.start_probe(silent=True)
        self._scheduler.start()

        logger.info(
            f"[ConnectivityMonitor] Started (url={self._ping_url}, "
            f"interval={self._config.check_interval_ms}ms, timeout={self._config.timeout_ms}ms, "
            f"periodic={self._config.enable_periodic_check})"
        )

    def stop(self):
        """
        Tear down. Synchronous and final: no callback fires afterwards.

        Order matters: detach signals first, then the timer, then the probe.
        """
        if self._store.closed:
            return
        self._running = False
        self._bridge.close()
        self._scheduler.close()
        self._store.close()
        logger.info("[ConnectivityMonitor] Stopped")

    async def aclose(self):
        """stop() and release the HTTP client."""
        self.stop()
        await self._prober.aclose()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def config(self) -> MonitorConfig:
        return self._config

    @property
    def ping_url(self) -> str:
        return self._ping_url

    @property
    def host(self) -> HostEnvironment:
        return self._host

    @property
    def store(self) -> StatusStore:
        return self._store

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    # Collaborator API

    @property
    def status(self) -> ConnectivityState:
        return self._store.read()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self._store.subscribe(listener)

    async def recheck(self) -> ConnectivityState:
        """Manual, user-visible re-check (e.g. a retry button)."""
        return await self._store.recheck()

    @property
    def is_online(self) -> bool:
        return self.status.is_online

    @property
    def is_offline(self) -> bool:
        return not self.status.is_online

    @property
    def quality_tier(self) -> QualityTier:
        return self.status.quality_tier

    @property
    def is_connection_good(self) -> bool:
        return status_presenter.is_connection_good(self.quality_tier)

    @property
    def is_connection_poor(self) -> bool:
        return status_presenter.is_connection_poor(self.quality_tier)

    @property
    def status_text(self) -> str:
        return status_presenter.status_text(self.status)

    @property
    def quality_text(self) -> str:
        return status_presenter.quality_text(self.quality_tier)

    @property
    def status_color(self) -> str:
        return status_presenter.status_color(self.quality_tier)
