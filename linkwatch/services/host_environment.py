"""
Host Environment - Source of the host's own connectivity and visibility facts.

HostEnvironment keeps the host's cached online flag and emits HostSignal
transitions to subscribers. Signals can be injected synthetically with
set_online()/set_visible(); SystemHost derives them from the OS routing table.
"""

import asyncio
from typing import Callable, Dict, List, Optional

from loguru import logger

from linkwatch.core.constants import HOST_POLL_INTERVAL_S
from linkwatch.services.signals import HostSignal
from linkwatch.utils.network_utils import NetworkUtils


class HostEnvironment:
    """Holds the host's last-known online flag and fans out signal transitions."""

    def __init__(self, online: bool = True, visible: bool = True):
        self._online = online
        self._visible = visible
        self._listeners: Dict[HostSignal, List[Callable[[], None]]] = {signal: [] for signal in HostSignal}

    def is_online(self) -> bool:
        """Host's cached connectivity flag (the browser's navigator.onLine equivalent)."""
        return self._online

    def is_visible(self) -> bool:
        return self._visible

    def subscribe(self, signal: HostSignal, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register a callback for one signal.

        Returns:
            A function that removes the callback. Calling it twice is harmless.
        """
        self._listeners[signal].append(callback)

        def unsubscribe():
            try:
                self._listeners[signal].remove(callback)
            except ValueError:
                pass

        return unsubscribe

    def listener_count(self, signal: Optional[HostSignal] = None) -> int:
        if signal is not None:
            return len(self._listeners[signal])
        return sum(len(callbacks) for callbacks in self._listeners.values())

    def set_online(self, online: bool):
        """Update the cached flag and emit ONLINE/OFFLINE on a real transition."""
        if online == self._online:
            return
        self._online = online
        logger.info(f"[HostEnvironment] Host reports {'online' if online else 'offline'}")
        self._emit(HostSignal.ONLINE if online else HostSignal.OFFLINE)

    def set_visible(self, visible: bool):
        """Update visibility and emit VISIBLE when the host comes back to the foreground."""
        was_visible = self._visible
        self._visible = visible
        if visible and not was_visible:
            logger.debug("[HostEnvironment] Host became visible")
            self._emit(HostSignal.VISIBLE)

    def _emit(self, signal: HostSignal):
        # Copy so callbacks may unsubscribe while we iterate
        for callback in list(self._listeners[signal]):
            try:
                callback()
            except Exception as e:
                logger.error(f"[HostEnvironment] Error in {signal.name} listener: {e}")


class SystemHost(HostEnvironment):
    """
    HostEnvironment backed by the operating system's default route.

    Reports offline only when the routing table has no default route. While
    the table cannot be read the host starts online and keeps its last flag.
    """

    def __init__(self, poll_interval_s: float = HOST_POLL_INTERVAL_S, online: Optional[bool] = None):
        """
        Initialize the host.

        Args:
            poll_interval_s: Seconds between routing table reads in start()
            online: Initial flag. When None the routing table is read synchronously.
        """
        if online is None:
            online = self._interpret(NetworkUtils.has_default_route(), current=True)
        super().__init__(online=online, visible=True)
        self._poll_interval_s = poll_interval_s
        self._task: Optional[asyncio.Task] = None

    @classmethod
    async def detect(cls, poll_interval_s: float = HOST_POLL_INTERVAL_S) -> "SystemHost":
        """Build a SystemHost with the first routing table read off the loop thread."""
        loop = asyncio.get_running_loop()
        has_route = await loop.run_in_executor(None, NetworkUtils.has_default_route)
        return cls(poll_interval_s=poll_interval_s, online=cls._interpret(has_route, current=True))

    @staticmethod
    def _interpret(has_route: Optional[bool], current: bool) -> bool:
        if has_route is None:
            logger.debug(f"[SystemHost] Routing table unreadable, keeping host {'online' if current else 'offline'}")
            return current
        return has_route

    def refresh(self) -> bool:
        """Re-read the routing table and emit a signal if reachability changed."""
        self.set_online(self._interpret(NetworkUtils.has_default_route(), current=self._online))
        return self._online

    def start(self):
        """Start polling on the running event loop."""
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.get_running_loop().create_task(self._poll_loop())
        logger.debug(f"[SystemHost] Polling routing table every {self._poll_interval_s}s")

    def stop(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.debug("[SystemHost] Stopped polling")

    async def _poll_loop(self):
        loop = asyncio.get_running_loop()
        while True:
            await asyncio.sleep(self._poll_interval_s)
            # The route lookup shells out, keep it off the loop thread
            has_route = await loop.run_in_executor(None, NetworkUtils.has_default_route)
            self.set_online(self._interpret(has_route, current=self._online))
