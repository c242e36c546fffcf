"""Scheduler - Periodic silent probes while the link is believed to be up."""

import asyncio
from typing import Callable, Optional

from loguru import logger

from linkwatch.core.types import ConnectivityState
from linkwatch.services.status_store import StatusStore


class Scheduler:
    """
    Drives one recurring event-loop timer.

    Each tick triggers a silent probe while online. The timer is dropped as
    soon as the store reports offline and re-armed on the next online state.
    """

    def __init__(self, store: StatusStore, check_interval_ms: int, enabled: bool = True):
        self._store = store
        self._interval_s = check_interval_ms / 1000.0
        self._enabled = enabled

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._started = False
        self._closed = False
        self._ticks = 0

    @property
    def is_scheduled(self) -> bool:
        """True while a tick is pending."""
        return self._handle is not None

    @property
    def tick_count(self) -> int:
        return self._ticks

    def start(self):
        """Arm the timer on the running loop. No-op when periodic checks are disabled."""
        if not self._enabled:
            logger.debug("[Scheduler] Periodic check disabled")
            return
        if self._started or self._closed:
            return

        self._started = True
        self._loop = asyncio.get_running_loop()
        self._unsubscribe = self._store.subscribe(self._on_state)

        if self._store.read().is_online:
            self._schedule_next()
            logger.info(f"[Scheduler] Starting periodic connectivity check every {int(self._interval_s * 1000)}ms")
        else:
            logger.info("[Scheduler] Host offline, periodic check suspended")

    def close(self):
        """Clear the timer unconditionally. No tick fires afterwards."""
        if self._closed:
            return
        self._closed = True
        self._cancel_timer()
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        logger.debug("[Scheduler] Stopped")

    def _on_state(self, state: ConnectivityState):
        if self._closed:
            return
        if state.is_online:
            if self._handle is None:
                logger.debug("[Scheduler] Online again, resuming periodic check")
                self._schedule_next()
        elif self._handle is not None:
            logger.debug("[Scheduler] Offline, suspending periodic check")
            self._cancel_timer()

    def _schedule_next(self):
        self._handle = self._loop.call_later(self._interval_s, self._tick)

    def _cancel_timer(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self):
        self._handle = None
        if self._closed:
            return

        if not self._store.read().is_online:
            logger.debug("[Scheduler] Tick while offline, skipping probe")
            return

        self._ticks += 1
        self._store.start_probe(silent=True)
        self._schedule_next()
