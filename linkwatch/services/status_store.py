"""
Status Store - Single owner of the canonical connectivity state.

Everything that changes ConnectivityState goes through this class:
- Probe results (via start_probe / recheck, applied by generation)
- Immediate overrides from EventBridge (host online/offline signals)

Each probe is stamped with a generation number at dispatch. Only the result
of the newest generation is applied, so a stale response can never overwrite
a fresher one.
"""

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional

from loguru import logger

from linkwatch.core.types import ConnectivityState, ProbeOutcome, QualityTier
from linkwatch.services.prober import CancelToken, Prober, ProbeResult
from linkwatch.services.quality_classifier import classify

StateListener = Callable[[ConnectivityState], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StatusStore:
    """Owns ConnectivityState and serializes every write to it."""

    def __init__(
        self,
        prober: Prober,
        ping_url: str,
        timeout_ms: int,
        host_online: Callable[[], bool],
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the store.

        Args:
            prober: Performs the actual health checks
            ping_url: Absolute health-check URL
            timeout_ms: Per-probe timeout
            host_online: Host's cached online flag, used for the initial state
            clock: Wall clock for last_checked_at
        """
        self._prober = prober
        self._ping_url = ping_url
        self._timeout_ms = timeout_ms
        self._host_online = host_online
        self._clock = clock

        initial_online = bool(host_online())
        self._state = ConnectivityState(
            is_online=initial_online,
            quality_tier=QualityTier.UNKNOWN if initial_online else QualityTier.OFFLINE,
        )

        self._listeners: List[StateListener] = []
        self._generation = 0
        self._token: Optional[CancelToken] = None
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    # Read side

    def read(self) -> ConnectivityState:
        """Synchronous snapshot of the current state."""
        return replace(self._state)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every state change.

        Returns:
            Unsubscribe function
        """
        self._listeners.append(listener)

        def unsubscribe():
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def probe_in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def closed(self) -> bool:
        return self._closed

    # Probing

    def start_probe(self, silent: bool = True) -> Optional[asyncio.Task]:
        """
        Supersede any in-flight probe and dispatch a new one.

        Must be called from the event loop thread.

        Args:
            silent: False marks the probe user-visible (is_checking=True)

        Returns:
            The probe task, or None once the store is closed
        """
        if self._closed:
            return None

        self._cancel_in_flight()
        self._generation += 1
        generation = self._generation
        token = CancelToken()
        self._token = token

        if not silent and not self._state.is_checking:
            self._state.is_checking = True
            self._notify()

        logger.debug(f"[StatusStore] Dispatching {'silent' if silent else 'manual'} probe #{generation}")
        task = asyncio.get_running_loop().create_task(self._run_probe(generation, token))
        self._task = task
        return task

    async def recheck(self) -> ConnectivityState:
        """
        User-initiated check. Sets is_checking immediately and returns the
        state once this probe, and any probe that superseded it, has settled.
        """
        task = self.start_probe(silent=False)
        while task is not None:
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            if self._task is task or self._task is None or self._task.done():
                break
            task = self._task
        return self.read()

    async def _run_probe(self, generation: int, token: CancelToken) -> bool:
        try:
            try:
                result = await self._prober.probe(self._ping_url, self._timeout_ms, token)
            except Exception as e:
                logger.exception(f"[StatusStore] Probe #{generation} raised: {e}")
                result = ProbeResult(
                    reachable=False,
                    latency_ms=None,
                    outcome=ProbeOutcome.NETWORK_ERROR,
                    host_online=bool(self._host_online()),
                    error=str(e),
                )
            return self.apply_probe_result(generation, result)
        finally:
            if self._token is token:
                self._token = None
                self._task = None

    def _cancel_in_flight(self):
        if self._token is not None:
            self._token.cancel()
            self._token = None

    # Write side

    def apply_probe_result(self, generation: int, result: ProbeResult) -> bool:
        """
        Apply a probe result if it belongs to the newest probe.

        Returns:
            True if the state was updated
        """
        if self._closed:
            logger.debug(f"[StatusStore] Dropped probe #{generation} result (closed)")
            return False
        if result.cancelled:
            return False
        if generation != self._generation:
            logger.debug(f"[StatusStore] Dropped stale probe #{generation} (current #{self._generation})")
            return False

        is_online = result.effective_online
        latency_ms = result.latency_ms if (is_online and result.reachable) else None

        state = self._state
        state.is_online = is_online
        state.latency_ms = latency_ms
        state.last_checked_at = self._next_timestamp()
        state.quality_tier = classify(is_online, latency_ms)
        state.is_checking = False

        if result.reachable:
            logger.info(f"[StatusStore] Connectivity check: Online ({latency_ms}ms, {state.quality_tier})")
        else:
            logger.info(
                f"[StatusStore] Connectivity check failed ({result.reason}), "
                f"falling back to host flag: {'online' if is_online else 'offline'}"
            )

        self._notify()
        return True

    def apply_immediate_override(self, is_online: bool):
        """
        Set reachability without probing.

        Offline is authoritative: it supersedes any in-flight probe so its
        result can never be applied. Online resets quality to UNKNOWN pending
        the follow-up probe.
        """
        if self._closed:
            return

        state = self._state
        if is_online:
            state.is_online = True
            state.latency_ms = None
            state.quality_tier = QualityTier.UNKNOWN
            logger.info("[StatusStore] Host detected online, quality pending")
        else:
            self._cancel_in_flight()
            self._generation += 1
            state.is_online = False
            state.latency_ms = None
            state.quality_tier = QualityTier.OFFLINE
            state.is_checking = False
            logger.info("[StatusStore] Host detected offline")

        state.last_checked_at = self._next_timestamp()
        self._notify()

    def close(self):
        """Cancel the in-flight probe and stop accepting updates."""
        if self._closed:
            return
        self._closed = True
        self._cancel_in_flight()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._listeners.clear()
        logger.debug("[StatusStore] Closed")

    def _next_timestamp(self) -> datetime:
        now = self._clock()
        previous = self._state.last_checked_at
        if previous is not None and now < previous:
            return previous
        return now

    def _notify(self):
        snapshot = self.read()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"[StatusStore] Error in state listener: {e}")
