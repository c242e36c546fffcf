"""Prober - One bounded, cancellable health-check request."""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import httpx
from loguru import logger

from linkwatch.core.constants import PROBE_HEADERS
from linkwatch.core.types import ProbeOutcome


class CancelToken:
    """
    Cancellation handle for a single probe.

    The owner calls cancel() when a newer probe supersedes this one; the
    prober aborts its request and reports a CANCELLED result.
    """

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        self._event.set()

    async def wait(self):
        await self._event.wait()


@dataclass(frozen=True)
class ProbeResult:
    """What one probe observed. Never raised, always returned."""

    reachable: bool
    latency_ms: Optional[int]
    outcome: ProbeOutcome
    host_online: bool
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self.outcome is ProbeOutcome.CANCELLED

    @property
    def effective_online(self) -> bool:
        """Reachability after falling back to the host's own flag on failure."""
        if self.reachable:
            return True
        return self.host_online

    @property
    def reason(self) -> str:
        if self.outcome is ProbeOutcome.HTTP_STATUS and self.status_code is not None:
            return f"{self.outcome.value} {self.status_code}"
        if self.error:
            return f"{self.outcome.value}: {self.error}"
        return self.outcome.value


class Prober:
    """Issues health-check GETs and measures time to response headers."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        host_online: Optional[Callable[[], bool]] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize the prober.

        Args:
            client: Shared AsyncClient. When omitted, one is created lazily and
                    closed by aclose().
            host_online: Returns the host's cached online flag, used as the
                         fallback reachability on failure
            clock: Monotonic clock in seconds
        """
        self._client = client
        self._owns_client = client is None
        self._host_online = host_online or (lambda: True)
        self._clock = clock

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # Per-probe timeouts are enforced by probe() itself
            self._client = httpx.AsyncClient(timeout=None, follow_redirects=False)
        return self._client

    async def aclose(self):
        """Close the HTTP client if this prober created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _fetch(self, url: str) -> Tuple[int, float]:
        """Send the request and return (status_code, arrival time) without reading the body."""
        client = self._get_client()
        request = client.build_request("GET", url, headers=PROBE_HEADERS)
        response = await client.send(request, stream=True)
        arrived = self._clock()
        await response.aclose()
        return response.status_code, arrived

    async def probe(self, url: str, timeout_ms: int, cancel_token: Optional[CancelToken] = None) -> ProbeResult:
        """
        Run one health check.

        The request races a timeout_ms timer and the cancel token; whichever
        settles first wins and the request is aborted if it lost.

        Returns:
            ProbeResult. Failures are folded into the result, never raised.
        """
        token = cancel_token or CancelToken()
        if token.cancelled:
            return self._cancelled()

        started = self._clock()
        request_task = asyncio.ensure_future(self._fetch(url))
        cancel_task = asyncio.ensure_future(token.wait())

        try:
            done, _ = await asyncio.wait(
                {request_task, cancel_task},
                timeout=timeout_ms / 1000.0,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            cancel_task.cancel()
            if not request_task.done():
                request_task.cancel()
            await asyncio.gather(request_task, cancel_task, return_exceptions=True)

        if token.cancelled:
            logger.debug(f"[Prober] Probe to {url} cancelled")
            return self._cancelled()

        if request_task not in done:
            logger.warning(f"[Prober] Probe to {url} timed out after {timeout_ms}ms")
            return self._failed(ProbeOutcome.TIMEOUT)

        try:
            status_code, arrived = request_task.result()
        except httpx.TimeoutException as e:
            logger.warning(f"[Prober] Probe to {url} timed out: {e}")
            return self._failed(ProbeOutcome.TIMEOUT, error=str(e))
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            logger.warning(f"[Prober] Probe to {url} failed: {type(e).__name__}: {e}")
            return self._failed(ProbeOutcome.NETWORK_ERROR, error=f"{type(e).__name__}: {e}")

        if not 200 <= status_code < 300:
            logger.warning(f"[Prober] Probe to {url} returned HTTP {status_code}")
            return self._failed(ProbeOutcome.HTTP_STATUS, status_code=status_code)

        latency_ms = max(0, int(round((arrived - started) * 1000)))
        logger.debug(f"[Prober] Probe to {url} OK ({latency_ms}ms)")
        return ProbeResult(
            reachable=True,
            latency_ms=latency_ms,
            outcome=ProbeOutcome.OK,
            host_online=self._host_online(),
            status_code=status_code,
        )

    def _failed(
        self, outcome: ProbeOutcome, status_code: Optional[int] = None, error: Optional[str] = None
    ) -> ProbeResult:
        return ProbeResult(
            reachable=False,
            latency_ms=None,
            outcome=outcome,
            host_online=self._host_online(),
            status_code=status_code,
            error=error,
        )

    def _cancelled(self) -> ProbeResult:
        return ProbeResult(
            reachable=False,
            latency_ms=None,
            outcome=ProbeOutcome.CANCELLED,
            host_online=self._host_online(),
        )
