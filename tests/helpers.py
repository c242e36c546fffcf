"""Test doubles and helpers shared by the test modules."""
import asyncio
from types import SimpleNamespace
from typing import List

from linkwatch.core.types import ConnectivityState, ProbeOutcome, QualityTier
from linkwatch.services.prober import CancelToken, ProbeResult

PING_URL = "http://backend.test/api/health"


def ok_result(latency_ms: int, host_online: bool = True) -> ProbeResult:
    return ProbeResult(reachable=True, latency_ms=latency_ms, outcome=ProbeOutcome.OK, host_online=host_online)


def failed_result(outcome: ProbeOutcome = ProbeOutcome.TIMEOUT, host_online: bool = True) -> ProbeResult:
    return ProbeResult(reachable=False, latency_ms=None, outcome=outcome, host_online=host_online)


async def drain(turns: int = 5):
    """Let pending callbacks and tasks run."""
    for _ in range(turns):
        await asyncio.sleep(0)


def assert_invariants(state: ConnectivityState):
    assert (state.quality_tier is QualityTier.OFFLINE) == (state.is_online is False)
    if not state.is_online:
        assert state.latency_ms is None


class FakeProber:
    """Prober double whose probes stay in flight until the test resolves them."""

    def __init__(self):
        self.calls: List[SimpleNamespace] = []
        self.closed = False

    async def probe(self, url: str, timeout_ms: int, cancel_token: CancelToken) -> ProbeResult:
        future = asyncio.get_running_loop().create_future()
        call = SimpleNamespace(url=url, timeout_ms=timeout_ms, token=cancel_token, future=future)
        self.calls.append(call)

        cancel_wait = asyncio.ensure_future(cancel_token.wait())
        try:
            await asyncio.wait({future, cancel_wait}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancel_wait.cancel()

        if cancel_token.cancelled:
            return ProbeResult(reachable=False, latency_ms=None, outcome=ProbeOutcome.CANCELLED, host_online=True)
        return future.result()

    def resolve(self, index: int, result: ProbeResult):
        self.calls[index].future.set_result(result)

    def fail(self, index: int, exc: Exception):
        self.calls[index].future.set_exception(exc)

    async def aclose(self):
        self.closed = True
