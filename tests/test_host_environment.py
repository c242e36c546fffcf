"""Unit tests for HostEnvironment and SystemHost."""
import asyncio
from unittest.mock import patch

import pytest

from linkwatch.services.host_environment import HostEnvironment, SystemHost
from linkwatch.services.signals import HostSignal


class TestHostEnvironment:
    """Test suite for HostEnvironment."""

    def test_emits_only_on_transitions(self):
        host = HostEnvironment(online=True)
        events = []
        host.subscribe(HostSignal.ONLINE, lambda: events.append("online"))
        host.subscribe(HostSignal.OFFLINE, lambda: events.append("offline"))

        host.set_online(True)
        host.set_online(False)
        host.set_online(False)
        host.set_online(True)

        assert events == ["offline", "online"]
        assert host.is_online() is True

    def test_visible_only_when_returning_to_foreground(self):
        host = HostEnvironment()
        events = []
        host.subscribe(HostSignal.VISIBLE, lambda: events.append("visible"))

        host.set_visible(True)
        host.set_visible(False)
        host.set_visible(True)

        assert events == ["visible"]
        assert host.is_visible() is True

    def test_unsubscribe(self):
        host = HostEnvironment()
        events = []
        unsubscribe = host.subscribe(HostSignal.OFFLINE, lambda: events.append("offline"))

        unsubscribe()
        unsubscribe()
        host.set_online(False)

        assert events == []
        assert host.listener_count() == 0

    def test_listener_error_isolated(self):
        host = HostEnvironment()
        events = []

        def broken():
            raise RuntimeError("listener bug")

        host.subscribe(HostSignal.OFFLINE, broken)
        host.subscribe(HostSignal.OFFLINE, lambda: events.append("offline"))
        host.set_online(False)

        assert events == ["offline"]


class TestSystemHost:
    """Test suite for SystemHost."""

    @patch("linkwatch.services.host_environment.NetworkUtils.has_default_route")
    def test_initial_flag_from_routing_table(self, mock_route):
        mock_route.return_value = False
        assert SystemHost().is_online() is False

    @patch("linkwatch.services.host_environment.NetworkUtils.has_default_route")
    def test_refresh_emits_transition(self, mock_route):
        mock_route.return_value = True
        host = SystemHost()
        events = []
        host.subscribe(HostSignal.OFFLINE, lambda: events.append("offline"))

        mock_route.return_value = False
        assert host.refresh() is False
        assert events == ["offline"]

    @pytest.mark.asyncio
    @patch("linkwatch.services.host_environment.NetworkUtils.has_default_route")
    async def test_polling_detects_change(self, mock_route):
        mock_route.return_value = True
        host = SystemHost(poll_interval_s=0.01)
        events = []
        host.subscribe(HostSignal.OFFLINE, lambda: events.append("offline"))

        host.start()
        mock_route.return_value = False
        for _ in range(100):
            if events:
                break
            await asyncio.sleep(0.01)
        host.stop()

        assert events == ["offline"]

    @patch("linkwatch.services.host_environment.NetworkUtils.has_default_route", return_value=None)
    def test_unreadable_table_starts_online(self, mock_route):
        """Without a readable routing table the host assumes online."""
        assert SystemHost().is_online() is True

    @patch("linkwatch.services.host_environment.NetworkUtils.has_default_route")
    def test_refresh_keeps_flag_when_unreadable(self, mock_route):
        mock_route.return_value = False
        host = SystemHost()
        events = []
        host.subscribe(HostSignal.ONLINE, lambda: events.append("online"))

        mock_route.return_value = None
        assert host.refresh() is False
        assert events == []

    @pytest.mark.asyncio
    @patch("linkwatch.services.host_environment.NetworkUtils.has_default_route")
    async def test_polling_ignores_unreadable_table(self, mock_route):
        mock_route.return_value = True
        host = SystemHost(poll_interval_s=0.01)
        events = []
        host.subscribe(HostSignal.OFFLINE, lambda: events.append("offline"))

        mock_route.return_value = None
        host.start()
        await asyncio.sleep(0.05)
        host.stop()

        assert mock_route.call_count >= 2
        assert events == []
        assert host.is_online() is True

    @pytest.mark.asyncio
    @patch("linkwatch.services.host_environment.NetworkUtils.has_default_route")
    async def test_detect_reads_table_off_loop(self, mock_route):
        mock_route.return_value = False
        host = await SystemHost.detect(poll_interval_s=1)

        assert host.is_online() is False
        assert mock_route.call_count == 1

    def test_explicit_initial_flag_skips_lookup(self):
        with patch("linkwatch.services.host_environment.NetworkUtils.has_default_route") as mock_route:
            host = SystemHost(online=False)

        mock_route.assert_not_called()
        assert host.is_online() is False
