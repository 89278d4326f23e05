"""Unit tests for PresenceService."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from iam.application.observability import PresenceServiceProbe
from iam.application.services import PresenceService
from iam.infrastructure.presence_registry import InMemoryPresenceRegistry

START = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


class Clock:
    def __init__(self) -> None:
        self.value = START

    def __call__(self) -> datetime:
        return self.value


@pytest.fixture
def mock_probe() -> MagicMock:
    """Create a mock presence service probe."""
    return MagicMock(spec=PresenceServiceProbe)


@pytest.fixture
def now() -> Clock:
    return Clock()


@pytest.fixture
def service(mock_probe: MagicMock, now: Clock) -> PresenceService:
    return PresenceService(
        registry=InMemoryPresenceRegistry(),
        probe=mock_probe,
        online_window=timedelta(minutes=2),
        now=now,
    )


class TestMarkOnline:
    """Tests for recording presence pings."""

    def test_returns_time_seen(self, service: PresenceService) -> None:
        assert service.mark_online(email="nurse@acme.health", agency_id="acme") == START

    def test_records_probe_event(
        self, service: PresenceService, mock_probe: MagicMock
    ) -> None:
        service.mark_online(email="nurse@acme.health", agency_id="acme")

        mock_probe.user_marked_online.assert_called_once_with(
            email="nurse@acme.health", agency_id="acme"
        )


class TestListOnline:
    """Tests for the online-now query."""

    def test_lists_recent_pings_for_agency_only(self, service: PresenceService) -> None:
        service.mark_online(email="b@acme.health", agency_id="acme")
        service.mark_online(email="A@acme.health", agency_id="acme")
        service.mark_online(email="intake@sunrise.org", agency_id="sunrise")

        assert service.list_online("acme") == ["a@acme.health", "b@acme.health"]

    def test_stale_pings_drop_out(self, service: PresenceService, now: Clock) -> None:
        service.mark_online(email="a@acme.health", agency_id="acme")
        now.value = START + timedelta(minutes=1)
        service.mark_online(email="b@acme.health", agency_id="acme")

        now.value = START + timedelta(minutes=2, seconds=30)

        assert service.list_online("acme") == ["b@acme.health"]

    def test_repeated_pings_refresh_last_seen(
        self, service: PresenceService, now: Clock
    ) -> None:
        service.mark_online(email="a@acme.health", agency_id="acme")
        now.value = START + timedelta(minutes=90)
        service.mark_online(email="a@acme.health", agency_id="acme")

        assert service.list_online("acme") == ["a@acme.health"]
