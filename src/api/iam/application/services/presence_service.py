"""Presence application service.

Marks staff identities as online for an agency when their session
monitor pings, and answers who is currently online.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from iam.application.observability import (
    DefaultPresenceServiceProbe,
    PresenceServiceProbe,
)
from iam.ports.repositories import IPresenceRegistry


class PresenceService:
    """Application service for staff presence."""

    def __init__(
        self,
        registry: IPresenceRegistry,
        probe: PresenceServiceProbe | None = None,
        online_window: timedelta = timedelta(minutes=2),
        now: Callable[[], datetime] | None = None,
    ):
        self._registry = registry
        self._probe = probe or DefaultPresenceServiceProbe()
        self._online_window = online_window
        self._now = now or (lambda: datetime.now(tz=timezone.utc))

    def mark_online(self, email: str, agency_id: str) -> datetime:
        """Record a ping and return the time it was recorded at."""
        seen_at = self._now()
        self._registry.mark_online(agency_id=agency_id, email=email, seen_at=seen_at)
        self._probe.user_marked_online(email=email, agency_id=agency_id)
        return seen_at

    def list_online(self, agency_id: str) -> list[str]:
        """Emails that pinged for agency_id within the online window."""
        return self._registry.online_since(
            agency_id=agency_id, cutoff=self._now() - self._online_window
        )
