"""In-process presence registry.

Keeps the last time each staff identity pinged per agency. State is lost
on restart, which is acceptable for an "online now" indicator.
"""

from __future__ import annotations

from datetime import datetime

from iam.domain.value_objects import normalize_email


class InMemoryPresenceRegistry:
    """Presence registry keyed by (agency_id, email)."""

    def __init__(self) -> None:
        self._last_seen: dict[tuple[str, str], datetime] = {}

    def __len__(self) -> int:
        return len(self._last_seen)

    def mark_online(self, agency_id: str, email: str, seen_at: datetime) -> None:
        self._last_seen[(agency_id, normalize_email(email))] = seen_at

    def online_since(self, agency_id: str, cutoff: datetime) -> list[str]:
        """Emails seen in the agency since cutoff; older entries are dropped."""
        stale = [key for key, seen_at in self._last_seen.items() if seen_at < cutoff]
        for key in stale:
            del self._last_seen[key]

        return sorted(
            email
            for (agency, email), seen_at in self._last_seen.items()
            if agency == agency_id and seen_at >= cutoff
        )
