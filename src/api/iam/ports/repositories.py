"""Repository protocols (ports) for IAM bounded context.

The user directory is owned by an external service (the hosted document
store in production). These protocols define the only reads and writes
the access-control layer needs from it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from iam.domain.value_objects import AgencyMembership


@runtime_checkable
class IUserDirectory(Protocol):
    """Lookup of agency memberships by email."""

    async def find_agencies_for_user(self, email: str) -> list[AgencyMembership]:
        """Return every agency the email may access.

        Args:
            email: The identity to look up. Matching is case-insensitive.

        Returns:
            Memberships in directory order; empty when the email has none.

        Raises:
            UserDirectoryError: If the directory cannot be queried
        """
        ...


@runtime_checkable
class IPresenceRegistry(Protocol):
    """Records which staff identities are currently online per agency."""

    def mark_online(self, agency_id: str, email: str, seen_at: datetime) -> None:
        """Record that email was active for agency_id at seen_at."""
        ...

    def online_since(self, agency_id: str, cutoff: datetime) -> list[str]:
        """Return emails seen for agency_id at or after cutoff."""
        ...
