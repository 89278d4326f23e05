"""In-memory user directory.

Holds agency access policies in process memory. Used for local
development and tests; production deployments override the
``get_user_directory`` dependency with an adapter over the hosted
document store.
"""

from __future__ import annotations

from collections.abc import Iterable

from iam.domain.value_objects import AgencyAccessPolicy, AgencyMembership


class InMemoryUserDirectory:
    """User directory backed by a dict of agency access policies."""

    def __init__(self, policies: Iterable[AgencyAccessPolicy] = ()) -> None:
        self._policies: dict[str, AgencyAccessPolicy] = {}
        for policy in policies:
            self.upsert(policy)

    def upsert(self, policy: AgencyAccessPolicy) -> None:
        """Add or replace the policy for an agency."""
        self._policies[policy.agency_id] = policy

    def remove(self, agency_id: str) -> None:
        self._policies.pop(agency_id, None)

    async def find_agencies_for_user(self, email: str) -> list[AgencyMembership]:
        """Return every agency whose policy admits the email."""
        if not email:
            return []
        return [
            policy.to_membership()
            for policy in self._policies.values()
            if policy.admits(email)
        ]
