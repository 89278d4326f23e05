"""Access control application service.

Decides whether an authenticated identity may act on a tenant. Decisions
are computed per call with no caching: the only external read is the user
directory lookup.
"""

from __future__ import annotations

from collections.abc import Iterable

from iam.application.observability import (
    AccessControlProbe,
    DefaultAccessControlProbe,
)
from iam.domain.value_objects import AgencyMembership, normalize_email
from iam.ports.repositories import IUserDirectory
from shared_kernel.middleware.tenant_context import DEFAULT_TENANT_ID


class AccessControlService:
    """Tenant authorization rules.

    Rules, first match wins:

    1. No email: deny.
    2. Super-admin email (case-insensitive): allow for any tenant.
    3. The reserved default tenant: deny.
    4. Allow iff the directory lists the email as a member of an agency
       whose id or slug equals the tenant id.
    """

    def __init__(
        self,
        directory: IUserDirectory,
        admin_emails: Iterable[str] = (),
        probe: AccessControlProbe | None = None,
    ):
        """Initialize AccessControlService.

        Args:
            directory: Membership lookup keyed by email
            admin_emails: Super-admin addresses with cross-tenant access
            probe: Optional domain probe for observability
        """
        self._directory = directory
        self._admin_emails = frozenset(
            normalize_email(email) for email in admin_emails if email.strip()
        )
        self._probe = probe or DefaultAccessControlProbe()

    def is_super_admin(self, email: str | None) -> bool:
        """Check whether email is a configured super admin."""
        if not email:
            return False
        return normalize_email(email) in self._admin_emails

    async def verify_access(self, email: str | None, tenant_id: str) -> bool:
        """Decide whether email may act on tenant_id.

        Args:
            email: Authenticated identity, or None when unauthenticated
            tenant_id: Target tenant id as resolved from the request

        Returns:
            True if access is allowed. Denial is never an exception.

        Raises:
            Exception: Propagated from the user directory when the lookup
                itself fails
        """
        if not email:
            self._probe.access_denied(
                email=None, tenant_id=tenant_id, reason="missing_email"
            )
            return False

        if self.is_super_admin(email):
            self._probe.super_admin_access_granted(email=email, tenant_id=tenant_id)
            return True

        if tenant_id == DEFAULT_TENANT_ID:
            self._probe.access_denied(
                email=email, tenant_id=tenant_id, reason="default_tenant_reserved"
            )
            return False

        agencies = await self.list_agencies(email)
        if any(agency.matches(tenant_id) for agency in agencies):
            self._probe.access_granted(email=email, tenant_id=tenant_id)
            return True

        self._probe.access_denied(email=email, tenant_id=tenant_id, reason="not_a_member")
        return False

    async def list_agencies(self, email: str) -> list[AgencyMembership]:
        """Return the agencies the email is a member of."""
        try:
            return await self._directory.find_agencies_for_user(email)
        except Exception as e:
            self._probe.directory_lookup_failed(email=email, error=e)
            raise
