"""Access control FastAPI dependencies.

Composes the session, the resolved tenant and the access control service
into a single ``require_tenant_access`` guard for protected routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status

from iam.application.observability import DefaultAccessControlProbe
from iam.application.services import AccessControlService, PresenceService
from iam.dependencies.session import require_session
from iam.dependencies.tenant_context import get_tenant_context
from iam.infrastructure.presence_registry import InMemoryPresenceRegistry
from iam.infrastructure.user_directory import InMemoryUserDirectory
from iam.ports.repositories import IUserDirectory
from infrastructure.settings import AuthSettings, get_auth_settings
from shared_kernel.auth import SessionRecord
from shared_kernel.middleware.tenant_context import TenantContext


@dataclass(frozen=True)
class AuthorizedRequest:
    """A verified session that is allowed to act on the request's tenant."""

    session: SessionRecord
    tenant: TenantContext


@lru_cache
def get_user_directory() -> IUserDirectory:
    """Get the process-wide user directory.

    Deployments backed by the hosted document store override this
    dependency with their own adapter.
    """
    return InMemoryUserDirectory()


@lru_cache
def get_presence_service() -> PresenceService:
    """Get the process-wide presence service."""
    return PresenceService(registry=InMemoryPresenceRegistry())


def get_access_control_service(
    directory: Annotated[IUserDirectory, Depends(get_user_directory)],
    settings: Annotated[AuthSettings, Depends(get_auth_settings)],
) -> AccessControlService:
    """Get AccessControlService instance.

    Args:
        directory: User directory for membership lookups
        settings: Auth settings supplying super-admin addresses

    Returns:
        AccessControlService instance
    """
    return AccessControlService(
        directory=directory,
        admin_emails=settings.admin_emails,
        probe=DefaultAccessControlProbe(),
    )


async def require_tenant_access(
    session: Annotated[SessionRecord, Depends(require_session)],
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[AccessControlService, Depends(get_access_control_service)],
) -> AuthorizedRequest:
    """Require that the session identity may act on the request's tenant.

    Raises:
        HTTPException 401: If there is no valid session.
        HTTPException 403: If the identity may not access the tenant.
    """
    if not await service.verify_access(session.email, tenant.tenant_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this agency",
        )
    return AuthorizedRequest(session=session, tenant=tenant)


async def require_super_admin(
    session: Annotated[SessionRecord, Depends(require_session)],
    service: Annotated[AccessControlService, Depends(get_access_control_service)],
) -> SessionRecord:
    """Require a super-admin session.

    Raises:
        HTTPException 401: If there is no valid session.
        HTTPException 403: If the identity is not a super admin.
    """
    if not service.is_super_admin(session.email):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super admin access required",
        )
    return session
