"""HTTP routes for IAM bounded context.

Provides the session, user-agency lookup, presence and tenant context
endpoints used by the agency portal.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from iam.application.services import AccessControlService, PresenceService
from iam.dependencies.access_control import (
    AuthorizedRequest,
    get_access_control_service,
    get_presence_service,
    require_super_admin,
    require_tenant_access,
)
from iam.dependencies.session import require_session
from iam.presentation.models import (
    AgencyContextResponse,
    LogoutResponse,
    OnlineUsersResponse,
    PresencePingRequest,
    PresencePingResponse,
    SessionResponse,
    UserAgencyResponse,
)
from infrastructure.settings import AuthSettings, get_auth_settings
from shared_kernel.auth import SessionRecord

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
router = APIRouter(prefix="/api", tags=["iam"])


@auth_router.post("/logout")
async def logout(
    response: Response,
    settings: Annotated[AuthSettings, Depends(get_auth_settings)],
) -> LogoutResponse:
    """Clear the session cookie.

    Always succeeds; the client redirects to the login page afterwards.
    """
    response.delete_cookie(key=settings.session_cookie_name, path="/")
    return LogoutResponse(success=True)


@auth_router.get("/session")
async def get_session(
    session: Annotated[SessionRecord, Depends(require_session)],
) -> SessionResponse:
    """Return the verified session for the current cookie.

    Raises:
        HTTPException: 401 if there is no valid session
    """
    return SessionResponse.from_domain(session)


@router.get("/user/agency")
async def get_user_agency(
    service: Annotated[AccessControlService, Depends(get_access_control_service)],
    email: str | None = Query(default=None),
) -> UserAgencyResponse:
    """Look up the first agency an email belongs to.

    Used by the login page to route a user to their agency subdomain.

    Raises:
        HTTPException: 400 if email is missing
        HTTPException: 500 if the directory lookup fails
    """
    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email required",
        )

    try:
        agencies = await service.list_agencies(email)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from e

    return UserAgencyResponse.from_memberships(agencies)


@router.get("/agency/context")
async def get_agency_context(
    authorized: Annotated[AuthorizedRequest, Depends(require_tenant_access)],
    service: Annotated[AccessControlService, Depends(get_access_control_service)],
) -> AgencyContextResponse:
    """Return the resolved tenant and identity for a protected page.

    Raises:
        HTTPException: 401 if there is no valid session
        HTTPException: 403 if the identity may not access the tenant
    """
    return AgencyContextResponse(
        agency_id=authorized.tenant.tenant_id,
        email=authorized.session.email,
        is_super_admin=service.is_super_admin(authorized.session.email),
    )


@router.post("/presence")
async def ping_presence(
    request: PresencePingRequest,
    session: Annotated[SessionRecord, Depends(require_session)],
    access: Annotated[AccessControlService, Depends(get_access_control_service)],
    presence: Annotated[PresenceService, Depends(get_presence_service)],
) -> PresencePingResponse:
    """Mark the session identity online for an agency.

    Raises:
        HTTPException: 401 if there is no valid session
        HTTPException: 403 if the identity may not access the agency
    """
    agency_id = request.agency_id.strip().lower()
    if not await access.verify_access(session.email, agency_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this agency",
        )

    seen_at = presence.mark_online(email=session.email, agency_id=agency_id)
    return PresencePingResponse(agency_id=agency_id, email=session.email, seen_at=seen_at)


@router.get("/presence")
async def list_online_users(
    authorized: Annotated[AuthorizedRequest, Depends(require_tenant_access)],
    presence: Annotated[PresenceService, Depends(get_presence_service)],
) -> OnlineUsersResponse:
    """List staff currently online for the request's agency."""
    agency_id = authorized.tenant.tenant_id
    return OnlineUsersResponse(agency_id=agency_id, emails=presence.list_online(agency_id))


@router.get("/super-admin/presence/{agency_id}")
async def list_online_users_for_agency(
    agency_id: str,
    _: Annotated[SessionRecord, Depends(require_super_admin)],
    presence: Annotated[PresenceService, Depends(get_presence_service)],
) -> OnlineUsersResponse:
    """List staff online for any agency (super admins only)."""
    agency_id = agency_id.strip().lower()
    return OnlineUsersResponse(agency_id=agency_id, emails=presence.list_online(agency_id))
