"""Session cookie FastAPI dependencies.

``get_optional_session`` never raises: a missing or invalid cookie yields
None. ``require_session`` turns None into a 401 for routes that need an
authenticated identity.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from infrastructure.settings import AuthSettings, get_auth_settings
from shared_kernel.auth import (
    DefaultSessionTokenProbe,
    SessionRecord,
    SessionTokenService,
)


@lru_cache
def get_session_token_service() -> SessionTokenService:
    """Get cached session token service configured from auth settings."""
    settings = get_auth_settings()
    return SessionTokenService(
        secret=settings.session_secret.get_secret_value(),
        probe=DefaultSessionTokenProbe(),
        max_age=timedelta(seconds=settings.session_max_age_seconds),
    )


def get_optional_session(
    request: Request,
    service: Annotated[SessionTokenService, Depends(get_session_token_service)],
    settings: Annotated[AuthSettings, Depends(get_auth_settings)],
) -> SessionRecord | None:
    """Verify the session cookie, returning None when absent or invalid."""
    return service.verify(request.cookies.get(settings.session_cookie_name))


def require_session(
    session: Annotated[SessionRecord | None, Depends(get_optional_session)],
) -> SessionRecord:
    """Require a verified session.

    Raises:
        HTTPException 401: If there is no valid session cookie.
    """
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return session
