"""Pydantic models for IAM API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from iam.domain.value_objects import AgencyMembership
from shared_kernel.auth import SessionRecord


class LogoutResponse(BaseModel):
    """Response model for logout."""

    success: bool = Field(..., description="Whether the session cookie was cleared")


class SessionResponse(BaseModel):
    """Response model for the current session."""

    email: str = Field(..., description="Authenticated email")
    agency_id: str = Field(..., description="Agency the session was issued for")
    expires_at: datetime = Field(..., description="Session expiry (UTC)")

    @classmethod
    def from_domain(cls, session: SessionRecord) -> SessionResponse:
        """Convert a verified SessionRecord to an API response.

        Args:
            session: Verified session record

        Returns:
            SessionResponse
        """
        return cls(
            email=session.email,
            agency_id=session.agency_id,
            expires_at=session.expires_at,
        )


class UserAgencyResponse(BaseModel):
    """First agency an email belongs to, or nulls when it has none."""

    model_config = ConfigDict(populate_by_name=True)

    agency_name: str | None = Field(default=None, alias="agencyName")
    agency_id: str | None = Field(default=None, alias="agencyId")

    @classmethod
    def from_memberships(cls, agencies: list[AgencyMembership]) -> UserAgencyResponse:
        if not agencies:
            return cls()
        first = agencies[0]
        return cls(agency_name=first.name, agency_id=first.agency_id)


class PresencePingRequest(BaseModel):
    """Request model for a presence ping."""

    agency_id: str = Field(..., description="Agency the user is active in", min_length=1)


class PresencePingResponse(BaseModel):
    """Response model for a presence ping."""

    agency_id: str
    email: str
    seen_at: datetime


class OnlineUsersResponse(BaseModel):
    """Staff currently online for an agency."""

    agency_id: str
    emails: list[str]


class AgencyContextResponse(BaseModel):
    """Resolved tenant and identity for a protected page."""

    agency_id: str = Field(..., description="Tenant id resolved from the host")
    email: str = Field(..., description="Authenticated email")
    is_super_admin: bool
