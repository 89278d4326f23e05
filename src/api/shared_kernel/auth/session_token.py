"""Session token issuance and verification.

Session cookies carry an HS256-signed JWT with the user's email and the
agency they signed in to. Verification never raises: any missing,
malformed, expired or badly signed token yields ``None`` and callers treat
that uniformly as "not authenticated".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable

from jose import JWTError, jwt

if TYPE_CHECKING:
    from shared_kernel.auth.observability import SessionTokenProbe

_ALGORITHM = "HS256"


@dataclass(frozen=True)
class SessionRecord:
    """Verified session claims.

    Attributes:
        email: Authenticated identity.
        agency_id: Tenant id the session was issued for.
        issued_at: When the session was created.
        expires_at: When the session stops verifying.
    """

    email: str
    agency_id: str
    issued_at: datetime
    expires_at: datetime


class SessionTokenService:
    """Issues and verifies signed session tokens."""

    def __init__(
        self,
        secret: str,
        probe: SessionTokenProbe,
        max_age: timedelta = timedelta(days=5),
        now: Callable[[], datetime] | None = None,
    ):
        """Initialize the service.

        Args:
            secret: HMAC signing secret.
            probe: Observability probe for logging events.
            max_age: Lifetime of issued tokens (default: 5 days).
            now: Clock override for tests; defaults to the current UTC time.
        """
        self._secret = secret
        self._probe = probe
        self._max_age = max_age
        self._now = now or (lambda: datetime.now(tz=timezone.utc))

    @property
    def max_age(self) -> timedelta:
        return self._max_age

    def issue(self, email: str, agency_id: str) -> str:
        """Create a signed session token for an identity and agency."""
        issued_at = self._now()
        claims = {
            "sub": email,
            "agency_id": agency_id,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._max_age).timestamp()),
        }
        token = jwt.encode(claims, self._secret, algorithm=_ALGORITHM)
        self._probe.session_issued(email=email, agency_id=agency_id)
        return token

    def verify(self, token: str | None) -> SessionRecord | None:
        """Verify a session token.

        Args:
            token: The raw cookie value, or None when the cookie is absent.

        Returns:
            SessionRecord for a valid token, None otherwise.
        """
        if not token:
            self._probe.session_missing()
            return None

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                options={"verify_aud": False, "verify_exp": False},
            )
        except JWTError as e:
            self._probe.session_rejected(reason=f"Invalid session token: {e}")
            return None

        # Expiry is checked against the injected clock, not python-jose's wall clock
        expires_at = _from_timestamp(claims.get("exp"))
        if expires_at is None or expires_at <= self._now():
            self._probe.session_rejected(reason="Session expired")
            return None

        email = claims.get("sub")
        if not email:
            self._probe.session_rejected(reason="Missing sub claim")
            return None

        record = SessionRecord(
            email=str(email),
            agency_id=str(claims.get("agency_id") or ""),
            issued_at=_from_timestamp(claims.get("iat")) or expires_at - self._max_age,
            expires_at=expires_at,
        )
        self._probe.session_verified(email=record.email, agency_id=record.agency_id)
        return record


def _from_timestamp(value: object) -> datetime | None:
    if not isinstance(value, (int, float)):
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)
