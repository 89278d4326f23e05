"""Unit tests for session token issuance and verification."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from jose import jwt

from shared_kernel.auth import SessionRecord, SessionTokenProbe, SessionTokenService

SECRET = "test-session-secret"
ISSUED_AT = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class MutableNow:
    """Callable clock for SessionTokenService."""

    def __init__(self, value: datetime) -> None:
        self.value = value

    def __call__(self) -> datetime:
        return self.value


@pytest.fixture
def mock_probe() -> MagicMock:
    """Create a mock session token probe."""
    return MagicMock(spec=SessionTokenProbe)


@pytest.fixture
def now() -> MutableNow:
    return MutableNow(ISSUED_AT)


@pytest.fixture
def service(mock_probe: MagicMock, now: MutableNow) -> SessionTokenService:
    return SessionTokenService(secret=SECRET, probe=mock_probe, now=now)


class TestIssueAndVerify:
    """Tests for a freshly issued token."""

    def test_issued_token_verifies(self, service: SessionTokenService) -> None:
        token = service.issue("nurse@acme.health", "acme")

        record = service.verify(token)

        assert isinstance(record, SessionRecord)
        assert record.email == "nurse@acme.health"
        assert record.agency_id == "acme"
        assert record.issued_at == ISSUED_AT
        assert record.expires_at == ISSUED_AT + timedelta(days=5)

    def test_issue_and_verify_record_probe_events(
        self, service: SessionTokenService, mock_probe: MagicMock
    ) -> None:
        token = service.issue("nurse@acme.health", "acme")
        service.verify(token)

        mock_probe.session_issued.assert_called_once_with(
            email="nurse@acme.health", agency_id="acme"
        )
        mock_probe.session_verified.assert_called_once_with(
            email="nurse@acme.health", agency_id="acme"
        )

    def test_token_still_valid_just_before_expiry(
        self, service: SessionTokenService, now: MutableNow
    ) -> None:
        token = service.issue("nurse@acme.health", "acme")
        now.value = ISSUED_AT + timedelta(days=5) - timedelta(seconds=1)

        assert service.verify(token) is not None


class TestVerifyRejections:
    """Every failure mode yields None rather than raising."""

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(
        self, token: str | None, service: SessionTokenService, mock_probe: MagicMock
    ) -> None:
        assert service.verify(token) is None
        mock_probe.session_missing.assert_called_once()

    def test_garbage_token(
        self, service: SessionTokenService, mock_probe: MagicMock
    ) -> None:
        assert service.verify("not-a-jwt") is None
        mock_probe.session_rejected.assert_called_once()

    def test_wrong_secret(self, mock_probe: MagicMock, now: MutableNow) -> None:
        other = SessionTokenService(secret="another-secret", probe=mock_probe, now=now)
        token = other.issue("nurse@acme.health", "acme")

        service = SessionTokenService(secret=SECRET, probe=mock_probe, now=now)

        assert service.verify(token) is None

    def test_tampered_payload(self, service: SessionTokenService) -> None:
        token = service.issue("nurse@acme.health", "acme")
        header, payload, signature = token.split(".")
        forged = jwt.encode(
            {"sub": "admin@referralflow.health", "agency_id": "acme"},
            "guessed-secret",
            algorithm="HS256",
        ).split(".")[1]

        assert service.verify(f"{header}.{forged}.{signature}") is None

    def test_expired_token(
        self, service: SessionTokenService, now: MutableNow, mock_probe: MagicMock
    ) -> None:
        token = service.issue("nurse@acme.health", "acme")
        now.value = ISSUED_AT + timedelta(days=5, seconds=1)

        assert service.verify(token) is None
        mock_probe.session_rejected.assert_called_once_with(reason="Session expired")

    def test_missing_subject(
        self, service: SessionTokenService, mock_probe: MagicMock
    ) -> None:
        token = jwt.encode(
            {
                "agency_id": "acme",
                "iat": int(ISSUED_AT.timestamp()),
                "exp": int((ISSUED_AT + timedelta(hours=1)).timestamp()),
            },
            SECRET,
            algorithm="HS256",
        )

        assert service.verify(token) is None
        mock_probe.session_rejected.assert_called_once_with(reason="Missing sub claim")
