"""Domain probe for session token operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to session cookie issuance and
verification.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SessionTokenProbe(Protocol):
    """Domain probe for session token operations."""

    def session_issued(self, email: str, agency_id: str) -> None:
        """Record that a session token was issued."""
        ...

    def session_verified(self, email: str, agency_id: str) -> None:
        """Record that a session token was successfully verified."""
        ...

    def session_missing(self) -> None:
        """Record that no session token was presented."""
        ...

    def session_rejected(self, reason: str) -> None:
        """Record that a session token failed verification."""
        ...

    def with_context(self, context: ObservationContext) -> SessionTokenProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSessionTokenProbe:
    """Default implementation of SessionTokenProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultSessionTokenProbe:
        """Create a new probe with observation context bound."""
        return DefaultSessionTokenProbe(logger=self._logger, context=context)

    def session_issued(self, email: str, agency_id: str) -> None:
        """Record that a session token was issued."""
        self._logger.info(
            "session_token_issued",
            email=email,
            agency_id=agency_id,
            **self._get_context_kwargs(),
        )

    def session_verified(self, email: str, agency_id: str) -> None:
        """Record that a session token was successfully verified."""
        self._logger.debug(
            "session_token_verified",
            email=email,
            agency_id=agency_id,
            **self._get_context_kwargs(),
        )

    def session_missing(self) -> None:
        """Record that no session token was presented."""
        self._logger.debug(
            "session_token_missing",
            **self._get_context_kwargs(),
        )

    def session_rejected(self, reason: str) -> None:
        """Record that a session token failed verification."""
        self._logger.warning(
            "session_token_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )
