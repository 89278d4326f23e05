"""Domain probes for activity tracking and session timeout.

Following Domain-Oriented Observability patterns, these probes capture
the domain-significant moments of the client session lifecycle: activity
writes, the warning window, and forced logout. Network failures of the
fire-and-forget calls are recorded here and nowhere else.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ActivityTrackerProbe(Protocol):
    """Domain probe for the activity tracker."""

    def tracker_mounted(self, path: str) -> None:
        ...

    def tracker_unmounted(self) -> None:
        ...

    def activity_recorded(self, timestamp_ms: int) -> None:
        ...

    def activity_ignored_session_expired(self, elapsed_ms: int) -> None:
        """Record that a signal arrived after the session had already expired."""
        ...

    def with_context(self, context: ObservationContext) -> ActivityTrackerProbe:
        ...


class SessionTimeoutProbe(Protocol):
    """Domain probe for the session timeout state machine."""

    def monitor_started(self, agency_id: str) -> None:
        ...

    def monitor_stopped(self) -> None:
        ...

    def warning_started(self, remaining_seconds: int) -> None:
        ...

    def warning_cleared(self) -> None:
        ...

    def session_extended(self) -> None:
        """Record that the user chose to stay logged in."""
        ...

    def logout_started(self, reason: str) -> None:
        ...

    def logout_call_failed(self, error: Exception) -> None:
        ...

    def logout_call_unsuccessful(self) -> None:
        """Record that the server answered the logout call without success."""
        ...

    def presence_ping_sent(self, agency_id: str) -> None:
        ...

    def presence_ping_failed(self, agency_id: str, error: Exception) -> None:
        ...

    def tick_failed(self, error: Exception) -> None:
        """Record that one reconciliation raised; the loop keeps ticking."""
        ...

    def with_context(self, context: ObservationContext) -> SessionTimeoutProbe:
        ...


class DefaultActivityTrackerProbe:
    """Default implementation of ActivityTrackerProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultActivityTrackerProbe:
        """Create a new probe with observation context bound."""
        return DefaultActivityTrackerProbe(logger=self._logger, context=context)

    def tracker_mounted(self, path: str) -> None:
        self._logger.debug(
            "activity_tracker_mounted",
            path=path,
            **self._get_context_kwargs(),
        )

    def tracker_unmounted(self) -> None:
        self._logger.debug(
            "activity_tracker_unmounted",
            **self._get_context_kwargs(),
        )

    def activity_recorded(self, timestamp_ms: int) -> None:
        self._logger.debug(
            "activity_recorded",
            timestamp_ms=timestamp_ms,
            **self._get_context_kwargs(),
        )

    def activity_ignored_session_expired(self, elapsed_ms: int) -> None:
        self._logger.info(
            "activity_ignored_session_expired",
            elapsed_ms=elapsed_ms,
            **self._get_context_kwargs(),
        )


class DefaultSessionTimeoutProbe:
    """Default implementation of SessionTimeoutProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSessionTimeoutProbe:
        """Create a new probe with observation context bound."""
        return DefaultSessionTimeoutProbe(logger=self._logger, context=context)

    def monitor_started(self, agency_id: str) -> None:
        self._logger.debug(
            "session_timeout_started",
            agency_id=agency_id,
            **self._get_context_kwargs(),
        )

    def monitor_stopped(self) -> None:
        self._logger.debug(
            "session_timeout_stopped",
            **self._get_context_kwargs(),
        )

    def warning_started(self, remaining_seconds: int) -> None:
        self._logger.info(
            "session_timeout_warning_started",
            remaining_seconds=remaining_seconds,
            **self._get_context_kwargs(),
        )

    def warning_cleared(self) -> None:
        self._logger.info(
            "session_timeout_warning_cleared",
            **self._get_context_kwargs(),
        )

    def session_extended(self) -> None:
        self._logger.info(
            "session_timeout_extended",
            **self._get_context_kwargs(),
        )

    def logout_started(self, reason: str) -> None:
        self._logger.info(
            "session_timeout_logout_started",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def logout_call_failed(self, error: Exception) -> None:
        self._logger.error(
            "session_timeout_logout_call_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def logout_call_unsuccessful(self) -> None:
        self._logger.warning(
            "session_timeout_logout_call_unsuccessful",
            **self._get_context_kwargs(),
        )

    def presence_ping_sent(self, agency_id: str) -> None:
        self._logger.debug(
            "session_presence_ping_sent",
            agency_id=agency_id,
            **self._get_context_kwargs(),
        )

    def presence_ping_failed(self, agency_id: str, error: Exception) -> None:
        self._logger.warning(
            "session_presence_ping_failed",
            agency_id=agency_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def tick_failed(self, error: Exception) -> None:
        self._logger.error(
            "session_timeout_tick_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
