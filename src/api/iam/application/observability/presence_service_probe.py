"""Protocol for presence observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PresenceServiceProbe(Protocol):
    """Domain probe for presence pings."""

    def user_marked_online(self, email: str, agency_id: str) -> None:
        """Record that a staff identity pinged for an agency."""
        ...

    def with_context(self, context: ObservationContext) -> PresenceServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPresenceServiceProbe:
    """Default implementation of PresenceServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPresenceServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultPresenceServiceProbe(logger=self._logger, context=context)

    def user_marked_online(self, email: str, agency_id: str) -> None:
        self._logger.debug(
            "presence_user_marked_online",
            email=email,
            agency_id=agency_id,
            **self._get_context_kwargs(),
        )
