"""Protocol for access control observability.

Defines the interface for domain probes that capture tenant access
decisions made by AccessControlService.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccessControlProbe(Protocol):
    """Domain probe for tenant access decisions."""

    def access_granted(self, email: str, tenant_id: str) -> None:
        """Record that a member was granted access to a tenant."""
        ...

    def super_admin_access_granted(self, email: str, tenant_id: str) -> None:
        """Record that a super admin bypassed membership checks."""
        ...

    def access_denied(self, email: str | None, tenant_id: str, reason: str) -> None:
        """Record that access to a tenant was denied."""
        ...

    def directory_lookup_failed(self, email: str, error: Exception) -> None:
        """Record that the membership lookup raised."""
        ...

    def with_context(self, context: ObservationContext) -> AccessControlProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessControlProbe:
    """Default implementation of AccessControlProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAccessControlProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessControlProbe(logger=self._logger, context=context)

    def access_granted(self, email: str, tenant_id: str) -> None:
        self._logger.debug(
            "tenant_access_granted",
            email=email,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def super_admin_access_granted(self, email: str, tenant_id: str) -> None:
        self._logger.info(
            "tenant_access_granted_super_admin",
            email=email,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def access_denied(self, email: str | None, tenant_id: str, reason: str) -> None:
        self._logger.warning(
            "tenant_access_denied",
            email=email,
            tenant_id=tenant_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def directory_lookup_failed(self, email: str, error: Exception) -> None:
        self._logger.error(
            "tenant_access_directory_lookup_failed",
            email=email,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
