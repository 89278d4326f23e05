"""Domain probe for tenant context resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving the tenant from the
request's Host header.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context resolution operations."""

    def tenant_resolved(self, host: str, tenant_id: str) -> None:
        """Record that a request was tagged with a tenant id."""
        ...

    def bot_probe_redirected(self, path: str) -> None:
        """Record that a suspicious path was redirected away."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_resolved(self, host: str, tenant_id: str) -> None:
        """Record that a request was tagged with a tenant id."""
        self._logger.debug(
            "tenant_context_resolved",
            host=host,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def bot_probe_redirected(self, path: str) -> None:
        """Record that a suspicious path was redirected away."""
        self._logger.warning(
            "tenant_gatekeeper_bot_probe_redirected",
            path=path,
            **self._get_context_kwargs(),
        )
