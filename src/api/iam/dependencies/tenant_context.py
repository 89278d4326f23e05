"""Tenant context FastAPI dependency.

Reads the tenant attached by TenantResolverMiddleware. Downstream code
never re-resolves the host; it trusts the gatekeeper's result.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    ):
        # tenant.tenant_id is the resolved agency slug or "default"
        ...
"""

from __future__ import annotations

from fastapi import Request

from shared_kernel.middleware.tenant_context import (
    DEFAULT_TENANT_ID,
    TENANT_HEADER,
    TenantContext,
)

_UNSET_VALUES = frozenset({"", "undefined", "null"})


def get_tenant_context(request: Request) -> TenantContext:
    """Get the tenant context for the current request.

    Prefers ``request.state.tenant`` set by the middleware and falls back
    to the ``x-agency-id`` header, then to the default tenant.
    """
    tenant = getattr(request.state, "tenant", None)
    if isinstance(tenant, TenantContext):
        return tenant

    raw_value = (request.headers.get(TENANT_HEADER) or "").strip().lower()
    if raw_value in _UNSET_VALUES or raw_value == DEFAULT_TENANT_ID:
        return TenantContext(tenant_id=DEFAULT_TENANT_ID, source="default")

    return TenantContext(tenant_id=raw_value, source="subdomain")
