"""Shared middleware for cross-cutting concerns.

The tenant resolver middleware tags every request with the tenant derived
from its Host header; the TenantContext value object carries that result
across bounded contexts.
"""

from shared_kernel.middleware.tenant_context import (
    DEFAULT_TENANT_ID,
    TENANT_HEADER,
    TenantContext,
)
from shared_kernel.middleware.tenant_resolver import (
    TenantResolverMiddleware,
    is_static_path,
    resolve_tenant_id,
)

__all__ = [
    "DEFAULT_TENANT_ID",
    "TENANT_HEADER",
    "TenantContext",
    "TenantResolverMiddleware",
    "is_static_path",
    "resolve_tenant_id",
]
