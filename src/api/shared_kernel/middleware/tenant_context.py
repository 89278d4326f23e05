"""Tenant context value object for resolved tenant identification.

This module contains the pure value object that represents a resolved
tenant context. It is framework-agnostic and contains no business logic,
making it safe for the shared kernel.

The host-header resolution lives in ``shared_kernel.middleware.tenant_resolver``;
authorization checks live in the IAM bounded context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DEFAULT_TENANT_ID = "default"
"""Reserved tenant id for the root/marketing domain. Not a real agency."""

TENANT_HEADER = "x-agency-id"
"""Request header carrying the resolved tenant id to downstream handlers."""


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Attributes:
        tenant_id: The normalized tenant identifier (lowercased slug).
        source: How the tenant was resolved - 'subdomain' if taken from the
            host, 'default' if the host was a root domain or ambiguous.
    """

    tenant_id: str
    source: Literal["subdomain", "default"]

    @property
    def is_default(self) -> bool:
        """True when this is the reserved root-domain tenant."""
        return self.tenant_id == DEFAULT_TENANT_ID
