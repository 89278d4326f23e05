"""Host-header tenant resolution and the gatekeeper ASGI middleware.

Every inbound request is classified by its ``Host`` header as either the
root (marketing) site or an agency subdomain. The resolved tenant id is
written into the ``x-agency-id`` request header and onto
``request.state.tenant`` so downstream handlers can read it verbatim.

Resolution never fails: hosts that cannot be classified degrade to a
best-effort tenant id, and downstream data access treats an unknown
tenant as "not found".
"""

from __future__ import annotations

import re

from starlette.datastructures import Headers
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.middleware.observability.tenant_context_probe import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import (
    DEFAULT_TENANT_ID,
    TENANT_HEADER,
    TenantContext,
)

_AMBIGUOUS_LABELS = frozenset({"", "undefined", "null"})

# Framework internals and single-segment files (e.g. /favicon.ico) bypass the gatekeeper
_STATIC_PATH = re.compile(r"^/(?:_next/|_static/|[\w-]+\.\w+$)")


def resolve_tenant_id(host_header: str | None, settings: TenancySettings) -> str:
    """Resolve the tenant id for a ``Host`` header value.

    Args:
        host_header: Raw Host header, possibly None or empty.
        settings: Tenancy settings supplying the root-domain allow-list,
            the active environment and its root suffix.

    Returns:
        The lowercased subdomain label, or DEFAULT_TENANT_ID for root
        domains and ambiguous hosts. Never empty.
    """
    host = (host_header or "").strip().lower()
    if not host:
        return DEFAULT_TENANT_ID

    if host in {domain.lower() for domain in settings.root_domains}:
        return DEFAULT_TENANT_ID

    candidate = host
    if settings.is_production:
        candidate = _strip_suffix(host, settings.production_root_suffix)
    elif settings.is_local_dev:
        candidate = _strip_suffix(host, settings.local_dev_suffix)

    label = candidate.split(".", 1)[0]
    if label in _AMBIGUOUS_LABELS:
        return DEFAULT_TENANT_ID

    return label


def _strip_suffix(host: str, suffix: str) -> str:
    suffix = suffix.lower()
    if suffix and host.endswith(suffix):
        return host[: -len(suffix)]
    return host


def is_static_path(path: str) -> bool:
    """True for asset paths the gatekeeper does not inspect."""
    return bool(_STATIC_PATH.match(path))


class TenantResolverMiddleware:
    """ASGI middleware that tags each HTTP request with its tenant.

    Also redirects well-known bot probe paths (``/wp-admin`` and friends)
    away before any application code runs.
    """

    def __init__(
        self,
        app: ASGIApp,
        settings: TenancySettings | None = None,
        probe: TenantContextProbe | None = None,
    ) -> None:
        self.app = app
        self._settings = settings or get_tenancy_settings()
        self._probe = probe or DefaultTenantContextProbe()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path: str = scope.get("path", "")
        if is_static_path(path):
            await self.app(scope, receive, send)
            return

        if self._is_blocked(path):
            self._probe.bot_probe_redirected(path=path)
            response = RedirectResponse(
                url=self._settings.blocked_path_redirect_url,
                status_code=307,
            )
            await response(scope, receive, send)
            return

        host = Headers(scope=scope).get("host")
        tenant_id = resolve_tenant_id(host, self._settings)
        tenant = TenantContext(
            tenant_id=tenant_id,
            source="default" if tenant_id == DEFAULT_TENANT_ID else "subdomain",
        )
        self._probe.tenant_resolved(host=host or "", tenant_id=tenant_id)

        await self.app(self._tag_scope(scope, tenant), receive, send)

    def _is_blocked(self, path: str) -> bool:
        return any(
            path.startswith(prefix) for prefix in self._settings.blocked_path_prefixes
        )

    @staticmethod
    def _tag_scope(scope: Scope, tenant: TenantContext) -> Scope:
        """Return a copy of scope carrying the tenant header and state."""
        header_name = TENANT_HEADER.encode("latin-1")
        headers = [
            (name, value)
            for name, value in scope.get("headers", [])
            if name.lower() != header_name
        ]
        headers.append((header_name, tenant.tenant_id.encode("latin-1")))

        tagged = dict(scope)
        tagged["headers"] = headers
        tagged["state"] = {**scope.get("state", {}), "tenant": tenant}
        return tagged
