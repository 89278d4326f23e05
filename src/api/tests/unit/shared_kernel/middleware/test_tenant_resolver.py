"""Unit tests for host-header tenant resolution and the gatekeeper middleware."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, Request, status
from fastapi.testclient import TestClient

from infrastructure.settings import TenancySettings
from shared_kernel.middleware import (
    DEFAULT_TENANT_ID,
    TenantContext,
    TenantResolverMiddleware,
    is_static_path,
    resolve_tenant_id,
)
from shared_kernel.middleware.observability import TenantContextProbe


class TestResolveTenantIdRootDomains:
    """Hosts on the root-domain allow-list resolve to the default tenant."""

    @pytest.mark.parametrize(
        "host",
        [
            "localhost:3000",
            "actiniumholdings.com",
            "referral-app.vercel.app",
            "referralflow.health",
            "www.referralflow.health",
        ],
    )
    def test_allow_listed_host_is_default_in_every_environment(self, host: str) -> None:
        for environment in ("production", "development", "test"):
            settings = TenancySettings(environment=environment)
            assert resolve_tenant_id(host, settings) == DEFAULT_TENANT_ID

    def test_allow_list_match_ignores_case(
        self, production_tenancy: TenancySettings
    ) -> None:
        assert resolve_tenant_id("ReferralFlow.Health", production_tenancy) == DEFAULT_TENANT_ID

    def test_custom_allow_list(self) -> None:
        settings = TenancySettings(
            environment="production",
            root_domains=["portal.example.org"],
        )

        assert resolve_tenant_id("portal.example.org", settings) == DEFAULT_TENANT_ID
        assert resolve_tenant_id("referralflow.health", settings) == "referralflow"


class TestResolveTenantIdSubdomains:
    """Subdomain hosts resolve to their lowercased first label."""

    def test_production_strips_root_suffix(
        self, production_tenancy: TenancySettings
    ) -> None:
        assert resolve_tenant_id("sunrise-home-health.vercel.app", production_tenancy) == (
            "sunrise-home-health"
        )

    def test_development_strips_local_suffix(
        self, development_tenancy: TenancySettings
    ) -> None:
        assert resolve_tenant_id("acme.localhost:3000", development_tenancy) == "acme"

    def test_subdomain_is_lowercased(self, development_tenancy: TenancySettings) -> None:
        assert resolve_tenant_id("ACME.localhost:3000", development_tenancy) == "acme"

    def test_custom_domain_uses_first_label(
        self, production_tenancy: TenancySettings
    ) -> None:
        assert resolve_tenant_id("acme.referralflow.health", production_tenancy) == "acme"

    def test_surrounding_whitespace_is_ignored(
        self, production_tenancy: TenancySettings
    ) -> None:
        assert resolve_tenant_id("  acme.vercel.app ", production_tenancy) == "acme"

    def test_test_environment_strips_no_suffix(self) -> None:
        settings = TenancySettings(environment="test")

        assert resolve_tenant_id("acme.localhost:3000", settings) == "acme"
        assert resolve_tenant_id("acme.vercel.app", settings) == "acme"


class TestResolveTenantIdAmbiguousHosts:
    """Hosts that cannot be classified degrade to the default tenant."""

    @pytest.mark.parametrize("host", [None, "", "   "])
    def test_missing_host_is_default(
        self, host: str | None, production_tenancy: TenancySettings
    ) -> None:
        assert resolve_tenant_id(host, production_tenancy) == DEFAULT_TENANT_ID

    @pytest.mark.parametrize("label", ["undefined", "null", "UNDEFINED", "Null"])
    def test_placeholder_labels_are_default(
        self, label: str, development_tenancy: TenancySettings
    ) -> None:
        host = f"{label}.localhost:3000"
        assert resolve_tenant_id(host, development_tenancy) == DEFAULT_TENANT_ID

    def test_bare_suffix_is_default(self, development_tenancy: TenancySettings) -> None:
        assert resolve_tenant_id(".localhost:3000", development_tenancy) == DEFAULT_TENANT_ID

    def test_result_is_never_empty(self, production_tenancy: TenancySettings) -> None:
        for host in ("", ".", ".vercel.app", "a", "x.y.z", "null.vercel.app"):
            assert resolve_tenant_id(host, production_tenancy)


class TestIsStaticPath:
    """Tests for the asset path matcher."""

    @pytest.mark.parametrize(
        "path",
        ["/_next/static/chunks/app.js", "/_static/logo.svg", "/favicon.ico", "/robots.txt"],
    )
    def test_static_paths(self, path: str) -> None:
        assert is_static_path(path) is True

    @pytest.mark.parametrize(
        "path", ["/", "/dashboard", "/api/presence", "/dashboard/report.pdf"]
    )
    def test_application_paths(self, path: str) -> None:
        assert is_static_path(path) is False


@pytest.fixture
def mock_probe() -> MagicMock:
    """Create a mock tenant context probe."""
    return MagicMock(spec=TenantContextProbe)


@pytest.fixture
def test_client(
    development_tenancy: TenancySettings, mock_probe: MagicMock
) -> TestClient:
    """App that echoes what the gatekeeper attached to the request."""
    app = FastAPI()
    app.add_middleware(
        TenantResolverMiddleware,
        settings=development_tenancy,
        probe=mock_probe,
    )

    @app.get("/echo")
    def echo(request: Request) -> dict:
        tenant = getattr(request.state, "tenant", None)
        return {
            "header": request.headers.get("x-agency-id"),
            "header_count": len(request.headers.getlist("x-agency-id")),
            "state_tenant": tenant.tenant_id if isinstance(tenant, TenantContext) else None,
            "source": tenant.source if isinstance(tenant, TenantContext) else None,
        }

    @app.get("/favicon.ico")
    def favicon(request: Request) -> dict:
        return {"header": request.headers.get("x-agency-id")}

    return TestClient(app)


class TestTenantResolverMiddleware:
    """Tests for the gatekeeper ASGI middleware."""

    def test_attaches_subdomain_tenant(
        self, test_client: TestClient, mock_probe: MagicMock
    ) -> None:
        response = test_client.get("/echo", headers={"host": "acme.localhost:3000"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["header"] == "acme"
        assert body["state_tenant"] == "acme"
        assert body["source"] == "subdomain"
        mock_probe.tenant_resolved.assert_called_once_with(
            host="acme.localhost:3000", tenant_id="acme"
        )

    def test_attaches_default_tenant_for_root_domain(self, test_client: TestClient) -> None:
        response = test_client.get("/echo", headers={"host": "localhost:3000"})

        body = response.json()
        assert body["header"] == DEFAULT_TENANT_ID
        assert body["source"] == "default"

    def test_overwrites_client_supplied_tenant_header(self, test_client: TestClient) -> None:
        response = test_client.get(
            "/echo",
            headers={"host": "acme.localhost:3000", "x-agency-id": "other-agency"},
        )

        body = response.json()
        assert body["header"] == "acme"
        assert body["header_count"] == 1

    @pytest.mark.parametrize(
        "path",
        ["/wp-admin", "/admin/users", "/administrator", "/.env", "/backup"],
    )
    def test_redirects_bot_probe_paths(
        self, path: str, test_client: TestClient, mock_probe: MagicMock
    ) -> None:
        response = test_client.get(path, follow_redirects=False)

        assert response.status_code == status.HTTP_307_TEMPORARY_REDIRECT
        assert response.headers["location"] == "https://google.com"
        mock_probe.bot_probe_redirected.assert_called_once_with(path=path)
        mock_probe.tenant_resolved.assert_not_called()

    def test_static_paths_bypass_resolution(
        self, test_client: TestClient, mock_probe: MagicMock
    ) -> None:
        response = test_client.get("/favicon.ico", headers={"host": "acme.localhost:3000"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["header"] is None
        mock_probe.tenant_resolved.assert_not_called()
