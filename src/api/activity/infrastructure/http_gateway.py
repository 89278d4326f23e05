"""HTTP implementation of the SessionGateway port using httpx."""

from __future__ import annotations

import httpx


class HttpSessionGateway:
    """Calls the logout and presence endpoints of the API.

    Errors are raised to the caller; the state machine decides that they
    are logged and otherwise ignored.
    """

    def __init__(
        self,
        base_url: str,
        logout_endpoint: str = "/api/auth/logout",
        presence_endpoint: str = "/api/presence",
        cookies: dict[str, str] | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the gateway.

        Args:
            base_url: API base URL, e.g. https://care.referralflow.health
            logout_endpoint: Path of the logout route.
            presence_endpoint: Path of the presence route.
            cookies: Session cookies sent with every call.
            timeout: Request timeout in seconds.
            client: Pre-built client, mainly for tests.
        """
        self._logout_endpoint = logout_endpoint
        self._presence_endpoint = presence_endpoint
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            cookies=cookies,
            timeout=timeout,
        )

    async def logout(self) -> bool:
        response = await self._client.post(self._logout_endpoint)
        response.raise_for_status()
        return bool(response.json().get("success", False))

    async def ping_presence(self, agency_id: str) -> None:
        response = await self._client.post(
            self._presence_endpoint,
            json={"agency_id": agency_id},
        )
        response.raise_for_status()

    async def aclose(self) -> None:
        await self._client.aclose()
