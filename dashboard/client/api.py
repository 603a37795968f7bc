"""Data service used by the dashboard views.

Thin async wrapper over ``httpx.AsyncClient``. Any ``httpx.HTTPError``
(network failure, redirect loop, undecodable body) raises ``TransportFailure``.
Responses outside 2xx raise ``RequestFailed`` with the server's ``message``,
as does a 2xx response whose body is not the expected JSON. The auth
cookie set by login/register is kept on the underlying client's cookie jar.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from dashboard.client.errors import RequestFailed, TransportFailure

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


class DashboardClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "DashboardClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self.http.request(method, API_PREFIX + path, **kwargs)
        except httpx.HTTPError as exc:
            # Transport errors, redirect loops and undecodable bodies alike
            logger.warning("client.transport_failure method=%s path=%s error=%r", method, path, exc)
            raise TransportFailure(str(exc) or type(exc).__name__) from exc
        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                logger.warning("client.invalid_body method=%s path=%s status=%s", method, path, response.status_code)
                raise RequestFailed(response.status_code, "Response body is not valid JSON") from exc
        message = response.reason_phrase or "Request failed"
        try:
            body = response.json()
            if isinstance(body, dict) and body.get("message"):
                message = str(body["message"])
        except ValueError:
            pass
        logger.info("client.request_failed method=%s path=%s status=%s", method, path, response.status_code)
        raise RequestFailed(response.status_code, message)

    # Auth

    async def register(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/auth/register", json=dict(form))

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request("POST", "/auth/login", json={"email": email, "password": password})

    async def logout(self) -> Dict[str, Any]:
        return await self._request("DELETE", "/auth/logout")

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/auth/me")

    # Customers

    async def fetch_customers(self, params: Mapping[str, str]) -> Dict[str, Any]:
        data = await self._request(
            "GET",
            "/dashboard/customers",
            params=dict(params),
            headers={"Cache-Control": "no-store"},
        )
        if not isinstance(data, dict) or not isinstance(data.get("users"), list):
            raise RequestFailed(200, "Unexpected customers listing response")
        return data

    async def get_customer(self, customer_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/dashboard/customers/{int(customer_id)}")

    async def create_customer(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/dashboard/customers", json=dict(form))

    async def update_customer(self, customer_id: int, form: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/dashboard/customers/{int(customer_id)}", json=dict(form))

    async def submit_reorder(self, batch: List[Dict[str, int]]) -> Dict[str, Any]:
        return await self._request("POST", "/dashboard/customers/reorder", json=batch)


__all__ = ["API_PREFIX", "DashboardClient"]
