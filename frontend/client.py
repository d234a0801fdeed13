"""
Async HTTP client for the task tracker REST API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response; ``message`` is the server's ``error`` text."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class TaskApiClient:
    def __init__(
        self,
        base_url: str,
        http: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 10.0,
    ):
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @staticmethod
    def _auth(token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            resp = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(0, "Could not reach the server") from exc

        if resp.is_success:
            return resp.json()

        try:
            message = resp.json().get("error") or "Error occurred"
        except (ValueError, AttributeError):
            message = "Error occurred"
        raise ApiError(resp.status_code, message)

    # ── Auth ───────────────────────────────────────────────────────────

    async def register(self, username: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/register", json={"username": username, "password": password}
        )

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/login", json={"username": username, "password": password}
        )

    # ── Tasks ──────────────────────────────────────────────────────────

    async def list_tasks(
        self, token: str, status: str = "", priority: str = ""
    ) -> List[Dict[str, Any]]:
        # Empty values are sent as-is; the server treats them as "no filter".
        params = {"status": status, "priority": priority}
        return await self._request("GET", "/tasks", params=params, headers=self._auth(token))

    async def create_task(self, token: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/tasks", json=fields, headers=self._auth(token))

    async def update_task(
        self, token: str, task_id: int, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/tasks/{task_id}", json=fields, headers=self._auth(token)
        )

    async def delete_task(self, token: str, task_id: int) -> bool:
        data = await self._request("DELETE", f"/tasks/{task_id}", headers=self._auth(token))
        return bool(data.get("success"))
