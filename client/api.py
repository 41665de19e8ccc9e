"""
client/api.py
Async HTTP client for the site API, used by admin tooling and scripts.

Every call resolves to the parsed JSON body or raises ApiError carrying the
HTTP status and the server's message. No retries, no caching.
"""

import logging
import os
from typing import Any, Optional

import httpx

from client.session import SessionProvider

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001/api"


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __repr__(self) -> str:
        return f"ApiError({self.status_code}, {self.message!r})"


def _error_message(response: httpx.Response) -> str:
    """Pull a human message from {detail|error|message}, else the status text."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("detail", "error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason_phrase or f"HTTP {response.status_code}"


class ApiClient:
    """
    Thin wrapper over httpx.AsyncClient.

    The bearer token comes from `session` when one is established, so a
    successful `login()` authorizes every later call.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[SessionProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.base_url = (base_url or os.getenv("API_URL") or DEFAULT_API_URL).rstrip("/")
        self.session = session or SessionProvider()
        self._http = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict:
        current = self.session.current_session()
        if current:
            return {"Authorization": f"Bearer {current.token}"}
        return {}

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            # Network failure: no HTTP status to report
            raise ApiError(0, str(e) or "Network error") from e

        if not response.is_success:
            raise ApiError(response.status_code, _error_message(response))
        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, data: Any = None) -> Any:
        return await self._request("POST", path, json=data)

    async def put(self, path: str, data: Any = None) -> Any:
        return await self._request("PUT", path, json=data)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def upload(
        self,
        path: str,
        content: bytes,
        filename: str,
        content_type: str = "image/jpeg",
        field_name: str = "image",
    ) -> Any:
        """Multipart POST; httpx sets the boundary content-type itself."""
        files = {field_name: (filename, content, content_type)}
        return await self._request("POST", path, files=files)

    async def login(self, email: str, password: str) -> dict:
        """Authenticate and establish the session with the returned token and user."""
        body = await self.post("/auth/login", {"email": email, "password": password})
        self.session.establish(body["token"], body["user"])
        logger.debug("Logged in as %s", body["user"].get("email"))
        return body

    def logout(self) -> None:
        self.session.clear()
