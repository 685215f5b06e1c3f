"""HTTP client for the hostel backend API.

Every call carries the caller's bearer token. Failures are raised as
``BackendError`` (server said no) or ``NetworkError`` (no answer); nothing is
retried automatically and a 401 is surfaced as-is.
"""

import logging
from typing import Any

import httpx

from app.config import settings
from app.core.exceptions import BackendError, NetworkError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"


class BackendClient:
    """Thin async wrapper around the backend's JSON envelope contract."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.backend_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.backend_timeout_seconds
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-load HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded success envelope.

        Raises:
            BackendError: Non-2xx response or an envelope with ``success: false``
            NetworkError: Timeout or connection failure
        """
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        try:
            response = await self.http_client.request(
                method, path, headers=headers, json=json, params=params or None
            )
        except httpx.TimeoutException:
            logger.error(f"Backend timeout: {method} {path}")
            raise NetworkError()
        except httpx.TransportError as e:
            logger.error(f"Network error - no response received: {method} {path} ({e})")
            raise NetworkError()

        body = self._decode(response)

        if response.is_error or body.get("success") is False:
            raise self._error_from(response, body, method, path)

        return body

    async def get(self, path: str, token: str | None = None, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self.request("GET", path, token=token, params=params)

    async def post(self, path: str, token: str | None = None, json: Any = None) -> dict[str, Any]:
        return await self.request("POST", path, token=token, json=json)

    async def patch(self, path: str, token: str | None = None, json: Any = None) -> dict[str, Any]:
        return await self.request("PATCH", path, token=token, json=json)

    async def delete(self, path: str, token: str | None = None) -> dict[str, Any]:
        return await self.request("DELETE", path, token=token)

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {"data": body}

    @staticmethod
    def _error_from(
        response: httpx.Response,
        body: dict[str, Any],
        method: str,
        path: str,
    ) -> BackendError:
        status_code = body.get("statusCode") or response.status_code
        if not isinstance(status_code, int) or status_code < 400:
            status_code = response.status_code if response.is_error else 400
        message = body.get("message") or GENERIC_ERROR_MESSAGE

        if status_code == 401:
            logger.warning(f"Unauthorized access: {method} {path}")
        elif status_code == 403:
            logger.warning(f"Access forbidden: {method} {path}")
        elif status_code == 404:
            logger.info(f"Resource not found: {method} {path}")
        elif status_code >= 500:
            logger.error(f"Server error: {method} {path} -> {status_code} {message}")
        else:
            logger.warning(f"API error: {method} {path} -> {status_code} {message}")

        return BackendError(status_code=status_code, detail=message, error=body.get("error"))


backend_client = BackendClient()
