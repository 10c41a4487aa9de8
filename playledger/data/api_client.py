"""HTTP transport for the lounge REST backend.

Thin JSON wrapper over httpx.AsyncClient. Failures are raised as ApiError
so callers only ever deal with one exception type for remote problems.
"""

import logging
from typing import Any, Optional

import httpx

from playledger.data.errors import ApiError

logger = logging.getLogger(__name__)


def _server_message(payload: Any) -> Optional[str]:
    """Extract the `message` field from an error body, if present."""
    if isinstance(payload, dict):
        message = payload.get("message")
        if message:
            return str(message)
    return None


class ApiClient:
    """Async JSON client for the REST backend.

    Example:
        >>> client = ApiClient("http://localhost:8080/api")
        >>> body = await client.get("/transactions")
        >>> await client.close()
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Backend root, e.g. "http://localhost:8080/api"
            timeout: Request timeout in seconds. None waits indefinitely.
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        """Get the backend root URL."""
        return self._base_url

    async def get(self, path: str) -> Any:
        """GET a path and return the decoded JSON body."""
        return await self._request("GET", path)

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        """POST a JSON body and return the decoded response."""
        return await self._request("POST", path, json=body)

    async def put(self, path: str, body: dict[str, Any]) -> Any:
        """PUT a JSON body and return the decoded response."""
        return await self._request("PUT", path, json=body)

    async def delete(self, path: str) -> Any:
        """DELETE a path. The response body is optional."""
        return await self._request("DELETE", path)

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode the JSON response.

        Raises:
            ApiError: On transport failure or a non-2xx status
        """
        logger.debug(f"{method} {path}")
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(str(e) or type(e).__name__) from e

        payload = self._decode(response)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{method} {path} returned {response.status_code}")
            raise ApiError(
                str(e),
                status_code=response.status_code,
                server_message=_server_message(payload),
                payload=payload,
            ) from e

        return payload

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decode a JSON body, returning None for empty or non-JSON bodies."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None
