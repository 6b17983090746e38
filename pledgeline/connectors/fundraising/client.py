"""Pledgeline — Fundraising API Client.

Handles authentication, the request deadline and error mapping.
Every request is a single attempt; failures are reported, never retried.
"""

from typing import Any, Dict, Optional

import httpx

from pledgeline.config import settings
from pledgeline.core.logging import get_logger

logger = get_logger("fundraising.client")


class FundraisingAPIError(Exception):
    """Raised when the fundraising API rejects a request or is unreachable."""

    def __init__(self, message: str, status_code: int = 0, error_code: str = ""):
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


def _error_details(response: httpx.Response) -> tuple[str, str]:
    """Pull (message, code) out of a JSON error body, if there is one."""
    if not response.headers.get("content-type", "").startswith("application/json"):
        return "", ""
    try:
        body = response.json()
    except ValueError:
        return "", ""
    if not isinstance(body, dict):
        return "", ""
    error = body.get("error")
    if isinstance(error, dict):
        return str(error.get("message", "")), str(error.get("code", ""))
    return str(body.get("message", "")), str(body.get("code", ""))


class FundraisingClient:
    """Async HTTP client for the fundraising platform API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.fundraising_api_key
        self.base_url = (base_url or settings.fundraising_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.fundraising_api_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
    ) -> Dict[str, Any]:
        """Make one request and wrap the decoded body in an envelope.

        Returns ``{"status": <http status>, "data": <json body or None>}``.
        """
        client = await self._get_client()

        try:
            resp = await client.request(method, path, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            message, code = _error_details(e.response)
            logger.warning(
                f"{method} {path} failed with {e.response.status_code}",
                extra={"endpoint": path, "status_code": e.response.status_code},
            )
            raise FundraisingAPIError(
                message or str(e), e.response.status_code, code
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"Request error on {method} {path}: {e}", extra={"endpoint": path})
            raise FundraisingAPIError(f"Connection failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            logger.warning(f"Non-JSON body from {path}", extra={"endpoint": path})
            body = None

        return {"status": resp.status_code, "data": body}
