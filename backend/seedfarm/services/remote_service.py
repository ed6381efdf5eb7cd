"""
Remote (n8n) Forwarding Service
===============================

Sends proxied requests to the n8n webhook server and hands back whatever
it answered.

THE DATA FLOW:
-------------
    Browser / Swagger UI
            |
            | POST /proxy/chat-message
            v
    [Proxy route validates required fields]
            |
            | POST <N8N_BASE_URL>/chat-message
            v
    [n8n webhook]
            |
            | status + JSON body
            v
    [Relayed back unchanged]

WHAT COULD GO WRONG:
-------------------
    - n8n is down or the URL is wrong  -> RemoteServiceError
    - n8n took longer than the timeout -> RemoteServiceError
    - n8n answered with something that isn't JSON -> RemoteServiceError
      (HEAD answers carry no body and are never decoded)
    - n8n answered with a JSON error   -> NOT our problem, relayed as-is

Nothing is ever retried.

Author: SeedFarm Team
"""

import logging
from typing import Any, NamedTuple, Optional

import httpx

from seedfarm.utils.uploads import InMemoryUpload

logger = logging.getLogger(__name__)


class RemoteServiceError(Exception):
    """The request never produced a usable JSON answer from n8n."""

    UNREACHABLE_HINT = "The n8n server may be down or unreachable. Check that it is running and that N8N_BASE_URL is correct."

    def __init__(self, message: str, url: str, method: str = "GET"):
        super().__init__(message)
        self.message = message
        self.url = url
        self.method = method


class RemoteResponse(NamedTuple):
    """Status code and decoded JSON body of an n8n answer."""
    status_code: int
    body: Any


class RemoteService:
    """
    Forwards requests to one n8n base URL.

    HOW TO USE:
    ----------
    service = RemoteService("https://n8n.seedfarm.co.kr/webhook")

    result = await service.forward("GET", "/data-history", params={"hours": "6"})
    print(result.status_code, result.body)

    await service.close()
    """

    def __init__(self, base_url: str, request_timeout: float = 60.0, http_client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            base_url: n8n webhook root
            request_timeout: Seconds before a hanging n8n call fails
            http_client: Use this client instead of creating one. It stays
                owned by the caller, close() leaves it open.
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        # One client for the whole server so connections get reused
        self.http_client = http_client or httpx.AsyncClient(timeout=request_timeout)

    def url_for(self, path: str) -> str:
        """Full URL of a webhook path below the base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def forward(self, method: str, path: str, **request_kwargs) -> RemoteResponse:
        """
        Send one request to n8n.

        Args:
            method: HTTP method, passed through unchanged
            path: Webhook path below the base URL
            **request_kwargs: params / json / content / files for httpx

        Returns:
            RemoteResponse with n8n's status code and JSON body

        Raises:
            RemoteServiceError: Connection failure, timeout, or non-JSON body
        """
        url = self.url_for(path)
        method = method.upper()

        try:
            response = await self.http_client.request(method, url, **request_kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"{method} {url} timed out: {e!r}")
            raise RemoteServiceError(f"Request to n8n timed out: {str(e) or type(e).__name__}", url, method) from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e!r}")
            raise RemoteServiceError(f"Cannot reach n8n: {str(e) or type(e).__name__}", url, method) from e

        if method == "HEAD":
            logger.info(f"{method} {url} -> {response.status_code}")
            return RemoteResponse(status_code=response.status_code, body=None)

        try:
            body = response.json()
        except ValueError as e:
            preview = response.text[:200]
            logger.error(f"{method} {url} returned non-JSON (HTTP {response.status_code}): {preview!r}")
            raise RemoteServiceError(
                f"n8n returned a non-JSON response (HTTP {response.status_code}): {e}", url, method
            ) from e

        logger.info(f"{method} {url} -> {response.status_code}")
        return RemoteResponse(status_code=response.status_code, body=body)

    async def post_json(self, path: str, body: dict) -> RemoteResponse:
        """POST a JSON body to a webhook."""
        return await self.forward("POST", path, json=body)

    async def post_file(self, path: str, field: str, upload: InMemoryUpload) -> RemoteResponse:
        """
        POST an in-memory file as multipart/form-data.

        Args:
            path: Webhook path
            field: Form field name n8n reads the file from ("image" or "file")
            upload: The file
        """
        files = {field: (upload.filename, upload.content, upload.content_type)}
        return await self.forward("POST", path, files=files)

    async def close(self):
        """Called when the server shuts down."""
        if self._owns_client:
            await self.http_client.aclose()
