"""Async HTTP client for the content API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from authoring_core.errors import TransportError
from authoring_core.models import ItemsPage, Pagination
from authoring_core.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _error_payload(response: httpx.Response) -> Any:
    """The response body as the server sent it: decoded JSON if possible, else text."""
    if not response.content:
        return response.text
    content_type = response.headers.get("Content-Type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            pass
    return response.text


class ContentApiClient:
    """
    Thin wrapper around ``httpx.AsyncClient``.

    Features:
    - Any HTTP method, including the ``LINK``/``UNLINK`` extension verbs
    - Bearer token and User-Agent on every request
    - Non-2xx responses and network failures raised as ``TransportError``
    - No retries; callers decide whether to re-issue an action
    """

    def __init__(
        self,
        *,
        base_url: str,
        token: str | None = None,
        timeout_s: float = 30.0,
        user_agent: str = "newscoop-authoring/0.1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Absolute API root, e.g. ``https://example.org/content-api``
            token: Optional OAuth bearer token
            timeout_s: Request timeout in seconds
            user_agent: User-Agent string
            transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
        """
        self.base_url = base_url.rstrip("/")
        self._root_path = urlparse(self.base_url).path.rstrip("/")

        headers = {"User-Agent": user_agent, "Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_s),
            headers=headers,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ContentApiClient:
        settings = settings or get_settings()
        return cls(
            base_url=settings.base_url,
            token=settings.token,
            timeout_s=settings.request_timeout_s,
            user_agent=settings.user_agent,
            transport=transport,
        )

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def relation_uri(self, path: str) -> str:
        """Server-relative URI of a resource, as used inside ``link`` headers."""
        return f"{self._root_path}{path}"

    async def send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = self.url_for(path)
        logger.debug("%s %s params=%s headers=%s", method, url, params, headers)
        try:
            response = await self._client.request(
                method, url, params=params, headers=headers, json=json, data=data, files=files
            )
        except httpx.RequestError as exc:
            error = TransportError(str(exc) or type(exc).__name__, method=method, url=url)
            logger.warning("Request failed: %s", error.to_log_message())
            raise error from exc

        if not response.is_success:
            error = TransportError(
                _error_payload(response),
                status_code=response.status_code,
                method=method,
                url=str(response.request.url),
            )
            logger.warning("Request failed: %s", error.to_log_message())
            raise error

        return response

    async def get_json(self, path: str, *, params: dict[str, Any] | None = None) -> dict[str, Any]:
        response = await self.send("GET", path, params=params)
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    async def get_items(self, path: str, *, params: dict[str, Any] | None = None) -> ItemsPage:
        """GET a list resource; an empty (204) response means zero items."""
        body = await self.get_json(path, params=params)
        pagination = body.get("pagination")
        return ItemsPage(
            items=list(body.get("items") or []),
            pagination=Pagination.model_validate(pagination) if pagination else None,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ContentApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
