"""
Shared fixtures: a scripted fake content API behind ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from collections import defaultdict
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

from authoring_core.http_client import ContentApiClient
from authoring_core.settings import Settings

BASE_URL = "http://newscoop.test/content-api"


class FakeContentApi:
    """
    Records every request and answers from per-route scripts.

    A route is ``(METHOD, path)``; its script is a list of handlers (sync or
    async callables taking the request) served in order, the last one
    repeating. ``on()`` builds a handler from ``status``/``json``/``text``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Any]] = defaultdict(list)

    def on(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json: Any = None,
        text: str | None = None,
        handler: Callable[[httpx.Request], Any] | None = None,
    ) -> FakeContentApi:
        if handler is None:
            if json is not None:
                handler = lambda request: httpx.Response(status, json=json)  # noqa: E731
            else:
                handler = lambda request: httpx.Response(status, text=text or "")  # noqa: E731
        self._routes[(method, path)].append(handler)
        return self

    def __call__(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        script = self._routes.get((request.method, request.url.path))
        if not script:
            return httpx.Response(404, text=f"no route for {request.method} {request.url.path}")
        handler = script.pop(0) if len(script) > 1 else script[0]
        return handler(request)

    def sent(self, method: str | None = None) -> list[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url=BASE_URL, token=None, search_delay_ms=250, search_page_size=10)


@pytest.fixture
def server() -> FakeContentApi:
    return FakeContentApi()


@pytest_asyncio.fixture
async def api(server: FakeContentApi, settings: Settings):
    client = ContentApiClient.from_settings(settings, transport=httpx.MockTransport(server))
    yield client
    await client.aclose()
