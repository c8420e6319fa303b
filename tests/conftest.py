"""Test configuration and fixtures."""

import asyncio
import json
from collections import Counter
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from shortcut_changelog.shortcut_client.client import ShortcutClient

BASE_URL = "https://shortcut.test/api/v3"
API_TOKEN = "fake-token"


class FakeShortcutAPI:
    """In-memory Shortcut API served through httpx.MockTransport.

    Routes map "METHOD /path" to a JSON payload, an int status code, or an
    exception instance to raise.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {
            "GET /groups": [],
            "GET /epics": [],
            "GET /members": [],
            "POST /stories/search": [],
        }
        self.calls: Counter[str] = Counter()
        self.requests: list[httpx.Request] = []

    def set(self, route: str, payload: Any) -> None:
        self.routes[route] = payload

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v3")
        route = f"{request.method} {path}"
        self.calls[route] += 1
        self.requests.append(request)

        # Yield so concurrent requests interleave
        await asyncio.sleep(0)

        payload = self.routes.get(route)
        if payload is None:
            if path.endswith("/stories"):
                return httpx.Response(200, json=[])
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, int):
            return httpx.Response(payload, json={"message": "error"})
        if isinstance(payload, str):
            return httpx.Response(200, content=payload.encode())
        return httpx.Response(200, content=json.dumps(payload).encode())


@pytest.fixture
def fake_api() -> FakeShortcutAPI:
    """Provide an empty fake Shortcut API."""
    return FakeShortcutAPI()


@pytest_asyncio.fixture
async def client(fake_api: FakeShortcutAPI) -> AsyncGenerator[ShortcutClient]:
    """ShortcutClient wired to the fake API."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler))
    shortcut_client = ShortcutClient(
        token=API_TOKEN, base_url=BASE_URL, http_client=http_client
    )
    yield shortcut_client
    await http_client.aclose()
