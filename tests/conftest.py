import os

# Keep a developer's shell settings out of the test run
for _name in ("ELYBY_CONNECT_TIMEOUT", "ELYBY_REQUEST_TIMEOUT", "ELYBY_LOG_LEVEL"):
    os.environ.pop(_name, None)

import json
from collections.abc import AsyncGenerator
from typing import Any, Callable, Optional

import httpx
import pytest
import pytest_asyncio

from elyby.config import loader as config_loader


class StubServer:
    """In-memory stand-in for the Ely.by servers.

    Routes are keyed by (method, absolute URL). Every request that reaches
    the transport is recorded, so tests can also assert that nothing was sent.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        url: str,
        status: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status, json=json_body)
            return httpx.Response(status, content=content or b"")

        self.routes[(method, url)] = respond

    def add_handler(self, method: str, url: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, url)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, str(request.url)))
        if route is None:
            return httpx.Response(404, json={"errorMessage": f"No stub for {request.method} {request.url}"})
        return route(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Global settings loader that ignores any .env in the working directory."""
    monkeypatch.setattr(config_loader, "_config_loader", config_loader.ConfigLoader(str(tmp_path / "missing.env")))


@pytest.fixture
def stub() -> StubServer:
    """Fresh stub server for each test."""
    return StubServer()


@pytest_asyncio.fixture
async def http_client(stub: StubServer) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async client routed to the stub server."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(stub.handle)) as client:
        yield client


@pytest.fixture
def errors() -> list:
    """Error sink that collects reported ApiErrors."""
    return []
