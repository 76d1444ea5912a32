"""
Fixtures for installer tests.

Provides a local aiohttp release server whose responses are configured
per path, and which records every request it receives.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer


@dataclass
class Route:
    status: int = 200
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)
    chunked: bool = False


class ReleaseServer:
    """Catch-all HTTP server serving canned responses by path."""

    def __init__(self):
        self.routes: Dict[str, Route] = {}
        self.requests: List[str] = []
        app = web.Application()
        app.router.add_route("GET", "/{tail:.*}", self._handle)
        self._server = TestServer(app)

    async def start(self) -> "ReleaseServer":
        await self._server.start_server()
        return self

    async def close(self) -> None:
        await self._server.close()

    def url(self, path: str) -> str:
        return str(self._server.make_url(path))

    def add(
        self,
        path: str,
        status: int = 200,
        body: bytes = b"",
        headers: Optional[Dict[str, str]] = None,
        chunked: bool = False,
    ) -> None:
        self.routes[path] = Route(status, body, headers or {}, chunked)

    def redirect(self, path: str, location: str, status: int = 302) -> None:
        self.add(path, status=status, headers={"Location": location})

    async def _handle(self, request: web.Request) -> web.StreamResponse:
        self.requests.append(request.path)
        route = self.routes.get(request.path)
        if route is None:
            return web.Response(status=404, text="Not Found")

        if route.chunked:
            # No Content-Length: body goes out with chunked transfer encoding
            response = web.StreamResponse(status=route.status, headers=route.headers)
            response.enable_chunked_encoding()
            await response.prepare(request)
            half = len(route.body) // 2
            await response.write(route.body[:half])
            await response.write(route.body[half:])
            await response.write_eof()
            return response

        return web.Response(status=route.status, body=route.body, headers=route.headers)


@pytest_asyncio.fixture
async def release_server():
    """Start a release server for one test."""
    server = await ReleaseServer().start()
    yield server
    await server.close()


@pytest_asyncio.fixture
async def cdn_server():
    """Second server on another port, standing in for a CDN origin."""
    server = await ReleaseServer().start()
    yield server
    await server.close()


@pytest.fixture
def install_dir(tmp_path):
    """Not-yet-existing bin directory under tmp_path."""
    return tmp_path / "package" / "bin"
