"""Shared fixtures: an in-memory Walter MCP endpoint behind httpx.MockTransport."""

import asyncio
import json
from typing import Any, Callable, Optional

import httpx
import pytest
import pytest_asyncio

from walter_ai import AsyncWalter

BASE_URL = "http://walter.test"
FAST_ENGINE = {"settle_delay_s": 0, "error_backoff_s": 0, "min_retry_s": 0}


def tool_response(request_id: int, payload: Any, is_error: bool = False) -> httpx.Response:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return httpx.Response(200, json={
        "jsonrpc": "2.0",
        "id": request_id,
        "result": {"content": [{"type": "text", "text": text}], "isError": is_error},
    })


class FakeWalter:
    """Scriptable stand-in for the Walter /mcp endpoint.

    ``tools`` maps a tool name to a callable taking the arguments and
    returning a payload (JSON-encoded into a text item) or an
    ``httpx.Response`` to send as-is.
    """

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self.headers: list[httpx.Headers] = []
        self.tools: dict[str, Callable[[dict[str, Any]], Any]] = {}
        self.session_id: Optional[str] = None
        self.sessions_issued = 0
        self.init_delay = 0.0
        self.fail_initialize = 0
        self.expire_calls = 0

    def methods(self) -> list[str]:
        return [r["method"] for r in self.requests]

    def count(self, method: str) -> int:
        return self.methods().count(method)

    def tool_calls(self, name: Optional[str] = None) -> list[dict[str, Any]]:
        calls = [r for r in self.requests if r["method"] == "tools/call"]
        return [c for c in calls if name is None or c["params"]["name"] == name]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        self.headers.append(request.headers)
        method = body["method"]

        if method == "initialize":
            await asyncio.sleep(self.init_delay)
            if self.fail_initialize:
                self.fail_initialize -= 1
                return httpx.Response(500)
            self.sessions_issued += 1
            self.session_id = f"sess-{self.sessions_issued}"
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": body["id"], "result": {"serverInfo": {"name": "walter"}}},
                headers={"Mcp-Session-Id": self.session_id},
            )

        if method == "notifications/initialized":
            return httpx.Response(202)

        if method == "tools/call":
            await asyncio.sleep(0)
            if self.expire_calls:
                self.expire_calls -= 1
                return httpx.Response(404)
            if request.headers.get("mcp-session-id") != self.session_id:
                return httpx.Response(404)
            params = body["params"]
            outcome = self.tools[params["name"]](params["arguments"])
            if isinstance(outcome, httpx.Response):
                return outcome
            return tool_response(body["id"], outcome)

        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body.get("id"),
                                         "error": {"code": -32601, "message": f"Method not found: {method}"}})


def make_client(fake: FakeWalter, **kwargs: Any) -> AsyncWalter:
    kwargs.setdefault("engine_options", FAST_ENGINE)
    return AsyncWalter("test-token", BASE_URL, http_transport=httpx.MockTransport(fake), **kwargs)


@pytest.fixture
def fake() -> FakeWalter:
    server = FakeWalter()
    server.tools["list_turfs"] = lambda _args: {"turfs": [
        {"turf_id": "turf_1", "name": "web-1", "type": "server", "status": "online", "os": "linux"},
    ]}
    return server


@pytest_asyncio.fixture
async def client(fake: FakeWalter):
    c = make_client(fake)
    yield c
    await c.aclose()
