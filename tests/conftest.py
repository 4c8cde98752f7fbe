"""
Shared fixtures: scripted service clients and stub upstream servers.

No test talks to the real generation or execution service.
"""
import asyncio
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from getcode.models import CodeGenerator, ExecutionProxy, ExecutionServiceError
from getcode.utils.aiohttp_client_session_mixin import AioHttpClientSessionClassVarMixin

PISTON_HELLO = {
    "language": "python",
    "version": "3.10.0",
    "run": {"stdout": "hi\n", "stderr": "", "code": 0, "signal": None, "output": "hi\n"},
}


class ScriptedGenerator(CodeGenerator):
    """
    CodeGenerator whose model invoker replays a script instead of calling out.

    Script items: a string is returned, an exception is raised, and a
    ``(asyncio.Event, item)`` tuple waits for the event first.
    """
    script: list[Any] = []
    calls: list[str] = []
    seen_messages: list[Any] = []

    async def invoke_model(self, model: str, messages: list[dict[str, str]], api_key: str) -> str:
        self.calls.append(model)
        self.seen_messages.append(messages)
        outcome = self.script.pop(0)
        if isinstance(outcome, tuple):
            gate, outcome = outcome
            await gate.wait()
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class ScriptedProxy(ExecutionProxy):
    """ExecutionProxy whose outbound call returns canned Piston bodies."""
    replies: list[Any] = []
    payloads: list[dict] = []

    async def send(self, payload: dict) -> dict:
        self.payloads.append(payload)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, tuple):
            gate, reply = reply
            await gate.wait()
        if isinstance(reply, str):
            raise ExecutionServiceError(reply)
        return reply


@pytest.fixture
def make_generator():
    def _make(*script, models=("model-a", "model-b", "model-c")) -> ScriptedGenerator:
        return ScriptedGenerator(models=list(models), script=list(script))
    return _make


@pytest.fixture
def make_proxy():
    def _make(*replies) -> ScriptedProxy:
        return ScriptedProxy(replies=list(replies) or [PISTON_HELLO])
    return _make


@pytest_asyncio.fixture
async def http_session():
    await AioHttpClientSessionClassVarMixin.initialize_http_session()
    yield AioHttpClientSessionClassVarMixin.get_http_session()
    await AioHttpClientSessionClassVarMixin.close_http_session()


class StubUpstream:
    """
    Local aiohttp server standing in for an upstream API.

    Replies are consumed in order; the last one repeats. Every request's
    headers and JSON body are recorded.
    """

    def __init__(self) -> None:
        self.replies: list[tuple[int, Any]] = []
        self.requests: list[dict[str, Any]] = []
        self.server: TestServer | None = None

    def reply(self, status: int, body: Any) -> 'StubUpstream':
        self.replies.append((status, body))
        return self

    @property
    def url(self) -> str:
        return str(self.server.make_url('/upstream'))

    async def _handle(self, request: web.Request) -> web.Response:
        self.requests.append({"headers": dict(request.headers), "json": await request.json()})
        status, body = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(body, (dict, list)):
            return web.json_response(body, status=status)
        return web.Response(text=body, status=status)


@pytest_asyncio.fixture
async def stub_upstream():
    stub = StubUpstream()
    app = web.Application()
    app.router.add_post('/upstream', stub._handle)
    stub.server = TestServer(app)
    await stub.server.start_server()
    yield stub
    await stub.server.close()


@pytest.fixture
def gate() -> asyncio.Event:
    return asyncio.Event()
