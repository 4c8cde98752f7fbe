"""
Shared aiohttp ClientSession for the upstream service clients.

Both upstreams (the chat completions API and the code execution API) are
reached through one process-wide ``aiohttp.ClientSession`` stored on a
ClassVar. The FastAPI lifespan opens it with ``initialize_http_session()``
and closes it with ``close_http_session()``.

Usage example:
    ```python
    class ExecutionProxy(AioHttpClientSessionClassVarMixin):
        async def ping(self, url: str) -> int:
            async with self.http_session.get(url) as resp:
                return resp.status

    await AioHttpClientSessionClassVarMixin.initialize_http_session()
    status = await ExecutionProxy().ping("https://emkc.org/api/v2/piston/runtimes")
    await AioHttpClientSessionClassVarMixin.close_http_session()
    ```

Every request is debug-logged through an aiohttp TraceConfig. Credentials
in the ``Authorization`` header are redacted before logging.
"""
from typing import ClassVar

import aiohttp
from aiohttp import TraceConfig, TraceRequestStartParams
from loguru import logger as l

_REDACTED_HEADERS = frozenset({'authorization', 'x-api-key'})


def _redact_headers(headers) -> dict[str, str]:
    return {
        key: ('***' if key.lower() in _REDACTED_HEADERS else value)
        for key, value in headers.items()
    }


async def _on_request_start(
    session: aiohttp.ClientSession,
    trace_config_ctx: aiohttp.tracing.SimpleNamespace,
    params: TraceRequestStartParams,
) -> None:
    """Records request info when request starts."""
    trace_config_ctx.method = params.method
    trace_config_ctx.url = params.url
    trace_config_ctx.headers = _redact_headers(params.headers)
    trace_config_ctx.body_chunks = []


async def _on_request_chunk_sent(
    session: aiohttp.ClientSession,
    trace_config_ctx: aiohttp.tracing.SimpleNamespace,
    params: aiohttp.TraceRequestChunkSentParams,
) -> None:
    """Collects data when request body is sent."""
    trace_config_ctx.body_chunks.append(params.chunk)


async def _on_request_end(
    session: aiohttp.ClientSession,
    trace_config_ctx: aiohttp.tracing.SimpleNamespace,
    params: aiohttp.TraceRequestEndParams,
) -> None:
    """Records the finished request together with the upstream status."""
    body = b''.join(trace_config_ctx.body_chunks)
    body_str = body.decode('utf-8', errors='replace') if body else "(empty)"
    l.debug(
        f"[HTTP Request] {trace_config_ctx.method} {trace_config_ctx.url} -> {params.response.status}\n"
        f"Headers: {trace_config_ctx.headers}\n"
        f"Body: {body_str}"
    )


async def _on_request_exception(
    session: aiohttp.ClientSession,
    trace_config_ctx: aiohttp.tracing.SimpleNamespace,
    params: aiohttp.TraceRequestExceptionParams,
) -> None:
    l.error(
        f"[HTTP Request Exception] {trace_config_ctx.method} {trace_config_ctx.url}\n"
        f"Exception: {type(params.exception).__name__}: {params.exception}"
    )


def _create_trace_config() -> TraceConfig:
    """Creates request tracing configuration."""
    trace_config = TraceConfig()
    trace_config.on_request_start.append(_on_request_start)
    trace_config.on_request_chunk_sent.append(_on_request_chunk_sent)
    trace_config.on_request_end.append(_on_request_end)
    trace_config.on_request_exception.append(_on_request_exception)
    return trace_config


class AioHttpClientSessionClassVarMixin:
    """
    Mixin to provide a shared aiohttp ClientSession for asynchronous HTTP requests.

    The session must be initialized in an async context (the FastAPI lifespan)
    by calling `initialize_http_session()` before use.

    All classes inheriting this mixin share a single global ClientSession instance.
    """

    _http_session: ClassVar[aiohttp.ClientSession | None] = None

    @classmethod
    async def initialize_http_session(cls, **session_kwargs) -> None:
        """
        Initialize the aiohttp ClientSession in an async context.

        Args:
            **session_kwargs: Optional keyword arguments to pass to aiohttp.ClientSession
        """
        assert cls._http_session is None or cls._http_session.closed, "HTTP session already initialized"

        # limit: max concurrent connections
        # limit_per_host: both upstreams are single hosts
        # ttl_dns_cache: DNS cache time (seconds)
        connector = aiohttp.TCPConnector(
            limit=100,
            limit_per_host=30,
            keepalive_timeout=60,
            enable_cleanup_closed=True,
            ttl_dns_cache=300,
        )
        session_kwargs['connector'] = connector

        # Per-call timeouts are passed by the clients; this is the ceiling.
        timeout = aiohttp.ClientTimeout(
            total=300,
            connect=30,
            sock_read=120,
        )
        session_kwargs.setdefault('timeout', timeout)

        # Class attribute on the mixin itself so every subclass sees the same session.
        AioHttpClientSessionClassVarMixin._http_session = aiohttp.ClientSession(
            trust_env=False,
            trace_configs=[_create_trace_config()],
            **session_kwargs,
        )
        l.info(f"{cls.__name__}: HTTP session initialized")

    @classmethod
    def get_http_session(cls) -> aiohttp.ClientSession:
        """
        Get the aiohttp ClientSession instance at class level.

        Returns:
            An instance of aiohttp.ClientSession.
        """
        session = AioHttpClientSessionClassVarMixin._http_session
        assert session is not None and not session.closed, (
            "HTTP session not initialized. "
            "Call `AioHttpClientSessionClassVarMixin.initialize_http_session()` "
            "during application startup."
        )
        return session

    @property
    def http_session(self) -> aiohttp.ClientSession:
        """Delegates to the class-level get_http_session() method."""
        return self.__class__.get_http_session()

    @classmethod
    async def close_http_session(cls) -> None:
        """
        Close the aiohttp ClientSession if it is open.

        Should be called during application shutdown.
        """
        session = AioHttpClientSessionClassVarMixin._http_session
        assert session is not None and not session.closed, "HTTP session not initialized or already closed"
        await session.close()
        AioHttpClientSessionClassVarMixin._http_session = None
        l.info(f"{cls.__name__}: HTTP session closed")
