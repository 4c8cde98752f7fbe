"""
/execute endpoints.
"""
from loguru import logger as l

from getcode.fastapis.deps import ExecutionProxyDep
from getcode.fastapis.tagged_api_router import TaggedAPIRouter
from getcode.models import ErrorDetail, ExecuteRequest, ExecuteResponse, ExecutionServiceError, VerifyRequest
from getcode.utils.http_exceptions import raise_bad_gateway

router = TaggedAPIRouter(prefix="/execute", tag="Execute code")

_ERROR_RESPONSES = {
    502: {"model": ErrorDetail, "description": "Execution service unreachable or invalid answer"},
}


@router.post("", response_model=ExecuteResponse, responses=_ERROR_RESPONSES)
async def execute(request: ExecuteRequest, proxy: ExecutionProxyDep) -> ExecuteResponse:
    """
    Run code with the given stdin on the remote execution service.

    **Response** (200 OK): `stdout`, `stderr`, `exitCode`, `signal` of the
    program, or `systemMessage` when the service rejected the request.
    `output` is the text shown in the terminal panel.

    **Notes**:
    - Unknown languages run under the default runtime (python 3.10.0)
    - Program failures are not HTTP errors; they are reported verbatim
    """
    l.debug(f"Execute request: language={request.language}, stdin_chars={len(request.stdin)}")
    try:
        return await proxy.execute(request)
    except ExecutionServiceError as e:
        raise_bad_gateway(e.message)


@router.post("/verify", response_model=ExecuteResponse, responses=_ERROR_RESPONSES)
async def verify(request: VerifyRequest, proxy: ExecutionProxyDep) -> ExecuteResponse:
    """
    Run code with empty stdin to surface compile and parse errors.
    """
    l.debug(f"Verify request: language={request.language}")
    try:
        return await proxy.verify(request.code, request.language)
    except ExecutionServiceError as e:
        raise_bad_gateway(e.message)
