"""
ExecutionProxy rich domain model.

Forwards code and stdin to a Piston-compatible execution API and reports
its answer verbatim. There is no retry: each call is one outbound request.
"""
import time

import aiohttp
import orjson
from loguru import logger as l

from getcode import meta_config
from getcode.utils.aiohttp_client_session_mixin import AioHttpClientSessionClassVarMixin

from .base import ModelBase
from .exceptions import ExecutionServiceError
from .execute import ExecuteRequest, ExecuteResponse, ExecutionResult
from .runtime import resolve_runtime


def translate_execution_response(data: dict) -> ExecutionResult:
    """
    Converts a Piston response body into an ExecutionResult.

    A top-level `message` means the service refused the request. Compiled
    languages report a `compile` stage; when it failed, its output replaces
    the (absent or empty) `run` stage.
    """
    if data.get('message'):
        return ExecutionResult(system_message=str(data['message']))

    stage = data.get('run')
    compile_stage = data.get('compile')
    if isinstance(compile_stage, dict) and compile_stage.get('code') != 0:
        stage = compile_stage

    if not isinstance(stage, dict):
        raise ExecutionServiceError("Execution service returned an unexpected response.")

    return ExecutionResult(
        stdout=stage.get('stdout') or '',
        stderr=stage.get('stderr') or '',
        exit_code=stage.get('code'),
        signal=stage.get('signal'),
    )


class ExecutionProxy(ModelBase, AioHttpClientSessionClassVarMixin):
    """
    Runs code on the remote execution service.

    Inherits AioHttpClientSessionClassVarMixin for shared HTTP session.
    """
    execute_url: str = meta_config.EXECUTION_API_URL
    timeout: float = meta_config.EXECUTION_TIMEOUT

    async def send(self, payload: dict) -> dict:
        """
        Performs the single outbound call and decodes the JSON body.

        Raises:
            ExecutionServiceError: The service could not be reached or answered garbage.
        """
        try:
            async with self.http_session.post(
                self.execute_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                status = response.status
                body = await response.read()
        except TimeoutError:
            l.error(f"Execution service timed out after {self.timeout}s")
            raise ExecutionServiceError("Error connecting to execution server: request timed out.")
        except aiohttp.ClientError as e:
            l.error(f"Failed to reach execution service: {e}")
            raise ExecutionServiceError("Error connecting to execution server.")

        try:
            data = orjson.loads(body)
        except orjson.JSONDecodeError:
            l.error(f"Execution service returned non-JSON body (status {status})")
            raise ExecutionServiceError(f"Execution service returned an invalid response (HTTP {status}).")
        if not isinstance(data, dict):
            raise ExecutionServiceError(f"Execution service returned an invalid response (HTTP {status}).")
        l.debug(f"Execution service answered HTTP {status}")
        return data

    async def execute(self, request: ExecuteRequest) -> ExecuteResponse:
        """
        Runs `request.code` with `request.stdin` under the runtime for `request.language`.

        Raises:
            ExecutionServiceError: The service could not be reached or answered garbage.
        """
        runtime = resolve_runtime(request.language)
        payload = {
            "language": runtime.language,
            "version": runtime.version,
            "files": [{"content": request.code}],
            "stdin": request.stdin,
        }
        code_preview = (request.code[:97] + '...' if len(request.code) > 100 else request.code).replace('\n', ' ')
        l.info(f"Executing {runtime.language} {runtime.version}: {code_preview.strip()}")
        start_time = time.monotonic()

        result = translate_execution_response(await self.send(payload))
        l.info(
            f"Execution finished. exit={result.exit_code}, rejected={result.rejected}, "
            f"Duration: {time.monotonic() - start_time:.2f}s"
        )
        return ExecuteResponse(
            **result.model_dump(),
            language=runtime.language,
            version=runtime.version,
            output=result.display_text(),
        )

    async def verify(self, code: str, language: str) -> ExecuteResponse:
        """Same call as execute() with empty stdin, used to surface compile/parse errors."""
        return await self.execute(ExecuteRequest(code=code, language=language, stdin=""))
