"""
CodeGenerator rich domain model.

Talks to an OpenAI-compatible chat completions endpoint (Groq by default).
One call per model identifier; the ordered fallback across identifiers is
delegated to run_model_fallback().
"""
import time

import aiohttp
import orjson
from loguru import logger as l

from getcode import meta_config
from getcode.utils.aiohttp_client_session_mixin import AioHttpClientSessionClassVarMixin

from .base import ModelBase
from .exceptions import (
    ConfigurationError,
    GenerationExhaustedError,
    ModelInvocationError,
    ModelRateLimitedError,
)
from .fallback import FallbackExhausted, FallbackSucceeded, run_model_fallback
from .generate import GenerateRequest, GenerateResponse
from .prompt import compose_messages
from .sanitizer import strip_code_fences


def _decode_json(body: bytes) -> dict | None:
    try:
        data = orjson.loads(body)
    except orjson.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _upstream_error_message(data: dict | None) -> str | None:
    """Extracts `error.message` (or a bare `error` string) from a provider response."""
    if not data or not data.get('error'):
        return None
    error = data['error']
    if isinstance(error, dict):
        return str(error.get('message') or error)
    return str(error)


class CodeGenerator(ModelBase, AioHttpClientSessionClassVarMixin):
    """
    Generates source code from a GenerateRequest.

    Inherits AioHttpClientSessionClassVarMixin for shared HTTP session.
    """
    api_url: str = meta_config.GENERATION_API_URL
    models: list[str] = list(meta_config.GENERATION_MODELS)
    """Candidate model identifiers, preferred first."""
    temperature: float = meta_config.GENERATION_TEMPERATURE
    timeout: float = meta_config.GENERATION_TIMEOUT
    """Seconds allowed for a single model attempt."""

    async def invoke_model(self, model: str, messages: list[dict[str, str]], api_key: str) -> str:
        """
        Performs one chat completion call and returns the raw generated text.

        Raises:
            ModelRateLimitedError: The service answered HTTP 429.
            ModelInvocationError: Any other failure, carrying the upstream message.
        """
        payload = {
            "model": model,
            "messages": messages,
            "temperature": self.temperature,
        }
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with self.http_session.post(
                self.api_url,
                json=payload,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                status = response.status
                body = await response.read()
        except TimeoutError:
            raise ModelInvocationError(model, f"Request timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            raise ModelInvocationError(model, f"Network error: {e}")

        data = _decode_json(body)
        error_message = _upstream_error_message(data)

        if status == 429:
            raise ModelRateLimitedError(model, error_message or "Rate limit reached")
        if status >= 400 or error_message:
            raise ModelInvocationError(model, error_message or f"HTTP {status}")
        if data is None:
            raise ModelInvocationError(model, "Response was not valid JSON")

        try:
            content = data['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError):
            raise ModelInvocationError(model, "Unexpected response format: no choices[0].message.content")
        if not content:
            raise ModelInvocationError(model, "Empty content in response")
        return content

    async def generate(self, request: GenerateRequest, api_key: str | None) -> GenerateResponse:
        """
        Composes the instruction, walks the model fallback list and strips fences.

        Raises:
            ConfigurationError: No API key; nothing is sent.
            GenerationExhaustedError: No model produced code.
        """
        if not api_key:
            raise ConfigurationError(
                f"Server Error: {meta_config.GENERATION_API_KEY_ENV} is not configured"
            )

        messages = compose_messages(request)
        l.info(
            f"Generating {request.target_language} code "
            f"(simple_mode={request.simple_mode}, prompt_chars={len(request.prompt)})"
        )
        start_time = time.monotonic()

        async def _invoke(model: str) -> str:
            return await self.invoke_model(model, messages, api_key)

        outcome = await run_model_fallback(self.models, _invoke)

        match outcome:
            case FallbackSucceeded(model=model, text=text, attempts=attempts):
                l.info(
                    f"Generation succeeded with {model} after {len(attempts)} attempt(s) "
                    f"in {time.monotonic() - start_time:.2f}s"
                )
                return GenerateResponse(
                    code=strip_code_fences(text),
                    language=request.language.lower(),
                )
            case FallbackExhausted() as exhausted:
                last = exhausted.last_failure
                if last is None:
                    l.error("Generation requested but no models are configured")
                    raise GenerationExhaustedError("No generation models are configured.", attempts=0)
                l.error(f"All {len(exhausted.attempts)} model(s) failed, last: {last.model}: {last.error}")
                raise GenerationExhaustedError(
                    f"Generation service error: {last.error} (model {last.model})",
                    attempts=len(exhausted.attempts),
                    rate_limited=last.rate_limited,
                )
