"""
/generate endpoint.
"""
from loguru import logger as l

from getcode.fastapis.deps import CodeGeneratorDep, GenerationApiKeyDep
from getcode.fastapis.tagged_api_router import TaggedAPIRouter
from getcode.models import (
    ConfigurationError,
    ErrorDetail,
    GenerateRequest,
    GenerateResponse,
    GenerationExhaustedError,
)
from getcode.utils.http_exceptions import raise_internal_error, raise_too_many_requests

router = TaggedAPIRouter(prefix="/generate", tag="Generate code")


@router.post(
    "",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorDetail, "description": "Empty prompt or unsupported language"},
        429: {"model": ErrorDetail, "description": "Generation service quota exhausted"},
        500: {"model": ErrorDetail, "description": "Missing API key or every model failed"},
    },
)
async def generate(
    request: GenerateRequest,
    generator: CodeGeneratorDep,
    api_key: GenerationApiKeyDep,
) -> GenerateResponse:
    """
    Generate source code for a natural-language prompt.

    **Request**:
    - `prompt`: what the program should do (must not be blank)
    - `language`: one of C, C++, Java, JavaScript, Python (case-insensitive)
    - `simpleMode`: ask for a single linear program (default false)

    **Response** (200 OK): `code` without markdown fences, `language` lowercased.

    **Notes**:
    - Configured models are tried in order until one answers
    - 429 means the last model tried was rate limited; try again later
    """
    l.debug(f"Generate request: language={request.language}, simple_mode={request.simple_mode}")
    try:
        return await generator.generate(request, api_key)
    except ConfigurationError as e:
        l.error(e.message)
        raise_internal_error(e.message)
    except GenerationExhaustedError as e:
        if e.rate_limited:
            raise_too_many_requests(e.user_message())
        raise_internal_error(e.user_message())
