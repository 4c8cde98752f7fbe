"""
/status endpoint.
"""
from getcode.fastapis.deps import CodeGeneratorDep, GenerationApiKeyDep
from getcode.fastapis.tagged_api_router import TaggedAPIRouter
from getcode.models import StatusResponse

router = TaggedAPIRouter(prefix="/status", tag="Status")


@router.get("", response_model=StatusResponse)
async def get_status(generator: CodeGeneratorDep, api_key: GenerationApiKeyDep) -> StatusResponse:
    """
    Health check.

    **Response** (200 OK):
    - `status`: always "ok" while the process serves requests
    - `models`: generation fallback order
    - `api_key_configured`: whether the generation API key is set (the key itself is never returned)
    """
    return StatusResponse(
        status="ok",
        models=generator.models,
        api_key_configured=api_key is not None,
    )
