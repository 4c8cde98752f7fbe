"""
/languages endpoint.
"""
from getcode.fastapis.tagged_api_router import TaggedAPIRouter
from getcode.models import RUNTIMES, GenerationLanguage, LanguagesResponse, default_runtime

router = TaggedAPIRouter(prefix="/languages", tag="Languages")


@router.get("", response_model=LanguagesResponse)
async def get_languages() -> LanguagesResponse:
    """Languages accepted for generation and the execution runtime table."""
    return LanguagesResponse(
        generation=[language.value for language in GenerationLanguage],
        runtimes=RUNTIMES,
        default_runtime=default_runtime(),
    )
