"""
Status and catalog response models.
"""
from .base import ModelBase
from .runtime import Runtime


class StatusResponse(ModelBase):
    status: str
    models: list[str]
    api_key_configured: bool


class LanguagesResponse(ModelBase):
    generation: list[str]
    """Languages accepted by /api/generate."""
    runtimes: dict[str, Runtime]
    """Execution runtime per UI language key."""
    default_runtime: Runtime
