"""
Runtime table for the execution service.
"""
from loguru import logger as l
from pydantic import ConfigDict

from getcode import meta_config

from .base import ModelBase


class Runtime(ModelBase):
    """(language, version) pair understood by the execution service."""
    model_config = ConfigDict(frozen=True)

    language: str
    version: str


RUNTIMES: dict[str, Runtime] = {
    "python": Runtime(language="python", version="3.10.0"),
    "javascript": Runtime(language="javascript", version="18.15.0"),
    "java": Runtime(language="java", version="15.0.2"),
    "c": Runtime(language="c", version="10.2.0"),
    "cpp": Runtime(language="c++", version="10.2.0"),
}

# Alternative spellings used by the UI and by GenerateResponse.language.
_ALIASES: dict[str, str] = {
    "c++": "cpp",
    "js": "javascript",
    "py": "python",
}


def _lookup(language: str) -> Runtime | None:
    key = language.strip().lower()
    return RUNTIMES.get(_ALIASES.get(key, key))


def default_runtime() -> Runtime:
    """Runtime for DEFAULT_RUNTIME_LANGUAGE, or python when that name has no entry."""
    runtime = _lookup(meta_config.DEFAULT_RUNTIME_LANGUAGE)
    if runtime is None:
        l.warning(f"DEFAULT_RUNTIME_LANGUAGE '{meta_config.DEFAULT_RUNTIME_LANGUAGE}' has no runtime, using python")
        return RUNTIMES["python"]
    return runtime


def resolve_runtime(language: str) -> Runtime:
    """
    Maps a UI language name to its runtime pair.

    Unknown languages fall back to the default runtime instead of failing;
    the execution service then reports whatever the code does under it.
    """
    runtime = _lookup(language)
    if runtime is None:
        runtime = default_runtime()
        l.warning(f"No runtime for language '{language}', falling back to {runtime.language} {runtime.version}")
    return runtime
