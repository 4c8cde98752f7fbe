"""
Global FastAPI dependencies.

Routes receive their service clients through these dependencies so tests
can swap them with ``app.dependency_overrides``.
"""
from typing import Annotated

from fastapi import Depends

from getcode import meta_config
from getcode.models import CodeGenerator, ExecutionProxy


def get_code_generator() -> CodeGenerator:
    return CodeGenerator(
        api_url=meta_config.GENERATION_API_URL,
        models=meta_config.GENERATION_MODELS,
        temperature=meta_config.GENERATION_TEMPERATURE,
        timeout=meta_config.GENERATION_TIMEOUT,
    )


def get_execution_proxy() -> ExecutionProxy:
    return ExecutionProxy(
        execute_url=meta_config.EXECUTION_API_URL,
        timeout=meta_config.EXECUTION_TIMEOUT,
    )


def get_generation_api_key() -> str | None:
    """Read on every request; a missing key only fails the request that needs it."""
    return meta_config.get_generation_api_key()


CodeGeneratorDep = Annotated[CodeGenerator, Depends(get_code_generator)]
ExecutionProxyDep = Annotated[ExecutionProxy, Depends(get_execution_proxy)]
GenerationApiKeyDep = Annotated[str | None, Depends(get_generation_api_key)]
