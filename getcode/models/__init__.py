"""
GetCode models package.

Domain objects carry both data and behavior: CodeGenerator talks to the
generation service, ExecutionProxy to the execution service, Workbench
holds the page state.
"""
from .base import ModelBase
from .field_types import PromptStr, SourceCodeStr, StdinStr, Str32
from .common import ErrorDetail
from .exceptions import (
    ConfigurationError,
    ExecutionServiceError,
    GenerationExhaustedError,
    GetCodeError,
    ModelInvocationError,
    ModelRateLimitedError,
)
from .generate import GenerateRequest, GenerateResponse, GenerationLanguage
from .prompt import compose_instruction, compose_messages
from .sanitizer import strip_code_fences
from .fallback import FallbackExhausted, FallbackOutcome, FallbackSucceeded, ModelAttempt, run_model_fallback
from .generator import CodeGenerator
from .runtime import RUNTIMES, Runtime, default_runtime, resolve_runtime
from .execute import ExecuteRequest, ExecuteResponse, ExecutionResult, VerifyRequest
from .execution import ExecutionProxy, translate_execution_response
from .status import LanguagesResponse, StatusResponse
from .workbench import Workbench
