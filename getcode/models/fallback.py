"""
Ordered model fallback.

The candidate list is walked front to back. The first model that answers
wins; every failure is kept as a ModelAttempt so the caller can report the
last one when the list runs out.
"""
from collections.abc import Awaitable, Callable, Sequence

from loguru import logger as l

from .base import ModelBase
from .exceptions import ModelInvocationError, ModelRateLimitedError


class ModelAttempt(ModelBase):
    """Outcome of one call to one model."""
    model: str
    text: str | None = None
    error: str | None = None
    rate_limited: bool = False

    @property
    def succeeded(self) -> bool:
        return self.error is None


class FallbackSucceeded(ModelBase):
    model: str
    text: str
    attempts: list[ModelAttempt]


class FallbackExhausted(ModelBase):
    attempts: list[ModelAttempt]

    @property
    def last_failure(self) -> ModelAttempt | None:
        return self.attempts[-1] if self.attempts else None


FallbackOutcome = FallbackSucceeded | FallbackExhausted


async def run_model_fallback(
    models: Sequence[str],
    invoke: Callable[[str], Awaitable[str]],
) -> FallbackOutcome:
    """
    Tries each model in order until one succeeds.

    Args:
        models: Candidate model identifiers, preferred first.
        invoke: Performs exactly one call for the given model. Raises
            ModelInvocationError (or its rate-limit subclass) on failure.

    Returns:
        FallbackSucceeded after the first success, FallbackExhausted when
        every candidate failed or the list is empty.
    """
    attempts: list[ModelAttempt] = []
    for model in models:
        try:
            text = await invoke(model)
        except ModelInvocationError as e:
            l.warning(f"Model {model} failed ({len(attempts) + 1}/{len(models)}): {e.message}")
            attempts.append(ModelAttempt(
                model=model,
                error=e.message,
                rate_limited=isinstance(e, ModelRateLimitedError),
            ))
            continue
        attempts.append(ModelAttempt(model=model, text=text))
        return FallbackSucceeded(model=model, text=text, attempts=attempts)
    return FallbackExhausted(attempts=attempts)
