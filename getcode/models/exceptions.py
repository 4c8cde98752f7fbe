"""
Custom exceptions for the models layer.

These exceptions are framework-agnostic and are caught by the FastAPI
layer to convert to HTTP responses.
"""


class GetCodeError(Exception):
    """Base exception for GetCode operations."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(GetCodeError):
    """Raised when a required setting (the API key) is missing."""
    pass


class ModelInvocationError(GetCodeError):
    """Raised when a single call to the generation service fails."""
    def __init__(self, model: str, message: str):
        self.model = model
        super().__init__(message)


class ModelRateLimitedError(ModelInvocationError):
    """Raised when the generation service reports quota exhaustion (HTTP 429)."""
    pass


class GenerationExhaustedError(GetCodeError):
    """Raised when every candidate model failed, or none was configured."""
    RATE_LIMITED_MESSAGE = "The code generation service is busy right now. Please try again later."

    def __init__(self, message: str, attempts: int, rate_limited: bool = False):
        self.attempts = attempts
        self.rate_limited = rate_limited
        super().__init__(message)

    def user_message(self) -> str:
        if self.rate_limited:
            return f"{self.RATE_LIMITED_MESSAGE} ({self.message})"
        return self.message


class ExecutionServiceError(GetCodeError):
    """Raised when the execution service cannot be reached or answers garbage."""
    pass
