# getcode/meta_config.py
"""
Configuration management for the GetCode backend.

Everything except the generation API key is read once at import time from
environment variables. The key is read on every request through
`get_generation_api_key()` so that a missing key only fails the request
that needs it.
"""
import os
from pathlib import Path


# --- Code Generation Service ---
GENERATION_API_URL: str = os.environ.get(
    "GENERATION_API_URL", "https://api.groq.com/openai/v1/chat/completions"
)
GENERATION_API_KEY_ENV: str = "GROQ_API_KEY"

# Ordered fallback list, first entry is preferred.
_DEFAULT_GENERATION_MODELS = "llama-3.3-70b-versatile,llama-3.1-8b-instant,meta-llama/llama-4-scout-17b-16e-instruct"
GENERATION_MODELS: list[str] = [
    model.strip()
    for model in os.environ.get("GENERATION_MODELS", _DEFAULT_GENERATION_MODELS).split(',')
    if model.strip()
]
GENERATION_TEMPERATURE: float = float(os.environ.get("GENERATION_TEMPERATURE", 0.1))
GENERATION_TIMEOUT: float = float(os.environ.get("GENERATION_TIMEOUT", 60.0))  # per model attempt

# --- Code Execution Service ---
EXECUTION_API_URL: str = os.environ.get("EXECUTION_API_URL", "https://emkc.org/api/v2/piston/execute")
EXECUTION_TIMEOUT: float = float(os.environ.get("EXECUTION_TIMEOUT", 30.0))
DEFAULT_RUNTIME_LANGUAGE: str = os.environ.get("DEFAULT_RUNTIME_LANGUAGE", "python")

# --- Web ---
HOST: str = os.environ.get("HOST", "0.0.0.0")
PORT: int = int(os.environ.get("PORT", 8000))
STATIC_DIR: Path = Path(__file__).parent / "static"

_cors_origins_str: str = os.environ.get('CORS_ALLOWED_ORIGINS', '*')
CORS_ALLOWED_ORIGINS: list[str] = (
    ['*'] if _cors_origins_str == '*'
    else [origin.strip() for origin in _cors_origins_str.split(',') if origin.strip()]
)


def get_generation_api_key() -> str | None:
    """Returns the generation API key, or None when it is unset or blank."""
    key = os.environ.get(GENERATION_API_KEY_ENV, '').strip()
    return key or None
