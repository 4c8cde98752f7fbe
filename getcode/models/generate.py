"""
Generation-related models.
"""
from enum import StrEnum

from pydantic import ConfigDict, Field, field_validator

from .base import ModelBase
from .field_types import PromptStr, Str32


class GenerationLanguage(StrEnum):
    C = "C"
    CPP = "C++"
    JAVA = "Java"
    JAVASCRIPT = "JavaScript"
    PYTHON = "Python"

    @classmethod
    def parse(cls, name: str) -> 'GenerationLanguage':
        """Case-insensitive lookup; raises ValueError for unknown names."""
        wanted = name.strip().lower()
        for language in cls:
            if language.value.lower() == wanted:
                return language
        supported = ", ".join(language.value for language in cls)
        raise ValueError(f"Unsupported language '{name}'. Supported languages: {supported}")


class GenerateRequest(ModelBase):
    """Request to generate code from a natural-language prompt."""
    prompt: PromptStr
    """What the program should do. Stored trimmed."""
    language: Str32
    """Target language, one of GenerationLanguage (case-insensitive)."""
    simple_mode: bool = Field(default=False, alias='simpleMode')
    """Constrain the output to a single linear program."""

    @field_validator('prompt')
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please enter a prompt")
        return value

    @field_validator('language')
    @classmethod
    def _language_supported(cls, value: str) -> str:
        GenerationLanguage.parse(value)
        return value.strip()

    @property
    def target_language(self) -> GenerationLanguage:
        return GenerationLanguage.parse(self.language)


class GenerateResponse(ModelBase):
    """Generated code, fences stripped."""
    model_config = ConfigDict(frozen=True)

    code: str
    language: str
    """Lowercased echo of the requested language."""
