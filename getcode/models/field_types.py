"""
Common type aliases for the backend.

This module provides reusable type aliases with validation constraints.
"""
from typing import Annotated, TypeAlias

from pydantic import Field


# =============================================================================
# String Length Constraints
# =============================================================================

Str32: TypeAlias = Annotated[str, Field(max_length=32)]


# =============================================================================
# Payload Constraints
# =============================================================================

PromptStr: TypeAlias = Annotated[str, Field(max_length=8_000)]
"""Natural-language request sent to the generation model."""

SourceCodeStr: TypeAlias = Annotated[str, Field(max_length=1_048_576)]
"""Program source (1MB limit)."""

StdinStr: TypeAlias = Annotated[str, Field(max_length=65_536)]
"""Program input fed to stdin."""
