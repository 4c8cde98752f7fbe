"""
Execute-related models.
"""
from pydantic import Field

from .base import ModelBase
from .field_types import SourceCodeStr, StdinStr, Str32


class ExecuteRequest(ModelBase):
    """Request to run code on the remote execution service."""
    code: SourceCodeStr
    language: Str32 = "python"
    """UI language name; unknown names run under the default runtime."""
    stdin: StdinStr = ""
    """Program input. Empty for a verify run."""


class VerifyRequest(ModelBase):
    """Request to compile/parse code without user input."""
    code: SourceCodeStr
    language: Str32 = "python"


class ExecutionResult(ModelBase):
    """What the execution service reported, untouched."""
    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = Field(default=None, alias='exitCode')
    """Exit status; None when the process was killed by a signal or never ran."""
    signal: str | None = None
    system_message: str | None = Field(default=None, alias='systemMessage')
    """Set when the service itself rejected the request (e.g. unsupported runtime)."""

    @property
    def rejected(self) -> bool:
        return self.system_message is not None

    def display_text(self) -> str:
        """Terminal panel rendering."""
        if self.system_message is not None:
            return f"Error: {self.system_message}"
        if self.stderr:
            return f"Execution Error:\n{self.stderr}"
        return f"> Output:\n{self.stdout}"


class ExecuteResponse(ExecutionResult):
    """ExecutionResult plus the runtime that was used and the rendered output."""
    language: str
    version: str
    output: str
