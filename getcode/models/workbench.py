"""
Workbench: state and action handlers of the GetCode page.

The browser UI (static/index.html) keeps the same fields and handlers in
JavaScript; this class is the server-side model of that state machine.

Overlapping requests are allowed. Every submission and every execution
takes a ticket from its own counter, and a response whose ticket is no
longer the latest is dropped, so the newest request always owns the display.
"""
from collections.abc import Callable

from loguru import logger as l
from pydantic import PrivateAttr, ValidationError

from getcode import meta_config

from .base import ModelBase
from .exceptions import (
    ConfigurationError,
    ExecutionServiceError,
    GenerationExhaustedError,
)
from .execute import ExecuteRequest, ExecuteResponse
from .execution import ExecutionProxy
from .generate import GenerateRequest, GenerateResponse, GenerationLanguage
from .generator import CodeGenerator

IDLE_OUTPUT = "// Click 'Run' to execute code..."
RUNNING_OUTPUT = "Compiling and running on remote server..."


class Workbench(ModelBase):
    generator: CodeGenerator
    proxy: ExecutionProxy
    api_key_provider: Callable[[], str | None] = meta_config.get_generation_api_key

    prompt: str = ""
    language: GenerationLanguage = GenerationLanguage.PYTHON
    simple_mode: bool = False

    result: GenerateResponse | None = None
    error: str | None = None
    is_generating: bool = False
    copied: bool = False

    code: str = ""
    """Editable buffer, seeded from the last result."""
    stdin: str = ""
    execution_language: str = "python"
    execution: ExecuteResponse | None = None
    output: str = IDLE_OUTPUT
    is_running: bool = False

    _generation_ticket: int = PrivateAttr(default=0)
    _execution_ticket: int = PrivateAttr(default=0)

    # --- Input actions ---

    def set_prompt(self, text: str) -> None:
        self.prompt = text

    def select_language(self, name: str) -> None:
        self.language = GenerationLanguage.parse(name)

    def toggle_simple_mode(self) -> None:
        self.simple_mode = not self.simple_mode

    def edit_code(self, text: str) -> None:
        self.code = text

    def edit_stdin(self, text: str) -> None:
        self.stdin = text

    def select_execution_language(self, name: str) -> None:
        self.execution_language = name.lower()

    # --- Generation ---

    async def submit(self) -> None:
        """Generates code for the current prompt, language and mode."""
        self.error = None
        self.result = None
        self.copied = False

        # Taken before validation so a blank submit also supersedes in-flight requests.
        self._generation_ticket += 1
        ticket = self._generation_ticket

        if not self.prompt.strip():
            self.is_generating = False
            self.error = "Please enter a prompt"
            return

        self.is_generating = True
        try:
            request = GenerateRequest(
                prompt=self.prompt,
                language=self.language.value,
                simple_mode=self.simple_mode,
            )
            result = await self.generator.generate(request, self.api_key_provider())
        except ValidationError as e:
            if ticket == self._generation_ticket:
                self.error = "; ".join(err['msg'] for err in e.errors())
            return
        except ConfigurationError as e:
            if ticket == self._generation_ticket:
                self.error = e.message
            return
        except GenerationExhaustedError as e:
            if ticket == self._generation_ticket:
                self.error = e.user_message()
            return
        finally:
            if ticket == self._generation_ticket:
                self.is_generating = False

        if ticket != self._generation_ticket:
            l.debug(f"Dropping stale generation response (ticket {ticket}, latest {self._generation_ticket})")
            return
        self.result = result
        self.code = result.code
        self.execution_language = result.language

    def copy(self) -> str:
        """Returns the generated code for the clipboard."""
        if self.result is None:
            return ""
        self.copied = True
        return self.result.code

    # --- Execution ---

    async def verify(self) -> None:
        """Runs the code buffer with empty stdin to surface compile/parse errors."""
        await self._execute(stdin="")

    async def run(self) -> None:
        """Runs the code buffer with the stdin buffer."""
        await self._execute(stdin=self.stdin)

    async def _execute(self, stdin: str) -> None:
        self._execution_ticket += 1
        ticket = self._execution_ticket
        self.is_running = True
        self.output = RUNNING_OUTPUT
        try:
            response = await self.proxy.execute(
                ExecuteRequest(code=self.code, language=self.execution_language, stdin=stdin)
            )
        except ValidationError as e:
            if ticket == self._execution_ticket:
                self.execution = None
                self.output = "Error: " + "; ".join(err['msg'] for err in e.errors())
            return
        except ExecutionServiceError as e:
            if ticket == self._execution_ticket:
                self.execution = None
                self.output = e.message
            return
        finally:
            if ticket == self._execution_ticket:
                self.is_running = False

        if ticket != self._execution_ticket:
            l.debug(f"Dropping stale execution response (ticket {ticket}, latest {self._execution_ticket})")
            return
        self.execution = response
        self.output = response.output
