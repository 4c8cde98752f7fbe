"""
Instruction composition for the generation model.
"""
from .generate import GenerateRequest

SIMPLE_MODE_DIRECTIVE = (
    "CRITICAL: Write SIMPLE, LINEAR code. "
    "No loops, no menus, no retry prompts. "
    "Ask for all input once, up front. "
    "Output ONLY code, without markdown fences."
)

PROFESSIONAL_MODE_DIRECTIVE = (
    "Write professional, robust code. "
    "Loops and functions are allowed. "
    "Output ONLY code, without markdown fences."
)


def compose_instruction(request: GenerateRequest) -> str:
    directive = SIMPLE_MODE_DIRECTIVE if request.simple_mode else PROFESSIONAL_MODE_DIRECTIVE
    return f"Expert coder in {request.target_language.value}. {directive}"


def compose_messages(request: GenerateRequest) -> list[dict[str, str]]:
    """Chat message pair: the composed instruction as system turn, the prompt as user turn."""
    return [
        {"role": "system", "content": compose_instruction(request)},
        {"role": "user", "content": request.prompt},
    ]
