"""
messages.py - Framing of the compiled prompt for the code generator.

Every message sent to the generator carries the full compiled prompt, so each
turn is self-contained:

    [CONTEXT: <why>]

    <compiled prompt>

    [USER'S LATEST REQUEST]: <request>

The first build after the user confirms the AppSpec is requested with the
sentinel ``TRIGGER_BUILD_MESSAGE``; it is replaced by a fixed build
instruction.
"""

from __future__ import annotations

TRIGGER_BUILD_MESSAGE = "__TRIGGER_BUILD__"

BUILD_CONTEXT = "Building app from confirmed specification"
REFINE_CONTEXT = "User is refining their app requirements"

BUILD_INSTRUCTION = (
    "Build the application according to the specifications above. "
    "Do not ask any clarifying questions - all requirements are defined in the specification."
)


def is_trigger_build(message: str) -> bool:
    return message == TRIGGER_BUILD_MESSAGE


def build_enriched_message(compiled_prompt: str, user_request: str, trigger_build: bool = False) -> str:
    """Wrap a compiled prompt and the user's request for the generator.

    The trigger sentinel as `user_request` counts as a build request.
    """
    if trigger_build or is_trigger_build(user_request):
        context, request = BUILD_CONTEXT, BUILD_INSTRUCTION
    else:
        context, request = REFINE_CONTEXT, user_request
    return f"[CONTEXT: {context}]\n\n{compiled_prompt}\n\n[USER'S LATEST REQUEST]: {request}"
