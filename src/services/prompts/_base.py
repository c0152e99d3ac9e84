"""Base utilities for prompts module."""

import re

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def strip_markdown_code_blocks(text: str) -> str:
    """Strip a surrounding ```json fence from model output, if present.

    Args:
        text: Raw text that may be wrapped in a markdown code block

    Returns:
        The text inside the fence, or the stripped input when unfenced
    """
    text = text.strip()
    match = _FENCE.match(text)
    return match.group(1) if match else text
