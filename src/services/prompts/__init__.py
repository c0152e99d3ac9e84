"""Prompts module - centralized prompt templates for AI services.

Re-exports all prompt constants and utilities for easy importing:
    from services.prompts import PROMPT_VERSIONS, strip_markdown_code_blocks
    from services.prompts import STORYBOARD_DIRECTOR_V1, STORYBOARD_REQUEST_V1
"""

from services.prompts._base import strip_markdown_code_blocks
from services.prompts.storyboard import STORYBOARD_DIRECTOR_V1, STORYBOARD_REQUEST_V1

# Increment when prompts change so logged responses can be traced to a prompt
PROMPT_VERSIONS = {
    "generate_storyboard_script": "v1",
}

__all__ = [
    # Utilities
    "strip_markdown_code_blocks",
    # Version tracking
    "PROMPT_VERSIONS",
    # Storyboard prompts
    "STORYBOARD_DIRECTOR_V1",
    "STORYBOARD_REQUEST_V1",
]
