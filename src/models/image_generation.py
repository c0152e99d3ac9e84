"""Models for storyboard frame image generation (Gemini image model)."""

import base64
from dataclasses import dataclass
from enum import Enum


class AspectRatio(str, Enum):
    """Aspect ratios accepted by the image model."""

    WIDESCREEN = "16:9"
    PORTRAIT = "9:16"
    SQUARE = "1:1"
    STANDARD = "4:3"
    STANDARD_PORTRAIT = "3:4"


@dataclass
class GeneratedImage:
    """A single rendered image, kept as the base64 payload the model returned."""

    data: str  # base64, exactly as returned
    mime_type: str = "image/png"

    @property
    def data_url(self) -> str:
        """Directly displayable `data:` URI wrapping the payload."""
        return f"data:{self.mime_type};base64,{self.data}"

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)
