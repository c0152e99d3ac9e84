"""Pydantic request/response models for the storyboard API."""

from pydantic import BaseModel, Field

from utils.config import DEFAULT_TONE

# =============================================================================
# Response Models
# =============================================================================


class RootResponse(BaseModel):
    """Root endpoint response."""

    message: str
    version: str

    model_config = {"json_schema_extra": {"examples": [{"message": "AdVision Storyboarder API", "version": "1.0.0"}]}}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str

    model_config = {"json_schema_extra": {"examples": [{"status": "healthy"}]}}


class FrameResponse(BaseModel):
    """One storyboard frame."""

    id: int
    shot_type: str
    description: str
    visual_prompt: str
    voiceover: str
    time: str
    image_data: str | None = None
    status: str


class SessionResponse(BaseModel):
    """Storyboard session state."""

    session_id: str
    step: str
    error: str | None = None
    is_script_loading: bool
    is_images_loading: bool
    frames: list[FrameResponse]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "session_id": "550e8400-e29b-41d4-a716-446655440000",
                    "step": "preview",
                    "error": None,
                    "is_script_loading": False,
                    "is_images_loading": True,
                    "frames": [
                        {
                            "id": 1,
                            "shot_type": "Extreme Close Up",
                            "description": "Golden oil pours in slow motion over a spinning gear.",
                            "visual_prompt": "Macro shot of golden synthetic oil, volumetric light, Arri Alexa",
                            "voiceover": "Every engine has a heartbeat.",
                            "time": "2s",
                            "image_data": None,
                            "status": "loading",
                        }
                    ],
                }
            ]
        }
    }


class StoryboardStatusResponse(BaseModel):
    """Configured providers and models."""

    gemini: bool
    script_model: str
    image_model: str
    aspect_ratio: str


# =============================================================================
# Request Models
# =============================================================================


class ScriptRequest(BaseModel):
    """Product brief for storyboard script generation."""

    product_name: str = Field(..., description="Product or brand name")
    description: str = Field(..., description="Product description and key selling points")
    tone: str = Field(default=DEFAULT_TONE, description="Visual tone/style")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_name": "AeroSynth Synthetic Oil",
                    "description": "High-performance di-ester base engine oil. Reduces friction.",
                    "tone": DEFAULT_TONE,
                }
            ]
        }
    }


class RegenerateFrameRequest(BaseModel):
    """Optional prompt override for regenerating one frame."""

    prompt: str | None = Field(
        default=None, description="Visual prompt to use instead of the frame's stored prompt"
    )
