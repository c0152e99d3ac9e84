"""Service singletons and dependency injection for the storyboard API."""

from services.image_generation_service import ImageGenerationService
from services.script_service import ScriptService
from services.storyboard_service import StoryboardService
from utils.config import load_config

# Service singletons
_script_service: ScriptService | None = None
_image_gen_service: ImageGenerationService | None = None
_storyboard_service: StoryboardService | None = None


def get_script_service() -> ScriptService:
    """Get or create the script service instance."""
    global _script_service
    if _script_service is None:
        config = load_config()
        _script_service = ScriptService(
            api_key=config.get("gemini_api_key", ""),
            model_name=config.get("script_model", "gemini-3-pro-preview"),
            frame_count=config.get("frame_count", 6),
        )
    return _script_service


def get_image_gen_service() -> ImageGenerationService:
    """Get or create the image generation service instance."""
    global _image_gen_service
    if _image_gen_service is None:
        config = load_config()
        _image_gen_service = ImageGenerationService(
            api_key=config.get("gemini_api_key", ""),
            model_name=config.get("image_model", "gemini-2.5-flash-image"),
            timeout=config.get("image_request_timeout", 120.0),
        )
    return _image_gen_service


def get_storyboard_service() -> StoryboardService:
    """Get or create the storyboard service instance."""
    global _storyboard_service
    if _storyboard_service is None:
        config = load_config()
        _storyboard_service = StoryboardService(
            script_service=get_script_service(),
            image_gen_service=get_image_gen_service(),
            aspect_ratio=config.get("default_aspect_ratio", "16:9"),
        )
    return _storyboard_service


async def close_services() -> None:
    """Release HTTP clients held by the singletons."""
    global _script_service, _image_gen_service, _storyboard_service
    if _image_gen_service is not None:
        await _image_gen_service.close()
    _script_service = None
    _image_gen_service = None
    _storyboard_service = None
