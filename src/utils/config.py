"""Configuration loading and validation for the storyboarder."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Get the project root directory (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_TONE = "Cinematic, Professional, High-End"
SUPPORTED_ASPECT_RATIOS = ("16:9", "9:16", "1:1", "4:3", "3:4")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def load_config() -> dict:
    """Load configuration from environment variables."""
    config = {
        # Required API key
        "gemini_api_key": os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY", ""),
        # Model configurations
        "script_model": os.getenv("SCRIPT_MODEL", "gemini-3-pro-preview"),
        "image_model": os.getenv("IMAGE_MODEL", "gemini-2.5-flash-image"),
        # Storyboard defaults
        "default_tone": os.getenv("DEFAULT_TONE", DEFAULT_TONE),
        "default_aspect_ratio": os.getenv("DEFAULT_ASPECT_RATIO", "16:9"),
        "frame_count": int(os.getenv("STORYBOARD_FRAME_COUNT", "6")),
        # Image requests can take a while
        "image_request_timeout": float(os.getenv("IMAGE_REQUEST_TIMEOUT", "120")),
        # Logging
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_json": _env_bool("LOG_JSON", "false"),
        # Comma-separated list of allowed front-end origins
        "cors_origins": [
            origin.strip()
            for origin in os.getenv(
                "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
            ).split(",")
            if origin.strip()
        ],
    }

    return config


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return list of errors."""
    errors = []

    if not config.get("gemini_api_key"):
        errors.append("GEMINI_API_KEY is required")

    if config.get("default_aspect_ratio") not in SUPPORTED_ASPECT_RATIOS:
        errors.append(
            f"DEFAULT_ASPECT_RATIO must be one of {', '.join(SUPPORTED_ASPECT_RATIOS)}"
        )

    if config.get("frame_count", 0) < 1:
        errors.append("STORYBOARD_FRAME_COUNT must be at least 1")

    if config.get("image_request_timeout", 0) <= 0:
        errors.append("IMAGE_REQUEST_TIMEOUT must be positive")

    if not str(config.get("default_tone", "")).strip():
        errors.append("DEFAULT_TONE must not be empty")

    return errors
