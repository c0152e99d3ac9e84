"""Shared pytest fixtures for storyboarder tests."""

import asyncio
import base64
import sys
from pathlib import Path
from typing import Dict, List
from unittest.mock import AsyncMock, Mock

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from models.image_generation import GeneratedImage
from models.storyboard import ScriptResult
from services.image_generation_service import ImageGenerationServiceError


class FakeImageService:
    """Stand-in for ImageGenerationService with controllable timing and failures.

    - `gates[prompt]`: request for that prompt waits until the event is set
    - `fail_prompts`: prompts whose request raises ImageGenerationServiceError
    - `crash_prompts`: prompts whose request raises a plain RuntimeError
    Every successful call returns a distinct payload.
    """

    def __init__(self):
        self.model_name = "test-image-model"
        self.calls: List[tuple] = []
        self.gates: Dict[str, asyncio.Event] = {}
        self.fail_prompts: set = set()
        self.crash_prompts: set = set()
        self.counter = 0

    def is_configured(self) -> bool:
        return True

    @staticmethod
    def payload_for(prompt: str, n: int) -> str:
        return base64.b64encode(f"{prompt}#{n}".encode()).decode()

    async def generate_image(self, prompt: str, aspect_ratio: str = "16:9") -> GeneratedImage:
        self.calls.append((prompt, aspect_ratio))
        gate = self.gates.get(prompt)
        if gate is not None:
            await gate.wait()
        else:
            await asyncio.sleep(0)

        if prompt in self.fail_prompts:
            raise ImageGenerationServiceError("No image data returned in response", kind="no_image")
        if prompt in self.crash_prompts:
            raise RuntimeError("connection reset")

        self.counter += 1
        return GeneratedImage(data=self.payload_for(prompt, self.counter), mime_type="image/png")

    async def close(self) -> None:
        pass


def make_script_payload(prefix: str = "prompt", count: int = 6) -> Dict:
    """Build a well-formed script model response."""
    return {
        "storyboard": [
            {
                "frame_number": i,
                "shot_type": f"Shot {i}",
                "action_description": f"Action {i}",
                "visual_generation_prompt": f"{prefix} {i}",
                "voiceover_script": f"Voiceover {i}",
                "estimated_duration": f"{i}s",
            }
            for i in range(1, count + 1)
        ]
    }


@pytest.fixture
def script_payload() -> Dict:
    """Six well-formed storyboard entries for "AeroSynth Oil"."""
    return make_script_payload()


@pytest.fixture
def fake_image_service() -> FakeImageService:
    return FakeImageService()


@pytest.fixture
def mock_script_service(script_payload):
    """Mock ScriptService returning the sample script."""
    mock = Mock()
    mock.api_key = "test_gemini_key"
    mock.model_name = "test-script-model"
    mock.generate_script = AsyncMock(return_value=ScriptResult.from_dict(script_payload))
    return mock


@pytest.fixture
def sample_config() -> Dict:
    """Sample configuration for testing."""
    return {
        "gemini_api_key": "test_gemini_key",
        "script_model": "gemini-3-pro-preview",
        "image_model": "gemini-2.5-flash-image",
        "default_tone": "Cinematic, Professional, High-End",
        "default_aspect_ratio": "16:9",
        "frame_count": 6,
        "image_request_timeout": 120.0,
        "log_level": "INFO",
        "log_json": False,
        "cors_origins": ["http://localhost:5173"],
    }
