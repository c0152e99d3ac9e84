"""Storyboard script generation via Gemini (Google GenAI SDK)."""

import json
import logging

from google.genai import Client, types

from models.storyboard import SCRIPT_FIELDS, ScriptResult
from services.prompts import (
    PROMPT_VERSIONS,
    STORYBOARD_DIRECTOR_V1,
    STORYBOARD_REQUEST_V1,
    strip_markdown_code_blocks,
)

logger = logging.getLogger(__name__)


class ScriptGenerationError(Exception):
    """The storyboard script could not be produced. No partial script is returned."""

    pass


def build_response_schema() -> types.Schema:
    """JSON schema the script model must answer with."""
    frame_properties = {
        name: types.Schema(
            type=types.Type.INTEGER if name == "frame_number" else types.Type.STRING
        )
        for name in SCRIPT_FIELDS
    }
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "storyboard": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties=frame_properties,
                    required=list(SCRIPT_FIELDS),
                ),
            ),
        },
        required=["storyboard"],
    )


class ScriptService:
    """Turns a product brief into a validated storyboard script."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-3-pro-preview",
        frame_count: int = 6,
        client: Client | None = None,
    ):
        """Initialize Google GenAI client.

        Args:
            api_key: Google GenAI API key
            model_name: Gemini text model used for script reasoning
            frame_count: Number of frames every script must contain
            client: Pre-built client (tests inject a mock here)
        """
        self.api_key = api_key
        self.model_name = model_name
        self.frame_count = frame_count
        self.client = client or Client(api_key=api_key)

        logger.info(f"Initialized script service with model: {model_name}")

    async def generate_script(
        self,
        product_name: str,
        description: str,
        tone: str,
    ) -> ScriptResult:
        """Generate the storyboard script for a product.

        Args:
            product_name: Product or brand name
            description: Product description and key selling points
            tone: Desired visual tone/style

        Returns:
            ScriptResult with exactly `frame_count` entries ordered by frame number

        Raises:
            ScriptGenerationError: On any network, empty-content, or parse failure
        """
        logger.info(
            f"Generating storyboard script: product='{product_name[:60]}', "
            f"tone='{tone[:40]}', prompt={PROMPT_VERSIONS['generate_storyboard_script']}"
        )

        prompt = STORYBOARD_REQUEST_V1.format(
            product_name=product_name,
            description=description,
            tone=tone,
            frame_count=self.frame_count,
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=STORYBOARD_DIRECTOR_V1.format(
                        frame_count=self.frame_count
                    ),
                    response_mime_type="application/json",
                    response_schema=build_response_schema(),
                ),
            )
        except Exception as e:
            logger.error(f"Error generating script: {e}")
            raise ScriptGenerationError(f"Script generation failed: {e}") from e

        if not response.text:
            logger.error("AI response is empty for storyboard script")
            raise ScriptGenerationError("No script generated")

        return self.parse_script(response.text)

    def parse_script(self, text: str) -> ScriptResult:
        """Parse the model's JSON text into a ScriptResult.

        Raises:
            ScriptGenerationError: If the text is not a complete, valid storyboard
        """
        try:
            data = json.loads(strip_markdown_code_blocks(text))
        except json.JSONDecodeError as e:
            logger.error(f"JSON parsing failed for storyboard script: {e}")
            logger.debug(f"Raw response: {text[:500]}")
            raise ScriptGenerationError(f"Failed to parse script JSON: {e}") from e

        try:
            script = ScriptResult.from_dict(data, expected_frames=self.frame_count)
        except ValueError as e:
            logger.error(f"Invalid storyboard script: {e}")
            raise ScriptGenerationError(f"Invalid storyboard script: {e}") from e

        logger.info(f"Script generated: {len(script.entries)} frames")
        return script
