"""Image Generation Service - renders storyboard frames with the Gemini image model."""

import logging
import time

import httpx

from models.image_generation import AspectRatio, GeneratedImage

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


class ImageGenerationServiceError(Exception):
    """Error from image generation service.

    `kind` classifies the failure for logging only: ``http_status``,
    ``network``, ``no_image`` or ``unexpected``.
    """

    def __init__(self, message: str, kind: str = "unexpected"):
        super().__init__(message)
        self.kind = kind


def extract_first_image(result_data: dict) -> GeneratedImage | None:
    """Return the first inline image in a generateContent response, if any."""
    candidates = result_data.get("candidates") or []
    if not candidates:
        return None

    parts = (candidates[0].get("content") or {}).get("parts") or []
    for part in parts:
        inline_data = part.get("inlineData") or part.get("inline_data") or {}
        if inline_data.get("data"):
            mime_type = inline_data.get("mimeType") or inline_data.get("mime_type") or "image/png"
            return GeneratedImage(data=inline_data["data"], mime_type=mime_type)
    return None


class ImageGenerationService:
    """Renders one image per visual prompt using the Gemini REST API."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash-image",
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the image generation service.

        Args:
            api_key: Gemini API key.
            model_name: Gemini image model.
            timeout: Transport timeout per request in seconds.
            client: Pre-built HTTP client (tests inject a mock transport here).
        """
        self.api_key = api_key
        self.model_name = model_name
        # Long timeout for image generation (can take a while)
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def is_configured(self) -> bool:
        """Check if Gemini API key is configured."""
        return bool(self.api_key)

    async def generate_image(
        self,
        prompt: str,
        aspect_ratio: str = AspectRatio.WIDESCREEN.value,
    ) -> GeneratedImage:
        """Generate a single image for a visual prompt.

        Args:
            prompt: The visual generation prompt
            aspect_ratio: One of the AspectRatio values

        Returns:
            The first image found in the response

        Raises:
            ImageGenerationServiceError: If the request fails or no image comes back
        """
        try:
            ratio = AspectRatio(aspect_ratio)
        except ValueError:
            raise ImageGenerationServiceError(
                f"Unsupported aspect ratio: {aspect_ratio}", kind="unexpected"
            )

        if not self.is_configured():
            raise ImageGenerationServiceError(
                "GEMINI_API_KEY not configured. Set it in your .env file."
            )

        url = f"{GEMINI_API_BASE}/models/{self.model_name}:generateContent"

        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseModalities": ["IMAGE"],
                "imageConfig": {"aspectRatio": ratio.value},
            },
        }

        logger.info(f"Generating image with {self.model_name} (aspect={ratio.value})")

        start_time = time.time()

        try:
            response = await self.client.post(url, headers=headers, json=payload)
            response.raise_for_status()
            result_data = response.json()
        except httpx.HTTPStatusError as e:
            error_detail = ""
            try:
                error_data = e.response.json()
                error_detail = error_data.get("error", {}).get("message", str(e))
            except ValueError:
                error_detail = e.response.text or str(e)
            raise ImageGenerationServiceError(
                f"Gemini API error: {error_detail}", kind="http_status"
            ) from e
        except httpx.RequestError as e:
            raise ImageGenerationServiceError(
                f"Gemini request failed: {e}", kind="network"
            ) from e
        except ValueError as e:
            raise ImageGenerationServiceError(
                f"Gemini returned invalid JSON: {e}", kind="no_image"
            ) from e

        image = extract_first_image(result_data)
        if image is None:
            raise ImageGenerationServiceError(
                "No image data returned in response", kind="no_image"
            )

        generation_time_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Gemini generated image ({image.mime_type}) in {generation_time_ms}ms")
        return image

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
