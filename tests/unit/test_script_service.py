"""Unit tests for ScriptService (Gemini storyboard script generation)."""

import json
from unittest.mock import AsyncMock, Mock, patch

import pytest
from google.genai import types

from conftest import make_script_payload
from services.prompts import strip_markdown_code_blocks
from services.script_service import (
    ScriptGenerationError,
    ScriptService,
    build_response_schema,
)


def make_client(text=None, side_effect=None):
    """Mock genai Client whose async generate_content returns `text`."""
    client = Mock()
    client.aio.models.generate_content = AsyncMock(
        return_value=Mock(text=text), side_effect=side_effect
    )
    return client


class TestGenerateScript:
    @pytest.mark.asyncio
    async def test_returns_parsed_script(self, script_payload):
        client = make_client(text=json.dumps(script_payload))
        service = ScriptService(api_key="test_key", client=client)

        script = await service.generate_script("AeroSynth Oil", "Engine oil", "Luxury")

        assert [e.frame_number for e in script.entries] == [1, 2, 3, 4, 5, 6]
        assert script.entries[0].visual_generation_prompt == "prompt 1"

    @pytest.mark.asyncio
    async def test_request_carries_brief_and_schema(self, script_payload):
        client = make_client(text=json.dumps(script_payload))
        service = ScriptService(api_key="test_key", model_name="test-model", client=client)

        await service.generate_script("AeroSynth Oil", "Engine oil", "Luxury")

        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert "Product Name: AeroSynth Oil" in kwargs["contents"]
        assert "Product Description: Engine oil" in kwargs["contents"]
        assert "Desired Tone: Luxury" in kwargs["contents"]
        config = kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert "Call to Action" in str(config.system_instruction)
        assert config.response_schema == build_response_schema()

    @pytest.mark.asyncio
    async def test_sorts_shuffled_entries(self, script_payload):
        script_payload["storyboard"] = script_payload["storyboard"][::-1]
        service = ScriptService(api_key="test_key", client=make_client(text=json.dumps(script_payload)))

        script = await service.generate_script("A", "B", "C")

        assert [e.frame_number for e in script.entries] == [1, 2, 3, 4, 5, 6]

    @pytest.mark.asyncio
    async def test_network_failure(self):
        client = make_client(side_effect=ConnectionError("network down"))
        service = ScriptService(api_key="test_key", client=client)

        with pytest.raises(ScriptGenerationError, match="network down"):
            await service.generate_script("A", "B", "C")

    @pytest.mark.asyncio
    async def test_empty_response(self):
        service = ScriptService(api_key="test_key", client=make_client(text=""))

        with pytest.raises(ScriptGenerationError, match="No script generated"):
            await service.generate_script("A", "B", "C")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        service = ScriptService(api_key="test_key", client=make_client(text="{not json"))

        with pytest.raises(ScriptGenerationError, match="parse"):
            await service.generate_script("A", "B", "C")

    @pytest.mark.asyncio
    async def test_incomplete_storyboard_is_rejected(self):
        """A partial script is never accepted."""
        text = json.dumps(make_script_payload(count=5))
        service = ScriptService(api_key="test_key", client=make_client(text=text))

        with pytest.raises(ScriptGenerationError, match="Expected 6"):
            await service.generate_script("A", "B", "C")


class TestParseScript:
    def test_accepts_fenced_json(self, script_payload):
        service = ScriptService(api_key="test_key", client=make_client())
        text = "```json\n" + json.dumps(script_payload) + "\n```"

        assert len(service.parse_script(text).entries) == 6

    def test_overflowing_frame_number_is_a_script_error(self, script_payload):
        service = ScriptService(api_key="test_key", client=make_client())
        text = json.dumps(script_payload).replace('"frame_number": 4', '"frame_number": 1e400')

        with pytest.raises(ScriptGenerationError, match="frame_number"):
            service.parse_script(text)

    def test_uses_configured_frame_count(self):
        service = ScriptService(api_key="test_key", frame_count=3, client=make_client())

        script = service.parse_script(json.dumps(make_script_payload(count=3)))

        assert len(script.entries) == 3


class TestClientConstruction:
    def test_builds_genai_client_from_key(self):
        with patch("services.script_service.Client") as client_cls:
            service = ScriptService(api_key="test_key")

        client_cls.assert_called_once_with(api_key="test_key")
        assert service.client is client_cls.return_value


class TestResponseSchema:
    def test_requires_all_six_fields(self):
        schema = build_response_schema()
        item = schema.properties["storyboard"].items

        assert schema.type == types.Type.OBJECT
        assert set(item.required) == {
            "frame_number",
            "shot_type",
            "action_description",
            "visual_generation_prompt",
            "voiceover_script",
            "estimated_duration",
        }
        assert item.properties["frame_number"].type == types.Type.INTEGER
        assert item.properties["shot_type"].type == types.Type.STRING


class TestStripMarkdownCodeBlocks:
    def test_plain_text_untouched(self):
        assert strip_markdown_code_blocks('  {"a": 1} ') == '{"a": 1}'

    def test_json_fence(self):
        assert strip_markdown_code_blocks('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_markdown_code_blocks('```\n[1, 2]\n```') == "[1, 2]"
