"""Unit tests for the structlog processors."""

from utils.logging import (
    add_session_id,
    current_session_id,
    set_session_context,
    shorten_image_data,
)


class TestAddSessionId:
    def test_tags_event_with_active_session(self):
        token = current_session_id.set(None)
        try:
            set_session_context("abc-123")
            event = add_session_id(None, "info", {"event": "frame settled"})
        finally:
            current_session_id.reset(token)

        assert event["session_id"] == "abc-123"

    def test_no_session(self):
        token = current_session_id.set(None)
        try:
            event = add_session_id(None, "info", {"event": "startup"})
        finally:
            current_session_id.reset(token)

        assert "session_id" not in event


class TestShortenImageData:
    def test_data_uri_inside_message_is_shortened(self):
        payload = "A" * 5000
        message = f"Frame 3 settled: {{'image_data': 'data:image/png;base64,{payload}'}}"

        event = shorten_image_data(None, "debug", {"event": message})

        assert event["event"].startswith("Frame 3 settled: {'image_data': 'data:image/png;base64,")
        assert "(5000 chars)" in event["event"]
        assert event["event"].endswith("'}")
        assert len(event["event"]) < 120

    def test_bare_data_uri_value_is_shortened(self):
        event = shorten_image_data(None, "debug", {"image_data": "data:image/jpeg;base64," + "B" * 300})

        assert event["image_data"] == "data:image/jpeg;base64," + "B" * 16 + "... (300 chars)"

    def test_short_payloads_and_other_values_untouched(self):
        event = shorten_image_data(
            None, "info", {"event": "data: loaded data:image/png;base64,QUJD", "frame_id": 3}
        )

        assert event == {"event": "data: loaded data:image/png;base64,QUJD", "frame_id": 3}
