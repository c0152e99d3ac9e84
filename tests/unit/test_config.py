"""Unit tests for configuration loading and validation."""

from utils.config import DEFAULT_TONE, load_config, validate_config


class TestLoadConfig:
    def test_defaults(self, monkeypatch):
        for name in (
            "SCRIPT_MODEL",
            "IMAGE_MODEL",
            "DEFAULT_TONE",
            "DEFAULT_ASPECT_RATIO",
            "STORYBOARD_FRAME_COUNT",
            "CORS_ORIGINS",
            "LOG_JSON",
        ):
            monkeypatch.delenv(name, raising=False)

        config = load_config()

        assert config["script_model"] == "gemini-3-pro-preview"
        assert config["image_model"] == "gemini-2.5-flash-image"
        assert config["default_tone"] == DEFAULT_TONE
        assert config["default_aspect_ratio"] == "16:9"
        assert config["frame_count"] == 6
        assert config["log_json"] is False
        assert "http://localhost:5173" in config["cors_origins"]

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        monkeypatch.setenv("STORYBOARD_FRAME_COUNT", "4")
        monkeypatch.setenv("LOG_JSON", "TRUE")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")

        config = load_config()

        assert config["gemini_api_key"] == "from-env"
        assert config["frame_count"] == 4
        assert config["log_json"] is True
        assert config["cors_origins"] == ["https://a.example", "https://b.example"]


class TestValidateConfig:
    def test_valid_config(self, sample_config):
        assert validate_config(sample_config) == []

    def test_missing_api_key(self, sample_config):
        sample_config["gemini_api_key"] = ""
        assert "GEMINI_API_KEY is required" in validate_config(sample_config)

    def test_bad_aspect_ratio(self, sample_config):
        sample_config["default_aspect_ratio"] = "2:1"
        errors = validate_config(sample_config)
        assert any("DEFAULT_ASPECT_RATIO" in e for e in errors)

    def test_bad_frame_count(self, sample_config):
        sample_config["frame_count"] = 0
        errors = validate_config(sample_config)
        assert any("STORYBOARD_FRAME_COUNT" in e for e in errors)
