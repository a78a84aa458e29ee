import pytest
from pydantic import ValidationError

from voice_relay.config.constants import DEFAULT_API_VERSION, DEFAULT_GEMINI_MODEL
from voice_relay.config.settings import Settings


def test_defaults():
    settings = Settings()

    assert settings.gemini_api_key == ""
    assert settings.gemini_model == DEFAULT_GEMINI_MODEL
    assert settings.gemini_api_version == DEFAULT_API_VERSION
    assert settings.instructions is None
    assert settings.input_transcription is True
    assert settings.output_transcription is False
    assert settings.port == 6037
    assert settings.save_audio_chunks is False
    assert settings.bot_name == "gemini_bot"
    assert settings.tool_modules == []


def test_reads_environment(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "secret")
    clean_env.setenv("GEMINI_MODEL", "gemini-2.0-flash-live-001")
    clean_env.setenv("GEMINI_INSTRUCTIONS", "Be brief.")
    clean_env.setenv("GEMINI_INPUT_TRANSCRIPTION", "false")
    clean_env.setenv("GEMINI_OUTPUT_TRANSCRIPTION", "1")
    clean_env.setenv("PORT", "7000")
    clean_env.setenv("SAVE_AUDIO_CHUNKS", "yes")
    clean_env.setenv("TOOL_MODULES", "acme.tools, acme.calendar ,")

    settings = Settings()

    assert settings.gemini_api_key == "secret"
    assert settings.gemini_model == "gemini-2.0-flash-live-001"
    assert settings.instructions == "Be brief."
    assert settings.input_transcription is False
    assert settings.output_transcription is True
    assert settings.port == 7000
    assert settings.save_audio_chunks is True
    assert settings.tool_modules == ["acme.tools", "acme.calendar"]


def test_empty_values_use_defaults(clean_env):
    clean_env.setenv("GEMINI_MODEL", "")
    clean_env.setenv("GEMINI_INSTRUCTIONS", "")

    settings = Settings()

    assert settings.gemini_model == DEFAULT_GEMINI_MODEL
    assert settings.instructions is None


def test_field_names_override_environment(clean_env):
    clean_env.setenv("BOT_NAME", "from_env")

    settings = Settings(bot_name="explicit", tool_modules=["acme.tools"])

    assert settings.bot_name == "explicit"
    assert settings.tool_modules == ["acme.tools"]


def test_invalid_port_is_rejected(clean_env):
    clean_env.setenv("PORT", "not-a-port")

    with pytest.raises(ValidationError):
        Settings()
