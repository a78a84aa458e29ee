"""
Runtime settings loaded from environment variables.

The process loads a `.env` file (if present) before reading the environment,
see `voice_relay.main`. Empty variables count as unset.
"""

from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from voice_relay.config.constants import DEFAULT_API_VERSION, DEFAULT_GEMINI_MODEL


class Settings(BaseSettings):
    """Configuration for the relay server and each Gemini session."""

    gemini_api_key: str = Field("", validation_alias="GEMINI_API_KEY")
    gemini_model: str = Field(DEFAULT_GEMINI_MODEL, validation_alias="GEMINI_MODEL")
    gemini_api_version: str = Field(DEFAULT_API_VERSION, validation_alias="GEMINI_API_VERSION")

    # System instruction sources, first configured one wins
    instructions: Optional[str] = Field(None, validation_alias="GEMINI_INSTRUCTIONS")
    url_instructions: Optional[str] = Field(None, validation_alias="GEMINI_URL_INSTRUCTIONS")
    file_instructions: Optional[str] = Field(None, validation_alias="GEMINI_FILE_INSTRUCTIONS")

    input_transcription: bool = Field(True, validation_alias="GEMINI_INPUT_TRANSCRIPTION")
    output_transcription: bool = Field(False, validation_alias="GEMINI_OUTPUT_TRANSCRIPTION")

    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(6037, validation_alias="PORT")

    save_audio_chunks: bool = Field(False, validation_alias="SAVE_AUDIO_CHUNKS")
    audio_save_dir: str = Field("./saved_audios", validation_alias="AUDIO_SAVE_DIR")
    bot_name: str = Field("gemini_bot", validation_alias="BOT_NAME")
    transcript_dir: str = Field("logs", validation_alias="TRANSCRIPT_DIR")

    ami_url: str = Field("http://127.0.0.1:6006", validation_alias="AMI_URL")
    # Comma-separated module names, e.g. "acme.tools,acme.calendar"
    tool_modules: Annotated[List[str], NoDecode] = Field(
        default_factory=list, validation_alias="TOOL_MODULES"
    )

    model_config = SettingsConfigDict(
        populate_by_name=True,
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("tool_modules", mode="before")
    @classmethod
    def split_tool_modules(cls, v):
        if isinstance(v, str):
            return [name.strip() for name in v.split(",") if name.strip()]
        return v
