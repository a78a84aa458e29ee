"""
Unit tests for the message schemas.

These tests validate that the Pydantic models correctly validate client
messages and serialize outgoing ones in the wire format clients expect.
"""

import base64
import json

import pytest
from pydantic import ValidationError

from voice_relay.models.message_schemas import (
    AudioFrameMessage,
    AudioMessage,
    BaseMessage,
    ErrorMessage,
    InitMessage,
    InterruptionMessage,
)


class TestBaseMessage:
    """Tests for the BaseMessage class."""

    def test_valid_base_message(self):
        """Test that a valid base message can be created."""
        message = BaseMessage(type="init")
        assert message.type == "init"

    def test_missing_type(self):
        """Test that a message without a type raises a validation error."""
        with pytest.raises(ValidationError):
            BaseMessage()


class TestInitMessage:
    """Tests for the init message."""

    def test_valid_init(self):
        message = InitMessage(type="init", uuid="abc")
        assert message.uuid == "abc"

    def test_missing_uuid(self):
        with pytest.raises(ValidationError):
            InitMessage(type="init")

    def test_blank_uuid(self):
        """Test that a whitespace-only uuid is rejected."""
        with pytest.raises(ValidationError):
            InitMessage(type="init", uuid="  ")

    def test_wrong_type(self):
        with pytest.raises(ValidationError):
            InitMessage(type="audio", uuid="abc")


class TestAudioMessage:
    """Tests for the incoming audio message."""

    def test_decode(self):
        pcm = bytes(range(10))
        message = AudioMessage(type="audio", audio=base64.b64encode(pcm).decode())
        assert message.decode() == pcm

    def test_decode_empty(self):
        assert AudioMessage(type="audio", audio="").decode() == b""

    def test_decode_invalid_base64(self):
        """Test that a payload that is not base64 raises ValueError."""
        message = AudioMessage(type="audio", audio="@@not-base64@@")
        with pytest.raises(ValueError, match="Invalid base64"):
            message.decode()

    def test_missing_audio(self):
        with pytest.raises(ValidationError):
            AudioMessage(type="audio")


class TestOutgoingMessages:
    """Tests for messages sent to the client."""

    def test_audio_frame_from_frame(self):
        frame = bytes(320)
        message = AudioFrameMessage.from_frame(frame)
        payload = json.loads(message.model_dump_json())

        assert payload["type"] == "audio"
        assert base64.b64decode(payload["audio"]) == frame

    def test_error_message(self):
        payload = json.loads(ErrorMessage(message="Failed to initialize Gemini connection").model_dump_json())
        assert payload == {"type": "error", "message": "Failed to initialize Gemini connection"}

    def test_interruption_message(self):
        assert json.loads(InterruptionMessage().model_dump_json()) == {"type": "interruption"}
