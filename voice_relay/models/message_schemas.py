"""
Pydantic models for the client WebSocket protocol.

Incoming: init, audio. Outgoing: audio, error, interruption.
All messages are JSON text frames carrying a "type" field.
"""

import base64
import binascii
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class BaseMessage(BaseModel):
    """Base model for all client WebSocket messages."""

    type: str = Field(..., description="Message type identifier")


# Incoming messages
class InitMessage(BaseMessage):
    """Model for the init message that starts a session."""

    type: Literal["init"]
    uuid: str = Field(..., description="Opaque session identifier chosen by the client")

    @field_validator("uuid")
    def validate_uuid(cls, v):
        """Validate that the session identifier is not empty."""
        if not v.strip():
            raise ValueError("Session uuid cannot be empty")
        return v


class AudioMessage(BaseMessage):
    """Model for an audio message: base64 PCM16 mono at 8 kHz."""

    type: Literal["audio"]
    audio: str = Field(..., description="Base64 encoded PCM16 audio")

    def decode(self) -> bytes:
        """Return the raw PCM bytes carried by this message."""
        try:
            return base64.b64decode(self.audio, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 audio payload: {e}") from e


# Outgoing messages
class AudioFrameMessage(BaseMessage):
    """Model for one 20 ms audio frame sent to the client."""

    type: Literal["audio"] = "audio"
    audio: str = Field(..., description="Base64 encoded PCM16 frame")

    @classmethod
    def from_frame(cls, frame: bytes) -> "AudioFrameMessage":
        return cls(audio=base64.b64encode(frame).decode("utf-8"))


class ErrorMessage(BaseMessage):
    """Model for an error reported to the client."""

    type: Literal["error"] = "error"
    message: str = Field(..., description="Human readable error description")


class InterruptionMessage(BaseMessage):
    """Model for the barge-in notification."""

    type: Literal["interruption"] = "interruption"


OutgoingMessage = AudioFrameMessage | ErrorMessage | InterruptionMessage
