"""
Events produced by the Gemini Live session.

GeminiLiveClient translates raw SDK server messages into these types; the
SessionBridge dispatches on the event class from a single loop.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class SetupComplete:
    pass


@dataclass(frozen=True)
class Transcription:
    """Recognized speech. speaker is "User" for input, "AI" for output transcription."""

    speaker: str
    text: str


@dataclass(frozen=True)
class AudioPart:
    data: bytes


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class ModelTurn:
    parts: List[Union[AudioPart, TextPart]] = field(default_factory=list)


@dataclass(frozen=True)
class ToolCall:
    id: Optional[str]
    name: str
    args: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolCallBatch:
    calls: List[ToolCall] = field(default_factory=list)


@dataclass(frozen=True)
class Interrupted:
    pass


@dataclass(frozen=True)
class UpstreamError:
    message: str


@dataclass(frozen=True)
class UpstreamClosed:
    code: Optional[int] = None
    reason: str = ""


UpstreamEvent = Union[
    SetupComplete,
    Transcription,
    ModelTurn,
    ToolCallBatch,
    Interrupted,
    UpstreamError,
    UpstreamClosed,
]


@dataclass(frozen=True)
class ToolResponse:
    """Result of one ToolCall, returned to Gemini in the same batch order."""

    id: Optional[str]
    name: str
    result: str
