"""
Models module for data structures and state management in the voice relay.

Key components:
- message_schemas: Pydantic models for the client WebSocket protocol
  (init, audio, error, interruption).
- upstream_events: Tagged union of events produced by the Gemini Live session.
- transcript: Append-only per-session conversation transcript.
- session_registry: Registry of live sessions keyed by client session id.

Usage examples:
```python
from voice_relay.models.message_schemas import InitMessage, ErrorMessage

init = InitMessage(**{"type": "init", "uuid": "abc"})
await websocket.send_text(ErrorMessage(message="boom").model_dump_json())
```
"""

from voice_relay.models.message_schemas import (
    AudioFrameMessage,
    AudioMessage,
    BaseMessage,
    ErrorMessage,
    InitMessage,
    InterruptionMessage,
    OutgoingMessage,
)
from voice_relay.models.session_registry import SessionRegistry
from voice_relay.models.transcript import Transcript, TranscriptEntry
from voice_relay.models.upstream_events import (
    AudioPart,
    Interrupted,
    ModelTurn,
    SetupComplete,
    TextPart,
    ToolCall,
    ToolCallBatch,
    ToolResponse,
    Transcription,
    UpstreamClosed,
    UpstreamError,
    UpstreamEvent,
)
