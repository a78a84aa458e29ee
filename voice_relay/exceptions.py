"""Voice relay exceptions."""


class VoiceRelayError(Exception):
    """Base exception for all voice relay operations."""


class TransientUpstreamError(VoiceRelayError):
    """Raised when the Gemini Live connection fails or drops.

    Never retried: the owning session is closed instead.
    """

    def __init__(self, session_id: str, message: str) -> None:
        self.session_id = session_id
        super().__init__(f"[gemini:{session_id}] {message}")


class ProtocolError(VoiceRelayError):
    """Raised for a malformed client message. The message is dropped."""


class ResourceInitError(VoiceRelayError):
    """Raised when the audio conversion pipeline cannot be set up."""


class ToolExecutionError(VoiceRelayError):
    """Raised when a tool handler fails."""

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"[tool:{tool_name}] {message}")
