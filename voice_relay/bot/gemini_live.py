"""
Gemini Live API client for one relay session.

Wraps the google-genai SDK live session and translates each server message into
UpstreamEvent values, so the SessionBridge never touches SDK types.
"""

import base64
import logging
from typing import Any, AsyncIterator, List, Optional

from google import genai
from google.genai import types
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK

from voice_relay.config.constants import (
    LOGGER_NAME,
    SPEAKER_AI,
    SPEAKER_USER,
    UPSTREAM_INPUT_MIME_TYPE,
)
from voice_relay.config.settings import Settings
from voice_relay.exceptions import TransientUpstreamError
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

logger = logging.getLogger(LOGGER_NAME)


def build_live_config(settings: Settings, system_instruction: str,
                      tools: Optional[List[types.Tool]] = None) -> types.LiveConnectConfig:
    """Build the LiveConnectConfig for a native-audio session."""
    kwargs: dict = {
        "response_modalities": [types.Modality.AUDIO],
        "system_instruction": types.Content(
            parts=[types.Part(text=system_instruction)],
            role="user",
        ),
    }
    if tools:
        kwargs["tools"] = tools
    if settings.input_transcription:
        kwargs["input_audio_transcription"] = types.AudioTranscriptionConfig()
    if settings.output_transcription:
        kwargs["output_audio_transcription"] = types.AudioTranscriptionConfig()
    return types.LiveConnectConfig(**kwargs)


def _inline_audio(part: Any) -> Optional[bytes]:
    inline_data = getattr(part, "inline_data", None)
    data = getattr(inline_data, "data", None) if inline_data else None
    if not data:
        return None
    if isinstance(data, str):
        return base64.b64decode(data)
    return bytes(data)


def translate_message(message: Any) -> List[UpstreamEvent]:
    """
    Convert one LiveServerMessage into zero or more events, in processing order.

    Args:
        message: A google.genai LiveServerMessage (or any object with the same
            attribute layout)

    Returns:
        The events carried by the message.
    """
    events: List[UpstreamEvent] = []

    if getattr(message, "setup_complete", None) is not None:
        events.append(SetupComplete())

    go_away = getattr(message, "go_away", None)
    if go_away is not None:
        logger.warning(f"Gemini sent GoAway, connection ending in {getattr(go_away, 'time_left', 'unknown')}")

    tool_call = getattr(message, "tool_call", None)
    function_calls = getattr(tool_call, "function_calls", None) if tool_call else None
    if function_calls:
        events.append(ToolCallBatch(calls=[
            ToolCall(id=fc.id, name=fc.name, args=dict(fc.args) if fc.args else {})
            for fc in function_calls
        ]))

    server_content = getattr(message, "server_content", None)
    if server_content is None:
        return events

    input_tx = getattr(server_content, "input_transcription", None)
    if input_tx and getattr(input_tx, "text", None):
        events.append(Transcription(speaker=SPEAKER_USER, text=input_tx.text))

    model_turn = getattr(server_content, "model_turn", None)
    if model_turn and model_turn.parts:
        parts = []
        for part in model_turn.parts:
            audio = _inline_audio(part)
            if audio:
                parts.append(AudioPart(data=audio))
            if getattr(part, "text", None):
                parts.append(TextPart(text=part.text))
        if parts:
            events.append(ModelTurn(parts=parts))

    output_tx = getattr(server_content, "output_transcription", None)
    if output_tx and getattr(output_tx, "text", None):
        events.append(Transcription(speaker=SPEAKER_AI, text=output_tx.text))

    if getattr(server_content, "interrupted", False):
        events.append(Interrupted())

    return events


def _close_code(exc: ConnectionClosed) -> Optional[int]:
    frame = exc.rcvd or exc.sent
    return frame.code if frame else None


class GeminiLiveClient:
    """
    Async client for a single Gemini Live session.

    Usage::

        client = GeminiLiveClient("abc", settings)
        await client.connect("You are a helpful assistant.", tools)
        await client.send_audio(pcm_16k)
        async for event in client.events():
            ...
        await client.close()
    """

    def __init__(self, session_id: str, settings: Settings):
        self.session_id = session_id
        self.settings = settings
        self._genai_client: Optional[genai.Client] = None
        self._context = None
        self._session = None
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self, system_instruction: str,
                      tools: Optional[List[types.Tool]] = None) -> None:
        """
        Open the live session.

        Raises:
            TransientUpstreamError: If the API key is missing or the connection fails.
        """
        if self._connected:
            logger.warning(f"Session {self.session_id} already connected, skipping")
            return
        if not self.settings.gemini_api_key:
            raise TransientUpstreamError(self.session_id, "GEMINI_API_KEY is not set")

        logger.info(f"Gemini session model: {self.settings.gemini_model}")
        try:
            live_config = build_live_config(self.settings, system_instruction, tools)
            logger.debug(f"Gemini session config: {live_config}")
            self._genai_client = genai.Client(
                api_key=self.settings.gemini_api_key,
                http_options={"api_version": self.settings.gemini_api_version},
            )
            self._context = self._genai_client.aio.live.connect(
                model=self.settings.gemini_model,
                config=live_config,
            )
            self._session = await self._context.__aenter__()
            self._connected = True
            logger.info(f"Gemini session {self.session_id} connected")
        except Exception as e:
            self._context = None
            self._session = None
            self._connected = False
            raise TransientUpstreamError(self.session_id, f"Failed to connect: {e}") from e

    async def send_audio(self, pcm: bytes) -> None:
        """Push 16 kHz PCM16 mono audio into the realtime input stream."""
        self._ensure_connected()
        try:
            await self._session.send_realtime_input(
                audio=types.Blob(data=pcm, mime_type=UPSTREAM_INPUT_MIME_TYPE)
            )
        except Exception as e:
            raise TransientUpstreamError(self.session_id, f"Failed to send audio: {e}") from e

    async def send_text(self, text: str) -> None:
        """Send a plain text nudge through the realtime input stream."""
        self._ensure_connected()
        try:
            await self._session.send_realtime_input(text=text)
        except Exception as e:
            raise TransientUpstreamError(self.session_id, f"Failed to send text: {e}") from e

    async def send_tool_responses(self, responses: List[ToolResponse]) -> None:
        """Send the results of one tool-call batch, in call order."""
        self._ensure_connected()
        function_responses = [
            types.FunctionResponse(
                id=response.id,
                name=response.name,
                response={"result": response.result},
            )
            for response in responses
        ]
        try:
            await self._session.send_tool_response(function_responses=function_responses)
        except Exception as e:
            raise TransientUpstreamError(self.session_id, f"Failed to send tool response: {e}") from e
        logger.info(f"Session {self.session_id} sent {len(function_responses)} tool response(s)")

    async def events(self) -> AsyncIterator[UpstreamEvent]:
        """
        Yield events until the session ends.

        The stream always finishes with either UpstreamClosed or UpstreamError.
        """
        self._ensure_connected()
        try:
            while self._connected:
                received = 0
                # receive() yields a single model turn, then stops
                async for message in self._session.receive():
                    received += 1
                    for event in translate_message(message):
                        yield event
                if not received:
                    break
            yield UpstreamClosed(reason="stream ended")
        except ConnectionClosedOK as e:
            logger.info(f"Gemini session {self.session_id} closed: {e}")
            yield UpstreamClosed(code=_close_code(e), reason=str(e))
        except ConnectionClosed as e:
            logger.error(f"Gemini connection lost for session {self.session_id}: {e}")
            yield UpstreamError(message=str(e) or "Gemini connection lost")
        except Exception as e:
            logger.error(f"Gemini session error for {self.session_id}: {e}", exc_info=True)
            yield UpstreamError(message=str(e) or e.__class__.__name__)

    async def close(self) -> None:
        """Close the live session. Safe to call more than once."""
        context = self._context
        self._context = None
        self._session = None
        self._connected = False
        if context is None:
            return
        try:
            await context.__aexit__(None, None, None)
        except Exception as e:
            logger.warning(f"Error closing Gemini session {self.session_id}: {e}")
        logger.info(f"Gemini session {self.session_id} closed")

    def _ensure_connected(self) -> None:
        if not self._connected or self._session is None:
            raise TransientUpstreamError(self.session_id, "Session is not connected")
