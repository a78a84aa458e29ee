"""
Per-session bridge between a client WebSocket and a Gemini Live session.

A SessionBridge owns everything belonging to one call: the client connection,
the upstream client, both audio pipelines, the transcript and the audio archive.
Upstream events are consumed by a single task and dispatched by event type, so
audio frames reach the client in the order Gemini produced them.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional

from fastapi import WebSocket

from voice_relay.audio.pipeline import ClientAudioPipeline, UpstreamAudioPipeline
from voice_relay.bot.gemini_live import GeminiLiveClient
from voice_relay.config.constants import (
    CONNECT_FAILED_MESSAGE,
    LOGGER_NAME,
    SPEAKER_AI,
    START_CONVERSATION_PROMPT,
)
from voice_relay.config.settings import Settings
from voice_relay.exceptions import TransientUpstreamError
from voice_relay.models.message_schemas import (
    AudioFrameMessage,
    ErrorMessage,
    InterruptionMessage,
    OutgoingMessage,
)
from voice_relay.models.session_registry import SessionRegistry
from voice_relay.models.transcript import Transcript
from voice_relay.models.upstream_events import (
    AudioPart,
    Interrupted,
    ModelTurn,
    SetupComplete,
    TextPart,
    ToolCallBatch,
    ToolResponse,
    Transcription,
    UpstreamClosed,
    UpstreamError,
    UpstreamEvent,
)
from voice_relay.services.instructions import resolve_system_instruction
from voice_relay.services.persistence import AudioArchive, save_transcript
from voice_relay.tools.registry import ToolContext, ToolRegistry

logger = logging.getLogger(LOGGER_NAME)

UpstreamFactory = Callable[[str, Settings], GeminiLiveClient]


class SessionState(str, Enum):
    """Lifecycle states of a relay session."""

    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    ACTIVE = "active"
    CLOSING = "closing"
    CLOSED = "closed"


class SessionBridge:
    """
    Bridge between one client connection and one Gemini Live session.

    This class handles:
    - The session lifecycle (init, connect, teardown)
    - Converting client audio to Gemini's input format and back
    - Dispatching Gemini events (audio, transcripts, tool calls, barge-in)
    """

    def __init__(self, websocket: WebSocket, settings: Settings, tools: ToolRegistry,
                 registry: SessionRegistry, upstream_factory: UpstreamFactory = GeminiLiveClient):
        self.websocket = websocket
        self.settings = settings
        self.tools = tools
        self.registry = registry
        self.upstream_factory = upstream_factory

        self.state = SessionState.UNINITIALIZED
        self.session_id: Optional[str] = None
        self.upstream: Optional[GeminiLiveClient] = None
        self.transcript: Optional[Transcript] = None
        self.archive: Optional[AudioArchive] = None
        self.client_audio: Optional[ClientAudioPipeline] = None
        self.upstream_audio: Optional[UpstreamAudioPipeline] = None

        self._send_lock = asyncio.Lock()
        self._upstream_task: Optional[asyncio.Task] = None
        self._error_sent = False

        self._event_handlers: Dict[type, Callable[..., Awaitable[None]]] = {
            SetupComplete: self._on_setup_complete,
            Transcription: self._on_transcription,
            ModelTurn: self._on_model_turn,
            ToolCallBatch: self._on_tool_calls,
            Interrupted: self._on_interrupted,
            UpstreamError: self._on_upstream_error,
            UpstreamClosed: self._on_upstream_closed,
        }

    async def start(self, session_id: str) -> None:
        """
        Start the session for the given client identifier and open Gemini in the
        background. A second init on the same connection is ignored.
        """
        if self.state is not SessionState.UNINITIALIZED:
            logger.warning(f"Ignoring init for {session_id}: session {self.session_id} is {self.state.value}")
            return

        self.session_id = session_id
        self.state = SessionState.CONNECTING
        self.transcript = Transcript(session_id)
        self.archive = AudioArchive(
            self.settings.audio_save_dir,
            self.settings.bot_name,
            session_id,
            enabled=self.settings.save_audio_chunks,
        )
        self.client_audio = ClientAudioPipeline()
        self.upstream_audio = UpstreamAudioPipeline()
        self.registry.add_session(session_id, self)
        logger.info(f"Transcript initialized for session {session_id}.")

        self._upstream_task = asyncio.create_task(self._run_upstream())

    async def _open_upstream(self) -> bool:
        """CONNECTING -> ACTIVE. On failure report one error and close."""
        try:
            instruction = await resolve_system_instruction(self.settings, self.session_id)
            self.upstream = self.upstream_factory(self.session_id, self.settings)
            await self.upstream.connect(instruction, self.tools.declarations())
            if self.state is not SessionState.CONNECTING:
                return False
            self.state = SessionState.ACTIVE
            logger.info(f"Session {self.session_id} active")
            await self.upstream.send_text(START_CONVERSATION_PROMPT)
            return True
        except TransientUpstreamError as e:
            logger.error(f"Error initializing Gemini connection: {e}")
        except Exception as e:
            logger.error(f"Unexpected error initializing Gemini connection: {e}", exc_info=True)

        await self._report_error(CONNECT_FAILED_MESSAGE)
        await self.close()
        return False

    async def _run_upstream(self) -> None:
        if not await self._open_upstream():
            return

        events = self.upstream.events()
        try:
            async for event in events:
                await self.handle_event(event)
                if self.state is not SessionState.ACTIVE:
                    break
        except TransientUpstreamError as e:
            logger.error(f"Gemini session error: {e}")
            await self._report_error(str(e))
        except Exception as e:
            logger.error(f"Error handling Gemini events: {e}", exc_info=True)
            await self._report_error("Internal error while handling Gemini response")
        finally:
            await events.aclose()
        await self.close()

    async def handle_event(self, event: UpstreamEvent) -> None:
        """Dispatch one upstream event. Events outside the ACTIVE state are dropped."""
        if self.state is not SessionState.ACTIVE:
            logger.debug(f"Dropping {type(event).__name__} for session {self.session_id} in state {self.state.value}")
            return

        handler = self._event_handlers.get(type(event))
        if handler is None:
            logger.warning(f"Unhandled upstream event: {event!r}")
            return
        await handler(event)

    async def _on_setup_complete(self, event: SetupComplete) -> None:
        logger.info("Setup complete, session ready")

    async def _on_transcription(self, event: Transcription) -> None:
        self.transcript.append(event.speaker, event.text)
        logger.info(f"{event.speaker} says: {event.text}")

    async def _on_model_turn(self, event: ModelTurn) -> None:
        for part in event.parts:
            if isinstance(part, AudioPart):
                self.archive.write("ai", part.data)
                for frame in self.client_audio.process(part.data):
                    if self.state is not SessionState.ACTIVE:
                        return
                    await self._send(AudioFrameMessage.from_frame(frame))
            elif isinstance(part, TextPart):
                self.transcript.append(SPEAKER_AI, part.text)
                logger.info(f"AI says: {part.text}")

    async def _on_tool_calls(self, event: ToolCallBatch) -> None:
        logger.info(f"Gemini tool calls: {[call.name for call in event.calls]}")
        context = ToolContext(
            session_id=self.session_id,
            transcript=self.transcript,
            settings=self.settings,
        )
        responses = []
        for call in event.calls:
            result = await self.tools.execute(call.name, call.args, context)
            logger.info(f"Tool {call.name} response: {result}")
            responses.append(ToolResponse(id=call.id, name=call.name, result=result))

        await self.upstream.send_tool_responses(responses)

    async def _on_interrupted(self, event: Interrupted) -> None:
        logger.info(f"Gemini interruption for session {self.session_id}")
        self.client_audio.clear()
        await self._send(InterruptionMessage())

    async def _on_upstream_error(self, event: UpstreamError) -> None:
        logger.error(f"Gemini session error: {event.message}")
        await self._report_error(event.message)
        await self.close()

    async def _on_upstream_closed(self, event: UpstreamClosed) -> None:
        logger.info(f"Gemini session closed. Code: {event.code} Reason: {event.reason}")
        await self.close()

    async def send_client_audio(self, pcm: bytes) -> None:
        """
        Forward 8 kHz client audio to Gemini.

        Audio received before the upstream session is active is dropped.
        """
        if self.state is not SessionState.ACTIVE or self.upstream is None:
            logger.debug(f"Dropping client audio in state {self.state.value}")
            return

        self.archive.write("user", pcm)
        upsampled = self.upstream_audio.process(pcm)
        if not upsampled:
            return

        try:
            await self.upstream.send_audio(upsampled)
        except TransientUpstreamError as e:
            logger.error(f"Error forwarding audio to Gemini: {e}")
            await self._report_error(str(e))
            await self.close()

    async def _send(self, message: OutgoingMessage) -> bool:
        async with self._send_lock:
            try:
                await self.websocket.send_text(message.model_dump_json())
                return True
            except Exception as e:
                logger.warning(f"Could not send {message.type} to client {self.session_id}: {e}")
                return False

    async def _report_error(self, message: str) -> None:
        """Send at most one error message to the client per session."""
        if self._error_sent:
            return
        self._error_sent = True
        await self._send(ErrorMessage(message=message))

    async def close(self) -> None:
        """
        Tear the session down. Runs once; later calls return immediately.

        Stops the upstream task, closes Gemini, drops audio buffers, closes the
        audio archive, saves the transcript and closes the client connection.
        """
        if self.state in (SessionState.CLOSING, SessionState.CLOSED):
            return
        self.state = SessionState.CLOSING
        logger.info(f"Closing session {self.session_id}")

        task = self._upstream_task
        self._upstream_task = None
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.error(f"Upstream task for session {self.session_id} failed: {e}", exc_info=True)

        if self.upstream is not None:
            await self.upstream.close()
            self.upstream = None

        if self.client_audio is not None:
            self.client_audio.clear()
            self.client_audio = None
        if self.upstream_audio is not None:
            self.upstream_audio.clear()
            self.upstream_audio = None

        if self.archive is not None:
            self.archive.close()
            self.archive = None

        if self.transcript is not None:
            save_transcript(self.transcript, self.settings.transcript_dir)
            logger.info(f"Transcript for session {self.session_id} cleared from memory.")
            self.transcript = None

        if self.session_id is not None:
            self.registry.remove_session(self.session_id, self)

        try:
            await self.websocket.close()
        except Exception as e:
            logger.debug(f"Client WebSocket already closed: {e}")

        self.state = SessionState.CLOSED
        logger.info(f"Session {self.session_id} closed")
