"""
WebSocket connection manager for the client relay protocol.

This module implements the server side of the client protocol:
- Accept connections and create one SessionBridge per connection
- Parse JSON frames and route them to handler functions by "type"
- Close the session on disconnect or socket error

Malformed frames and unknown message types are logged and ignored.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from fastapi import WebSocket, WebSocketDisconnect

from voice_relay.bot.gemini_live import GeminiLiveClient
from voice_relay.bot.session_bridge import SessionBridge, SessionState, UpstreamFactory
from voice_relay.config.constants import LOGGER_NAME, MESSAGE_TYPE_AUDIO, MESSAGE_TYPE_INIT
from voice_relay.config.settings import Settings
from voice_relay.exceptions import ProtocolError
from voice_relay.handlers.client_handlers import handle_audio, handle_init
from voice_relay.models.session_registry import SessionRegistry
from voice_relay.tools.loader import build_registry
from voice_relay.tools.registry import ToolRegistry

logger = logging.getLogger(LOGGER_NAME)

# Type hint for handler functions
HandlerFunc = Callable[[Dict[str, Any], SessionBridge], Awaitable[None]]


def parse_client_message(data: str) -> Dict[str, Any]:
    """
    Decode one client text frame.

    Raises:
        ProtocolError: If the frame is not a JSON object.
    """
    try:
        message = json.loads(data)
    except (json.JSONDecodeError, TypeError) as e:
        raise ProtocolError(f"Malformed JSON message: {e}") from e
    if not isinstance(message, dict):
        raise ProtocolError(f"Expected a JSON object, got {type(message).__name__}")
    return message


class WebSocketManager:
    """Manages client connections and routes their messages to handlers.

    Each connection gets its own SessionBridge. The manager keeps every bridge it
    created until its connection ends, so shutdown also reaches sessions that a
    reconnect displaced from the SessionRegistry.
    """

    def __init__(self, settings: Optional[Settings] = None,
                 tools: Optional[ToolRegistry] = None,
                 session_registry: Optional[SessionRegistry] = None,
                 upstream_factory: UpstreamFactory = GeminiLiveClient):
        self.settings = settings or Settings()
        self.tools = tools if tools is not None else build_registry(self.settings)
        self.session_registry = session_registry if session_registry is not None else SessionRegistry()
        self.upstream_factory = upstream_factory
        self.connections: Set[SessionBridge] = set()

        self.handlers: Dict[str, HandlerFunc] = {
            MESSAGE_TYPE_INIT: handle_init,
            MESSAGE_TYPE_AUDIO: handle_audio,
        }

    def create_session(self, websocket: WebSocket) -> SessionBridge:
        session = SessionBridge(
            websocket,
            self.settings,
            self.tools,
            self.session_registry,
            upstream_factory=self.upstream_factory,
        )
        self.connections.add(session)
        return session

    async def handle_message(self, data: str, session: SessionBridge) -> None:
        """Parse one text frame and dispatch it. Never raises for bad input."""
        try:
            message = parse_client_message(data)
        except ProtocolError as e:
            logger.error(f"Error processing client message: {e}")
            return

        message_type = message.get("type")
        handler = self.handlers.get(message_type)
        if handler is None:
            logger.info(f"Unknown message type from client: {message_type}")
            return
        await handler(message, session)

    async def handle_websocket(self, websocket: WebSocket):
        """Handle a client connection throughout its lifecycle.

        The loop runs until the client disconnects or the session closes the
        socket; the session is always torn down afterwards.
        """
        await websocket.accept()
        logger.info("New client WebSocket connection received")
        session = self.create_session(websocket)

        try:
            while True:
                data = await websocket.receive_text()
                await self.handle_message(data, session)
        except WebSocketDisconnect:
            logger.info("Client WebSocket connection closed")
        except Exception as e:
            if session.state is SessionState.CLOSED:
                logger.info(f"Client WebSocket closed by session {session.session_id}")
            else:
                logger.error(f"Client WebSocket error: {e}", exc_info=True)
        finally:
            await session.close()
            self.connections.discard(session)

    async def shutdown(self) -> None:
        """Close every live session (process shutdown)."""
        sessions: List[SessionBridge] = list(self.connections)
        sessions += [s for s in self.session_registry.get_all_sessions() if s not in self.connections]
        if sessions:
            logger.info(f"Closing {len(sessions)} active session(s)")
        for session in sessions:
            await session.close()
