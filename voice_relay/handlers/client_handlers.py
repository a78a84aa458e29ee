"""
Handles the client-facing messages of the relay protocol.

Each handler receives the decoded JSON message and the connection's
SessionBridge. Invalid messages are logged and dropped; they never end the
connection.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from voice_relay.bot.session_bridge import SessionBridge, SessionState
from voice_relay.config.constants import LOGGER_NAME
from voice_relay.models.message_schemas import AudioMessage, InitMessage

logger = logging.getLogger(LOGGER_NAME)


async def handle_init(message: Dict[str, Any], session: SessionBridge) -> None:
    """
    Handle the init message: capture the session uuid and open Gemini.

    Args:
        message: The init message, e.g. {"type": "init", "uuid": "abc"}
        session: The SessionBridge for this connection
    """
    try:
        init_message = InitMessage(**message)
    except ValidationError as e:
        logger.error(f"Invalid init message: {e}")
        return

    logger.info(f"Session UUID: {init_message.uuid}")
    await session.start(init_message.uuid)


async def handle_audio(message: Dict[str, Any], session: SessionBridge) -> None:
    """
    Handle an audio message from the caller.

    Audio sent before init is silently ignored.
    """
    if session.state is SessionState.UNINITIALIZED:
        return

    try:
        pcm = AudioMessage(**message).decode()
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid audio message: {e}")
        return

    await session.send_client_audio(pcm)
