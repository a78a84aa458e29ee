"""
Built-in tools available to every session.

- get_transcript: read back the conversation so far
- avr_hangup: ask the telephony side to end the call
"""

import logging
from typing import Any, Dict

import httpx

from voice_relay.config.constants import LOGGER_NAME
from voice_relay.tools.registry import Tool, ToolContext, ToolRegistry

logger = logging.getLogger(LOGGER_NAME)

HANGUP_TIMEOUT_SECONDS = 10.0


async def get_transcript(session_id: str, args: Dict[str, Any], context: ToolContext) -> str:
    transcript = context.transcript
    if transcript is None:
        return "I'm sorry, I couldn't retrieve the transcript for this session."
    if not len(transcript):
        return "The transcript is currently empty."
    return f"Here is the transcript of our conversation:\n{transcript.format()}"


async def avr_hangup(session_id: str, args: Dict[str, Any], context: ToolContext) -> str:
    url = f"{context.settings.ami_url.rstrip('/')}/hangup"
    logger.info(f"Hangup requested for session {session_id}")
    try:
        async with httpx.AsyncClient(timeout=HANGUP_TIMEOUT_SECONDS) as client:
            response = await client.post(url, json={"uuid": session_id})
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error during hangup for session {session_id}: {e}")
        return f"Error during hangup: {e}"

    message = data.get("message") if isinstance(data, dict) else None
    logger.info(f"Hangup response: {data}")
    return message or "The call is being ended."


GET_TRANSCRIPT_TOOL = Tool(
    name="get_transcript",
    description=(
        "Get the full transcript of the conversation so far. "
        "Should be offered to the user at the end of a successful call."
    ),
    handler=get_transcript,
)

AVR_HANGUP_TOOL = Tool(
    name="avr_hangup",
    description="Ends the conversation once the caller's request is complete.",
    handler=avr_hangup,
)


def register_builtin_tools(registry: ToolRegistry) -> None:
    registry.register(GET_TRANSCRIPT_TOOL)
    registry.register(AVR_HANGUP_TOOL)
