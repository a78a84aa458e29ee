"""
System instruction loading for new Gemini sessions.

Sources are checked in order and the first configured one wins:
inline text, a remote URL returning JSON {"system": "..."}, a local file.
A source that is configured but fails to load falls back to the default text.
"""

import logging
from pathlib import Path

import httpx

from voice_relay.config.constants import DEFAULT_INSTRUCTIONS, LOGGER_NAME
from voice_relay.config.settings import Settings

logger = logging.getLogger(LOGGER_NAME)

URL_TIMEOUT_SECONDS = 10.0


async def fetch_url_instructions(url: str, session_id: str) -> str:
    """Fetch the system instruction from a remote endpoint for this session."""
    async with httpx.AsyncClient(timeout=URL_TIMEOUT_SECONDS) as client:
        response = await client.get(
            url,
            headers={"Content-Type": "application/json", "X-AVR-UUID": session_id},
        )
        response.raise_for_status()
        data = response.json()

    system = data.get("system") if isinstance(data, dict) else None
    if not isinstance(system, str) or not system.strip():
        raise ValueError("response has no 'system' text")
    return system


def read_file_instructions(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


async def resolve_system_instruction(settings: Settings, session_id: str) -> str:
    """
    Resolve the system instruction for a session.

    Args:
        settings: Runtime settings holding the configured sources
        session_id: Session identifier, forwarded to the URL source

    Returns:
        The instruction text; never empty.
    """
    if settings.instructions:
        logger.info("Using GEMINI_INSTRUCTIONS from environment variable")
        return settings.instructions

    if settings.url_instructions:
        try:
            instructions = await fetch_url_instructions(settings.url_instructions, session_id)
            logger.info("Instructions loaded from GEMINI_URL_INSTRUCTIONS")
            return instructions
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.error(f"Error loading instructions from {settings.url_instructions}: {e}")
            return DEFAULT_INSTRUCTIONS

    if settings.file_instructions:
        try:
            instructions = read_file_instructions(settings.file_instructions)
            logger.info("Using GEMINI_FILE_INSTRUCTIONS from environment variable")
            return instructions
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error loading instructions from {settings.file_instructions}: {e}")
            return DEFAULT_INSTRUCTIONS

    logger.info("Using default instructions")
    return DEFAULT_INSTRUCTIONS
