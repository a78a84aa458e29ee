"""
Per-session persistence: raw PCM audio archive and transcript log.

Write failures are logged and swallowed here so that persistence can never
block or break a session teardown.
"""

import logging
from datetime import date
from pathlib import Path
from typing import BinaryIO, Dict, Optional

from voice_relay.config.constants import LOGGER_NAME
from voice_relay.models.transcript import Transcript

logger = logging.getLogger(LOGGER_NAME)


class AudioArchive:
    """
    Appends each speaker's audio to
    {root}/{YYYY-MM-DD}/{bot_name}/{session_id}/{speaker}_audio.pcm.

    One append handle per speaker is opened on first write and kept until close().
    """

    def __init__(self, root: str, bot_name: str, session_id: str, enabled: bool = True,
                 day: Optional[date] = None):
        self.enabled = enabled
        self.session_dir = (
            Path(root) / (day or date.today()).isoformat() / bot_name / session_id
        )
        self.session_id = session_id
        self._handles: Dict[str, BinaryIO] = {}
        self._closed = False

    @property
    def open_handles(self) -> int:
        return len(self._handles)

    def path_for(self, speaker: str) -> Path:
        return self.session_dir / f"{speaker}_audio.pcm"

    def write(self, speaker: str, chunk: bytes) -> None:
        if not self.enabled or self._closed or not chunk:
            return
        try:
            handle = self._handles.get(speaker)
            if handle is None:
                self.session_dir.mkdir(parents=True, exist_ok=True)
                handle = open(self.path_for(speaker), "ab")
                self._handles[speaker] = handle
            handle.write(chunk)
        except OSError as e:
            logger.error(f"Failed to save {speaker} audio for session {self.session_id}: {e}")

    def close(self) -> None:
        """Close every open handle. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for speaker, handle in self._handles.items():
            try:
                handle.close()
                logger.info(f"{speaker} audio file handle for session {self.session_id} closed.")
            except OSError as e:
                logger.error(f"Failed to close {speaker} audio for session {self.session_id}: {e}")
        self._handles.clear()


def save_transcript(transcript: Transcript, directory: str) -> Optional[Path]:
    """
    Write the transcript to {directory}/transcript-{session_id}.txt.

    Returns:
        The written path, or None when writing failed.
    """
    path = Path(directory) / f"transcript-{transcript.session_id}.txt"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(transcript.format(), encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to save transcript for session {transcript.session_id}: {e}")
        return None
    logger.info(f"Transcript for session {transcript.session_id} saved to {path}")
    return path
