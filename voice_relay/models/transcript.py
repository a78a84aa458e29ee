"""
Append-only conversation transcript owned by a single session.
"""

from datetime import UTC, datetime
from typing import List

from pydantic import BaseModel, Field


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class TranscriptEntry(BaseModel):
    """One utterance in the conversation."""

    speaker: str
    text: str
    timestamp: str = Field(default_factory=_utc_timestamp)

    def format(self) -> str:
        return f"[{self.timestamp}] {self.speaker}: {self.text}"


class Transcript:
    """Ordered record of who said what during a session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        self._entries: List[TranscriptEntry] = []

    def append(self, speaker: str, text: str) -> TranscriptEntry:
        entry = TranscriptEntry(speaker=speaker, text=text)
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> List[TranscriptEntry]:
        """A copy of the entries; the transcript itself cannot be edited."""
        return list(self._entries)

    def format(self) -> str:
        return "\n".join(entry.format() for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)
