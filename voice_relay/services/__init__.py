"""
Services module: I/O wrappers used by the relay sessions.

- instructions: resolves the Gemini system instruction (inline, URL, file, default)
- persistence: per-session PCM audio archive and transcript log
"""

from voice_relay.services.instructions import resolve_system_instruction
from voice_relay.services.persistence import AudioArchive, save_transcript
