"""
Fixed-size frame accumulator.

Converted audio arrives in irregular sizes; the client protocol only accepts
exact 20 ms frames. Framer buffers bytes in FIFO order and hands out complete
frames, keeping the remainder for the next push.
"""

from typing import List

from voice_relay.config.constants import FRAME_BYTES, SAMPLE_WIDTH


class Framer:
    """Accumulate PCM16 audio and slice it into fixed-size frames."""

    def __init__(self, frame_bytes: int = FRAME_BYTES):
        if frame_bytes <= 0 or frame_bytes % SAMPLE_WIDTH:
            raise ValueError(f"Frame size must be a positive multiple of {SAMPLE_WIDTH}")
        self.frame_bytes = frame_bytes
        self._buffer = bytearray()

    @property
    def buffered_bytes(self) -> int:
        return len(self._buffer)

    @property
    def buffered_samples(self) -> int:
        return len(self._buffer) // SAMPLE_WIDTH

    def push(self, pcm: bytes) -> List[bytes]:
        """Append audio and return every complete frame, oldest first."""
        if pcm:
            self._buffer.extend(pcm)

        complete = len(self._buffer) // self.frame_bytes
        if not complete:
            return []

        end = complete * self.frame_bytes
        frames = [
            bytes(self._buffer[offset:offset + self.frame_bytes])
            for offset in range(0, end, self.frame_bytes)
        ]
        del self._buffer[:end]
        return frames

    def clear(self) -> None:
        """Drop any partially accumulated frame."""
        self._buffer.clear()
