"""
Per-session audio pipelines.

Each session builds its own pair on start and drops them on teardown:

- UpstreamAudioPipeline: client 8 kHz -> Gemini 16 kHz, emitted immediately.
- ClientAudioPipeline: Gemini 24 kHz -> client 8 kHz, re-chunked into 20 ms frames.
"""

import logging
from typing import List

from voice_relay.audio.framer import Framer
from voice_relay.audio.resampler import Resampler
from voice_relay.config.constants import (
    CLIENT_SAMPLE_RATE,
    FRAME_BYTES,
    LOGGER_NAME,
    UPSTREAM_INPUT_SAMPLE_RATE,
    UPSTREAM_OUTPUT_SAMPLE_RATE,
)
from voice_relay.exceptions import ResourceInitError

logger = logging.getLogger(LOGGER_NAME)


class UpstreamAudioPipeline:
    """Upsample client audio for the Gemini Live input stream."""

    def __init__(self):
        self.resampler = Resampler(CLIENT_SAMPLE_RATE, UPSTREAM_INPUT_SAMPLE_RATE)

    def process(self, pcm: bytes) -> bytes:
        return self.resampler.process(pcm)

    def clear(self) -> None:
        self.resampler.reset()


class ClientAudioPipeline:
    """Downsample Gemini audio and cut it into fixed client frames."""

    def __init__(self, frame_bytes: int = FRAME_BYTES):
        self.resampler = Resampler(UPSTREAM_OUTPUT_SAMPLE_RATE, CLIENT_SAMPLE_RATE)
        self.framer = Framer(frame_bytes)

    @property
    def buffered_samples(self) -> int:
        return self.framer.buffered_samples

    def process(self, pcm: bytes) -> List[bytes]:
        """Return the complete frames made available by this chunk, in order."""
        if not pcm:
            return []
        return self.framer.push(self.resampler.process(pcm))

    def clear(self) -> None:
        """Discard buffered audio and interpolation history (barge-in)."""
        self.framer.clear()
        self.resampler.reset()


def verify_audio_pipeline() -> None:
    """
    Build both pipelines once and push a frame of silence through them.

    Raises:
        ResourceInitError: If the converters cannot be constructed or produce
            malformed output.
    """
    try:
        upstream = UpstreamAudioPipeline()
        client = ClientAudioPipeline()
        upsampled = upstream.process(bytes(FRAME_BYTES))
        frames = client.process(bytes(FRAME_BYTES * 3))
    except ResourceInitError:
        raise
    except Exception as e:
        raise ResourceInitError(f"Audio pipeline self-check failed: {e}") from e

    if not upsampled or any(len(frame) != FRAME_BYTES for frame in frames):
        raise ResourceInitError("Audio pipeline self-check produced malformed output")
    logger.info("Audio pipelines verified")
