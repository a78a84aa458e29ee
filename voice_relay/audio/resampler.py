"""
Stateful linear-interpolation resampler for PCM16 mono audio.

Positions are tracked on an exact rational grid (rates reduced by their gcd), so
feeding a stream in arbitrary chunks produces exactly the same samples as feeding
it in one piece. The last input sample is carried between calls as interpolation
history, which is why a Resampler must never be shared between sessions.
"""

import logging
import math
from typing import Optional

import numpy as np

from voice_relay.config.constants import CHANNELS, LOGGER_NAME, SAMPLE_WIDTH
from voice_relay.exceptions import ResourceInitError

logger = logging.getLogger(LOGGER_NAME)

PCM16_DTYPE = np.dtype("<i2")


class Resampler:
    """Convert PCM16 mono audio from one fixed sample rate to another."""

    def __init__(self, source_rate: int, target_rate: int, channels: int = CHANNELS):
        if source_rate <= 0 or target_rate <= 0:
            raise ResourceInitError(
                f"Invalid resampler rates: {source_rate} -> {target_rate}"
            )
        if channels != 1:
            raise ResourceInitError(f"Only mono audio is supported, got {channels} channels")

        self.source_rate = source_rate
        self.target_rate = target_rate
        self.channels = channels

        divisor = math.gcd(source_rate, target_rate)
        self._up = target_rate // divisor
        self._down = source_rate // divisor

        self._history: Optional[np.ndarray] = None
        self._phase = 0
        self._pending = b""

    def reset(self) -> None:
        """Forget all history, as if no audio had been processed."""
        self._history = None
        self._phase = 0
        self._pending = b""

    def process(self, pcm: bytes) -> bytes:
        """
        Resample a chunk of PCM16 little-endian mono audio.

        Args:
            pcm: Raw audio bytes at the source rate. May end in the middle of a
                sample; the dangling byte is kept for the next call.

        Returns:
            Raw audio bytes at the target rate (possibly empty).
        """
        if not pcm:
            return b""

        data = self._pending + pcm
        usable = len(data) - (len(data) % SAMPLE_WIDTH)
        self._pending = data[usable:]
        if usable == 0:
            return b""

        samples = np.frombuffer(data[:usable], dtype=PCM16_DTYPE)
        if self._history is not None:
            samples = np.concatenate((self._history, samples))

        # Output positions are phase/up, phase in units of 1/up input samples
        limit = (len(samples) - 1) * self._up
        self._history = samples[-1:].copy()

        if self._phase > limit:
            self._phase -= limit
            return b""

        count = (limit - self._phase) // self._down + 1
        positions = (self._phase + self._down * np.arange(count)) / self._up
        converted = np.interp(
            positions, np.arange(len(samples)), samples.astype(np.float64)
        )
        self._phase = self._phase + self._down * count - limit

        return np.clip(np.rint(converted), -32768, 32767).astype(PCM16_DTYPE).tobytes()

    def __repr__(self) -> str:
        return f"Resampler({self.source_rate} -> {self.target_rate})"
