"""
Audio conversion for the relay.

- resampler: stateful linear PCM16 sample-rate converter (one rate pair each)
- framer: re-chunks converted audio into fixed 20 ms client frames
- pipeline: the two per-session directions (client→Gemini, Gemini→client)
"""

from voice_relay.audio.framer import Framer
from voice_relay.audio.pipeline import (
    ClientAudioPipeline,
    UpstreamAudioPipeline,
    verify_audio_pipeline,
)
from voice_relay.audio.resampler import Resampler
