"""
Constants and configuration values used throughout the application.

Audio rates and frame sizes are fixed by the client protocol (8 kHz, 20 ms frames)
and by the Gemini Live API (16 kHz input, 24 kHz output).
"""

# Logger name used throughout the application
LOGGER_NAME = "voice_relay"

# Default Gemini model for the Live API
DEFAULT_GEMINI_MODEL = "gemini-live-2.5-flash-preview-native-audio-12-2025"
DEFAULT_API_VERSION = "v1alpha"

# Audio format constants (PCM16 little-endian, mono)
CLIENT_SAMPLE_RATE = 8000
UPSTREAM_INPUT_SAMPLE_RATE = 16000
UPSTREAM_OUTPUT_SAMPLE_RATE = 24000
SAMPLE_WIDTH = 2
CHANNELS = 1
UPSTREAM_INPUT_MIME_TYPE = f"audio/pcm;rate={UPSTREAM_INPUT_SAMPLE_RATE}"

# 20ms at 8kHz
FRAME_DURATION_MS = 20
FRAME_SAMPLES = CLIENT_SAMPLE_RATE * FRAME_DURATION_MS // 1000
FRAME_BYTES = FRAME_SAMPLES * SAMPLE_WIDTH

# Client message type constants
MESSAGE_TYPE_INIT = "init"
MESSAGE_TYPE_AUDIO = "audio"

# Conversation text
DEFAULT_INSTRUCTIONS = "You are a helpful assistant and answer in a friendly tone."
START_CONVERSATION_PROMPT = "Please start the conversation."
CONNECT_FAILED_MESSAGE = "Failed to initialize Gemini connection"
UNKNOWN_TOOL_RESULT = "I'm sorry, I cannot retrieve the requested information."
TOOL_FAILED_RESULT = "I'm sorry, something went wrong while running that tool."

# Transcript speakers
SPEAKER_USER = "User"
SPEAKER_AI = "AI"
