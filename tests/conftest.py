import asyncio
import logging

import pytest

from voice_relay.config.settings import Settings
from voice_relay.exceptions import TransientUpstreamError

SETTINGS_ENV_VARS = [
    "GEMINI_API_KEY", "GEMINI_MODEL", "GEMINI_API_VERSION", "GEMINI_INSTRUCTIONS",
    "GEMINI_URL_INSTRUCTIONS", "GEMINI_FILE_INSTRUCTIONS", "GEMINI_INPUT_TRANSCRIPTION",
    "GEMINI_OUTPUT_TRANSCRIPTION", "HOST", "PORT", "SAVE_AUDIO_CHUNKS", "AUDIO_SAVE_DIR",
    "BOT_NAME", "TRANSCRIPT_DIR", "AMI_URL", "TOOL_MODULES",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host environment out of Settings()"""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


class MockWebSocket:
    """A simple websocket mock that records sent messages."""

    def __init__(self):
        self.sent_messages = []
        self.close_count = 0

    async def send_text(self, text):
        self.sent_messages.append(text)

    async def close(self, code=1000):
        self.close_count += 1


class FakeUpstream:
    """Stands in for GeminiLiveClient; events are fed through a queue."""

    def __init__(self, session_id, settings):
        self.session_id = session_id
        self.settings = settings
        self.queue = asyncio.Queue()
        self.connect_calls = []
        self.sent_audio = []
        self.sent_text = []
        self.tool_responses = []
        self.close_count = 0
        self.fail_connect = False
        self.connect_gate = None

    async def connect(self, system_instruction, tools=None):
        if self.connect_gate is not None:
            await self.connect_gate.wait()
        if self.fail_connect:
            raise TransientUpstreamError(self.session_id, "Failed to connect: refused")
        self.connect_calls.append((system_instruction, tools))

    async def send_audio(self, pcm):
        self.sent_audio.append(pcm)

    async def send_text(self, text):
        self.sent_text.append(text)

    async def send_tool_responses(self, responses):
        self.tool_responses.append(list(responses))

    async def events(self):
        while True:
            yield await self.queue.get()

    async def close(self):
        self.close_count += 1


@pytest.fixture
def settings(tmp_path):
    return Settings(
        gemini_api_key="test-key",
        instructions="Be brief.",
        save_audio_chunks=True,
        audio_save_dir=str(tmp_path / "audio"),
        transcript_dir=str(tmp_path / "logs"),
        bot_name="test_bot",
    )


@pytest.fixture
def upstream_factory():
    """Factory recording every FakeUpstream it creates in `.created`."""
    created = []

    def factory(session_id, settings):
        upstream = FakeUpstream(session_id, settings)
        upstream.fail_connect = factory.fail_connect
        upstream.connect_gate = factory.connect_gate
        created.append(upstream)
        return upstream

    factory.created = created
    factory.fail_connect = False
    factory.connect_gate = None
    return factory


@pytest.fixture
def mock_websocket():
    return MockWebSocket()
