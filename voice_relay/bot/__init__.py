"""
Bot module connecting client audio sessions with the Gemini Live API.

Key components:
- GeminiLiveClient: wraps one google-genai live session and turns server
  messages into UpstreamEvent values.
- SessionBridge: per-session state machine owning the client connection, the
  upstream client, both audio pipelines, the transcript and the audio archive.

Usage examples:
```python
from voice_relay.bot import SessionBridge

session = SessionBridge(websocket, settings, tools, registry)
await session.start("abc")          # opens Gemini in the background
await session.send_client_audio(pcm_8k)
await session.close()               # idempotent teardown
```
"""

from voice_relay.bot.gemini_live import GeminiLiveClient, translate_message
from voice_relay.bot.session_bridge import SessionBridge, SessionState
