"""
Voice Relay - client telephony audio to Gemini Live speech-to-speech bridge

This application relays real-time speech between a telephony or browser client
speaking narrowband PCM16 (8 kHz) over a JSON WebSocket protocol and the Gemini
Live API (16 kHz input, 24 kHz output).

Architecture Overview:
- FastAPI server exposing the client WebSocket endpoint
- Per-session resampling (8k -> 16k, 24k -> 8k) and 20 ms frame packetization
- One SessionBridge per connection driving the Gemini Live session
- Tool calls answered through an explicit tool registry
- Transcript and optional audio archive persisted per session

Key Components:
- audio: Resampler, Framer and the per-session audio pipelines
- bot: Gemini Live client and the SessionBridge state machine
- config: Constants, logging setup and environment settings
- handlers: Client protocol message handlers (init, audio)
- models: Protocol schemas, upstream events, transcript, session registry
- services: System instruction loading and persistence
- tools: Tool registry and built-in tools
- websocket_manager: Connection handling and message routing

Getting Started:
1. Set up environment variables (or a .env file):
   - GEMINI_API_KEY: Your Gemini API key
   - PORT: Port to run the server on (default 6037)
   - LOG_LEVEL: Logging level (default INFO)
   - LOG_DIR: Directory for the rotating log file (default logs, empty disables it)

2. Start the server:
   ```bash
   python run.py
   ```

3. Point the client at ws://your-server:6037/ and send
   {"type": "init", "uuid": "<call id>"} followed by audio messages.
"""
