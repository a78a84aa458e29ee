"""
FastAPI server for the Gemini Live voice relay.

This module initializes the FastAPI application exposing the client WebSocket
endpoint plus health and info endpoints. Startup verifies the audio pipeline;
shutdown closes every live session.
"""

from contextlib import asynccontextmanager
from pathlib import Path

import dotenv
from fastapi import FastAPI, WebSocket

from voice_relay.audio.pipeline import verify_audio_pipeline
from voice_relay.config.logging_config import configure_logging
from voice_relay.config.settings import Settings
from voice_relay.websocket_manager import WebSocketManager

# Load environment variables from .env file if it exists
env_path = Path(".") / ".env"
if env_path.exists():
    dotenv.load_dotenv(env_path)

# Configure logging
logger = configure_logging()

settings = Settings()

# Create WebSocket manager
websocket_manager = WebSocketManager(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    verify_audio_pipeline()
    logger.info(f"Gemini Speech-to-Speech WebSocket server ready on port {settings.port}")
    yield
    logger.info("Shutting down gracefully...")
    await websocket_manager.shutdown()


# Create FastAPI application
app = FastAPI(
    title="Voice Relay",
    description="Real-time audio relay between 8 kHz telephony clients and the Gemini Live API",
    version="1.0.0",
    lifespan=lifespan,
)


@app.websocket("/")
@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for relay clients.

    Clients send {"type": "init", "uuid": ...} followed by
    {"type": "audio", "audio": <base64 PCM16 8 kHz>} messages and receive
    audio frames, interruption and error messages.
    """
    await websocket_manager.handle_websocket(websocket)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring system status.

    Returns:
        dict: Status information including the number of live sessions.
    """
    return {
        "status": "healthy",
        "gemini_api_key_configured": bool(settings.gemini_api_key),
        "active_sessions": len(websocket_manager.session_registry),
    }


@app.get("/")
async def root():
    """Root endpoint to display basic information about the API."""
    return {
        "name": "Voice Relay",
        "description": "Real-time audio relay between 8 kHz telephony clients and the Gemini Live API",
        "version": "1.0.0",
        "endpoints": {
            "/": "WebSocket endpoint for relay clients",
            "/ws": "WebSocket endpoint for relay clients (alias)",
            "/health": "Health check endpoint",
        },
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, http="h11")
