"""
Handlers for the client WebSocket protocol.

- client_handlers: init (starts a session) and audio (forwards caller audio).
"""
