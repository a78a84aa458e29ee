"""
Registry of live relay sessions.

The registry only maps session ids to their SessionBridge handles so the process
can report and shut down live sessions. Everything a session owns (transcript,
audio buffers, file handles) lives on the session itself.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from voice_relay.config.constants import LOGGER_NAME

if TYPE_CHECKING:
    from voice_relay.bot.session_bridge import SessionBridge

logger = logging.getLogger(LOGGER_NAME)


class SessionRegistry:
    """
    Tracks active sessions by their client supplied identifier.
    """

    def __init__(self):
        """Initialize an empty dictionary of active sessions."""
        self.active_sessions: Dict[str, "SessionBridge"] = {}

    def add_session(self, session_id: str, session: "SessionBridge"):
        """
        Add a session to the registry. A different session already holding the id
        is replaced (a reconnecting client), with a warning.

        Args:
            session_id: Identifier supplied by the client in its init message
            session: The session bridge handling that client
        """
        current = self.active_sessions.get(session_id)
        if current is not None and current is not session:
            logger.warning(f"Session {session_id} registered again, replacing the previous session")
        self.active_sessions[session_id] = session

    def get_session(self, session_id: str) -> Optional["SessionBridge"]:
        """
        Get an active session by its ID, or None if it does not exist.
        """
        return self.active_sessions.get(session_id)

    def remove_session(self, session_id: str, session: Optional["SessionBridge"] = None):
        """
        Remove a session from the registry.

        Args:
            session_id: Identifier of the session to remove
            session: If given, only remove the entry when it still refers to this
                session (a reconnecting client may have replaced it)
        """
        current = self.active_sessions.get(session_id)
        if current is None:
            return
        if session is not None and current is not session:
            return
        del self.active_sessions[session_id]

    def get_all_sessions(self) -> List["SessionBridge"]:
        return list(self.active_sessions.values())

    def __len__(self) -> int:
        return len(self.active_sessions)
