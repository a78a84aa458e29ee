import unittest
from unittest.mock import MagicMock

from voice_relay.models.session_registry import SessionRegistry


class TestSessionRegistry(unittest.TestCase):

    def setUp(self):
        self.session_registry = SessionRegistry()
        self.session = MagicMock()
        self.session_id = "test-session-id"

    def test_add_session(self):
        # Execute
        self.session_registry.add_session(self.session_id, self.session)

        # Assert
        self.assertIn(self.session_id, self.session_registry.active_sessions)
        self.assertIs(self.session_registry.active_sessions[self.session_id], self.session)
        self.assertEqual(len(self.session_registry), 1)

    def test_get_session(self):
        # Setup
        self.session_registry.add_session(self.session_id, self.session)

        # Execute
        session = self.session_registry.get_session(self.session_id)

        # Assert
        self.assertIs(session, self.session)

    def test_get_nonexistent_session(self):
        # Execute
        session = self.session_registry.get_session("nonexistent-id")

        # Assert
        self.assertIsNone(session)

    def test_remove_session(self):
        # Setup
        self.session_registry.add_session(self.session_id, self.session)

        # Execute
        self.session_registry.remove_session(self.session_id)

        # Assert
        self.assertNotIn(self.session_id, self.session_registry.active_sessions)

    def test_remove_nonexistent_session(self):
        # Execute - should not raise an exception
        self.session_registry.remove_session("nonexistent-id")

        # Assert
        self.assertEqual(len(self.session_registry), 0)

    def test_remove_session_replaced_by_reconnect(self):
        # Setup: a reconnecting client registers a new session under the same id
        replacement = MagicMock()
        self.session_registry.add_session(self.session_id, self.session)
        self.session_registry.add_session(self.session_id, replacement)

        # Execute: the old session tears down
        self.session_registry.remove_session(self.session_id, self.session)

        # Assert
        self.assertIs(self.session_registry.get_session(self.session_id), replacement)

    def test_replacing_session_logs_warning(self):
        # Setup
        replacement = MagicMock()
        self.session_registry.add_session(self.session_id, self.session)

        # Execute
        with self.assertLogs("voice_relay", level="WARNING") as logs:
            self.session_registry.add_session(self.session_id, replacement)

        # Assert
        self.assertIn("test-session-id registered again", logs.output[0])
        self.assertIs(self.session_registry.get_session(self.session_id), replacement)

    def test_re_adding_same_session_is_silent(self):
        # Setup
        self.session_registry.add_session(self.session_id, self.session)

        # Execute
        with self.assertNoLogs("voice_relay", level="WARNING"):
            self.session_registry.add_session(self.session_id, self.session)

        # Assert
        self.assertEqual(len(self.session_registry), 1)

    def test_get_all_sessions(self):
        # Setup
        other = MagicMock()
        self.session_registry.add_session(self.session_id, self.session)
        self.session_registry.add_session("other-id", other)

        # Execute
        sessions = self.session_registry.get_all_sessions()

        # Assert
        self.assertEqual(sessions, [self.session, other])


if __name__ == "__main__":
    unittest.main()
