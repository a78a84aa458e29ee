"""
Tests for the audio archive and transcript persistence.
"""

from datetime import date
from unittest.mock import patch

from voice_relay.config.constants import SPEAKER_USER
from voice_relay.models.transcript import Transcript
from voice_relay.services.persistence import AudioArchive, save_transcript


class TestAudioArchive:
    def test_layout(self, tmp_path):
        archive = AudioArchive(str(tmp_path), "gemini_bot", "abc", day=date(2025, 3, 9))

        assert archive.path_for("user") == tmp_path / "2025-03-09" / "gemini_bot" / "abc" / "user_audio.pcm"

    def test_appends_per_speaker(self, tmp_path):
        archive = AudioArchive(str(tmp_path), "gemini_bot", "abc")
        archive.write("user", b"\x01\x02")
        archive.write("user", b"\x03\x04")
        archive.write("ai", b"\x05\x06")

        assert archive.open_handles == 2
        archive.close()

        assert archive.open_handles == 0
        assert archive.path_for("user").read_bytes() == b"\x01\x02\x03\x04"
        assert archive.path_for("ai").read_bytes() == b"\x05\x06"

    def test_disabled_archive_writes_nothing(self, tmp_path):
        archive = AudioArchive(str(tmp_path), "gemini_bot", "abc", enabled=False)
        archive.write("user", b"\x01\x02")

        assert archive.open_handles == 0
        assert not archive.session_dir.exists()

    def test_write_after_close_is_ignored(self, tmp_path):
        archive = AudioArchive(str(tmp_path), "gemini_bot", "abc")
        archive.write("user", b"\x01\x02")
        archive.close()
        archive.close()
        archive.write("user", b"\x03\x04")

        assert archive.path_for("user").read_bytes() == b"\x01\x02"

    def test_write_error_is_logged(self, tmp_path):
        archive = AudioArchive(str(tmp_path), "gemini_bot", "abc")

        with patch("builtins.open", side_effect=PermissionError("read-only")):
            archive.write("user", b"\x01\x02")

        assert archive.open_handles == 0


class TestSaveTranscript:
    def test_save(self, tmp_path):
        transcript = Transcript("abc")
        transcript.append(SPEAKER_USER, "hello")

        path = save_transcript(transcript, str(tmp_path / "logs"))

        assert path == tmp_path / "logs" / "transcript-abc.txt"
        assert path.read_text(encoding="utf-8").endswith("User: hello")

    def test_save_failure_returns_none(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")

        assert save_transcript(Transcript("abc"), str(blocker)) is None
