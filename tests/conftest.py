"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from notewhisper.host import Choice
from notewhisper.transcribe.naming import transcript_path_for


@pytest.fixture
def tmp_vault(tmp_path: Path) -> Path:
    """Create a temporary vault with a few notes and audio attachments."""
    vault_dir = tmp_path / "vault"
    vault_dir.mkdir()
    (vault_dir / ".obsidian").mkdir()
    (vault_dir / "notes").mkdir()
    (vault_dir / "attachments").mkdir()
    (vault_dir / "attachments" / "meeting.m4a").write_bytes(b"fake m4a")
    (vault_dir / "attachments" / "standup.mp3").write_bytes(b"fake mp3")
    (vault_dir / "notes" / "memo.wav").write_bytes(b"fake wav")
    return vault_dir


@pytest.fixture
def write_note(tmp_vault: Path):
    """Return a helper that writes a note into the vault and returns its path."""

    def _write(text: str, name: str = "notes/daily.md") -> Path:
        path = tmp_vault / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


class FakeTranscriber:
    """Stands in for WhisperRunner: writes a canned transcript instead of running whisper."""

    def __init__(self, output_dir: Path, transcript: str = "Hello world", error=None) -> None:
        self.output_dir = output_dir
        self.transcript = transcript
        self.error = error
        self.calls: list[Path] = []

    def run(self, audio_path: Path) -> Path:
        self.calls.append(audio_path)
        if self.error is not None:
            raise self.error
        path = transcript_path_for(audio_path, self.output_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"\n  {self.transcript}\n\n", encoding="utf-8")
        return path


class FakePrompt:
    """Choice prompt that records what it was shown and answers with a fixed index."""

    def __init__(self, pick: int | None = 0) -> None:
        self.pick = pick
        self.shown: list[list[Choice]] = []

    def present_choices(self, items: list[Choice]) -> Any | None:
        self.shown.append(items)
        if self.pick is None:
            return None
        return items[self.pick].value


class Notices(list):
    def __call__(self, message: str) -> None:
        self.append(message)


@pytest.fixture
def fake_transcriber(tmp_path: Path) -> FakeTranscriber:
    return FakeTranscriber(tmp_path / "whisper-out")


@pytest.fixture
def notices() -> Notices:
    return Notices()
