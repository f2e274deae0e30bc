"""
notewhisper.note - File-backed Markdown note.

Holds the note text in memory, applies editor-style insertions, and writes
the result back atomically.
"""

from __future__ import annotations

from pathlib import Path

from notewhisper.exceptions import NoteError
from notewhisper.insert import Position, position_to_offset
from notewhisper.io import read_text, write_text

NOTE_SUFFIXES = {".md", ".markdown"}


class Note:
    """A Markdown note inside a vault."""

    def __init__(self, path: Path, vault_path: str) -> None:
        self.path = path
        self.vault_path = vault_path
        self._text: str | None = None
        self.dirty = False

    @classmethod
    def open(cls, path: Path, vault_root: Path) -> Note:
        """Open a note for transcription.

        Raises:
            NoteError: If the file is missing, not Markdown, or outside the vault
        """
        path = path.expanduser().resolve()
        if not path.is_file():
            raise NoteError(f"Note not found: {path}")
        if path.suffix.lower() not in NOTE_SUFFIXES:
            raise NoteError(f"Not a Markdown note: {path.name}")
        try:
            vault_path = path.relative_to(vault_root.resolve()).as_posix()
        except ValueError as e:
            raise NoteError(f"{path} is not inside vault {vault_root}") from e
        note = cls(path, vault_path)
        note.reload()
        return note

    def reload(self) -> str:
        """Re-read the note from disk, discarding unsaved insertions."""
        try:
            self._text = read_text(self.path)
        except (OSError, UnicodeDecodeError) as e:
            raise NoteError(f"Cannot read note {self.path}: {e}") from e
        self.dirty = False
        return self._text

    def get_text(self) -> str:
        """Current note text.

        Until something is inserted the text is re-read from disk on every
        call, so edits made elsewhere while whisper runs are picked up.
        """
        if self._text is None or not self.dirty:
            return self.reload()
        return self._text

    def get_document_path(self) -> str:
        return self.vault_path

    def insert_at(self, line: int, col: int, text: str) -> None:
        content = self.get_text()
        offset = position_to_offset(content, Position(line, col))
        self._text = content[:offset] + text + content[offset:]
        self.dirty = True

    def save(self) -> None:
        if self._text is None or not self.dirty:
            return
        write_text(self.path, self._text)
        self.dirty = False
