"""
notewhisper.io - Text read/write helpers, atomic file writes.

Notes are rewritten in place, so every write goes through a temp file
and a rename.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


def read_text(path: Path) -> str:
    """Read text file with UTF-8 encoding.

    Newlines are returned exactly as stored so that character offsets
    match the file contents.

    Args:
        path: Path to text file

    Returns:
        File contents as string

    Raises:
        FileNotFoundError: If file doesn't exist
        UnicodeDecodeError: If file is not valid UTF-8
    """
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    """Write text file atomically.

    Writes to a temp file next to the destination first, then renames to
    prevent a half-written note on interruption.

    Args:
        path: Destination path
        content: Text content to write
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="",
        dir=path.parent,
        delete=False,
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
    tmp_path.replace(path)
