"""
notewhisper.insert - Offset/position translation and transcript insertion.
"""

from __future__ import annotations

from typing import NamedTuple

from notewhisper.host import Document

CALLOUT_HEADER = ">[!note] Transcription"


class Position(NamedTuple):
    """Zero-based line and column in a document."""

    line: int
    ch: int


def offset_to_position(text: str, offset: int) -> Position:
    """Convert a character offset into a line/column position."""
    offset = max(0, min(offset, len(text)))
    before = text[:offset]
    line = before.count("\n")
    return Position(line, offset - (before.rfind("\n") + 1))


def position_to_offset(text: str, position: Position) -> int:
    """Convert a line/column position into a character offset.

    Positions past the end are clamped: a line beyond the last maps to the
    end of the text, a column beyond the line end maps to the line end.
    """
    line, ch = position
    if line < 0:
        return 0
    start = 0
    for _ in range(line):
        newline = text.find("\n", start)
        if newline == -1:
            return len(text)
        start = newline + 1
    line_end = text.find("\n", start)
    if line_end == -1:
        line_end = len(text)
    return start + max(0, min(ch, line_end - start))


def insertion_line(text: str, end_offset: int) -> int:
    """Line right after the one holding ``end_offset``.

    >>> insertion_line("abc\\ndef\\nghi", 7)
    2
    """
    return offset_to_position(text, end_offset).line + 1


def format_transcript_block(transcript: str) -> str:
    return f"\n{CALLOUT_HEADER}\n{transcript}\n"


def insert_transcript_below(document: Document, end_offset: int, transcript: str) -> Position:
    """Insert a transcription callout on the line after a link.

    The link itself is left untouched. Calling this twice inserts two blocks.

    Args:
        document: Note to insert into
        end_offset: Offset just past the link in the current note text
        transcript: Transcript text

    Returns:
        Position the block was inserted at
    """
    content = document.get_text()
    position = Position(insertion_line(content, end_offset), 0)
    document.insert_at(position.line, position.ch, format_transcript_block(transcript))
    return position
