"""Tests for notewhisper.insert module."""

from __future__ import annotations

from notewhisper.insert import (
    CALLOUT_HEADER,
    Position,
    format_transcript_block,
    insert_transcript_below,
    insertion_line,
    offset_to_position,
    position_to_offset,
)


class BufferDocument:
    """In-memory document with editor-style clamped insertion."""

    def __init__(self, text: str, path: str = "note.md") -> None:
        self.text = text
        self.path = path

    def get_text(self) -> str:
        return self.text

    def get_document_path(self) -> str:
        return self.path

    def insert_at(self, line: int, col: int, text: str) -> None:
        offset = position_to_offset(self.text, Position(line, col))
        self.text = self.text[:offset] + text + self.text[offset:]


class TestOffsetToPosition:
    def test_start(self) -> None:
        assert offset_to_position("abc\ndef", 0) == Position(0, 0)

    def test_second_line(self) -> None:
        assert offset_to_position("abc\ndef\nghi", 7) == Position(1, 3)

    def test_right_after_newline(self) -> None:
        assert offset_to_position("abc\ndef", 4) == Position(1, 0)

    def test_clamped_past_end(self) -> None:
        assert offset_to_position("abc", 99) == Position(0, 3)


class TestPositionToOffset:
    def test_round_trip_line_starts(self) -> None:
        text = "abc\ndef\nghi"
        assert position_to_offset(text, Position(0, 0)) == 0
        assert position_to_offset(text, Position(1, 0)) == 4
        assert position_to_offset(text, Position(2, 1)) == 9

    def test_line_past_end_clamps_to_end(self) -> None:
        assert position_to_offset("abc\ndef", Position(5, 0)) == 7

    def test_column_past_line_end_clamps(self) -> None:
        assert position_to_offset("abc\ndef", Position(0, 10)) == 3

    def test_line_after_trailing_newline(self) -> None:
        assert position_to_offset("abc\n", Position(1, 0)) == 4


class TestInsertionLine:
    def test_end_of_middle_line(self) -> None:
        assert insertion_line("abc\ndef\nghi", 7) == 2

    def test_first_line(self) -> None:
        assert insertion_line("See [[a.mp3]] here", 13) == 1


class TestFormatTranscriptBlock:
    def test_block_layout(self) -> None:
        assert format_transcript_block("Hello world") == f"\n{CALLOUT_HEADER}\nHello world\n"
        assert CALLOUT_HEADER == ">[!note] Transcription"


class TestInsertTranscriptBelow:
    def test_single_line_note(self) -> None:
        doc = BufferDocument("See [[meeting.m4a]] for notes.")

        position = insert_transcript_below(doc, 19, "Hello world")

        assert position == Position(1, 0)
        lines = doc.text.split("\n")
        assert lines[0] == "See [[meeting.m4a]] for notes."
        assert lines[1] == ">[!note] Transcription"
        assert lines[2] == "Hello world"

    def test_inserts_before_following_line(self) -> None:
        doc = BufferDocument("Intro\nLink [[a.mp3]]\nOutro\n")

        insert_transcript_below(doc, 20, "Text")

        assert doc.text == "Intro\nLink [[a.mp3]]\n\n>[!note] Transcription\nText\nOutro\n"

    def test_reference_left_untouched(self) -> None:
        original = "A [b](b.wav) c\nnext"
        doc = BufferDocument(original)

        insert_transcript_below(doc, 12, "T")

        assert doc.text.startswith("A [b](b.wav) c\n")
        assert doc.text.endswith("next")

    def test_second_run_adds_second_block(self) -> None:
        doc = BufferDocument("See [[a.mp3]]\n")

        insert_transcript_below(doc, 13, "Hi")
        insert_transcript_below(doc, 13, "Hi")

        assert doc.text.count(CALLOUT_HEADER) == 2
