"""
notewhisper.pipeline - Transcribe-audio-link-in-note pipeline.

Stages run strictly in order and any failure ends the run with a notice:
scan links → resolve → select → run whisper → read transcript → insert.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from notewhisper.exceptions import (
    NoAudioLinksError,
    NoteError,
    TranscriptionCancelled,
    TranscriptionError,
    TranscriptReadError,
    WhisperProcessError,
)
from notewhisper.host import ChoicePrompt, Document, Notifier, Vault
from notewhisper.insert import Position, insert_transcript_below
from notewhisper.links import (
    ResolvedAudioReference,
    find_audio_link_matches,
    relocate_reference,
    resolve_matches_to_files,
)
from notewhisper.logging import logger
from notewhisper.selection import select_audio_reference
from notewhisper.transcribe.whisper import read_transcript

NOTICE_NOT_LOCAL = "Your vault does not appear to use a local file system."
NOTICE_WHISPER_FAILED = "Error running Whisper. See the log for details."
NOTICE_CANCELLED = "Transcription cancelled."
NOTICE_READ_FAILED = "Could not read the transcript file."
NOTICE_LINK_GONE = "The audio link is no longer in the note. Transcript not inserted."
NOTICE_NOTE_UNREADABLE = "Could not read the note. Transcript not inserted."
NOTICE_INSERTED = "Transcription inserted."


class Outcome(str, Enum):
    INSERTED = "inserted"
    NO_LINKS = "no_links"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class PipelineResult:
    status: Outcome
    reference: ResolvedAudioReference | None = None
    transcript: str | None = None
    position: Position | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != Outcome.FAILED


class Transcriber(Protocol):
    def run(self, audio_path: Path) -> Path:
        """Transcribe an audio file and return the transcript's path."""
        ...


class TranscribePipeline:
    """One-shot transcription of a single audio link in a note.

    Build a new pipeline per command; it keeps no state between runs.
    """

    def __init__(
        self,
        vault: Vault,
        transcriber: Transcriber,
        prompt: ChoicePrompt,
        notify: Notifier,
        progress: Callable[[str], AbstractContextManager] | None = None,
    ) -> None:
        self.vault = vault
        self.transcriber = transcriber
        self.prompt = prompt
        self.notify = notify
        self.progress = progress or (lambda message: nullcontext())

    def run(self, document: Document) -> PipelineResult:
        text = document.get_text()
        matches = find_audio_link_matches(text)
        references = resolve_matches_to_files(self.vault, matches, document.get_document_path())
        logger.debug(
            "Found %d audio link(s), %d resolved in %s",
            len(matches),
            len(references),
            document.get_document_path(),
        )

        try:
            selected = select_audio_reference(references, self.prompt)
        except NoAudioLinksError as e:
            self.notify(str(e))
            return PipelineResult(Outcome.NO_LINKS)
        if selected is None:
            return PipelineResult(Outcome.CANCELLED)

        self.notify(f"Transcribing: {selected.file.path} ...")

        if self.vault.base_path is None:
            self.notify(NOTICE_NOT_LOCAL)
            return PipelineResult(Outcome.FAILED, selected, error=NOTICE_NOT_LOCAL)
        audio_path = self.vault.get_full_path(selected.file)

        try:
            with self.progress(f"Running Whisper on {selected.file.name}..."):
                transcript_path = self.transcriber.run(audio_path)
        except TranscriptionCancelled:
            self.notify(NOTICE_CANCELLED)
            return PipelineResult(Outcome.CANCELLED, selected)
        except WhisperProcessError as e:
            logger.error(
                "Error running Whisper: %s\n  command: %s\n  exit status: %s\n  stderr: %s",
                e,
                " ".join(e.command),
                e.returncode,
                e.stderr.strip(),
            )
            self.notify(NOTICE_WHISPER_FAILED)
            return PipelineResult(Outcome.FAILED, selected, error=str(e))
        except TranscriptionError as e:
            logger.error("Error running Whisper: %s", e)
            self.notify(NOTICE_WHISPER_FAILED)
            return PipelineResult(Outcome.FAILED, selected, error=str(e))

        try:
            transcript = read_transcript(transcript_path)
        except TranscriptReadError as e:
            logger.error("%s", e)
            self.notify(NOTICE_READ_FAILED)
            return PipelineResult(Outcome.FAILED, selected, error=str(e))

        try:
            live_text = document.get_text()
        except NoteError as e:
            logger.error("%s", e)
            self.notify(NOTICE_NOTE_UNREADABLE)
            return PipelineResult(Outcome.FAILED, selected, transcript, error=str(e))

        live = relocate_reference(live_text, selected)
        if live is None:
            logger.error(
                "Link %r disappeared from the note during transcription",
                selected.reference_text,
            )
            self.notify(NOTICE_LINK_GONE)
            return PipelineResult(Outcome.FAILED, selected, transcript, error=NOTICE_LINK_GONE)

        position = insert_transcript_below(document, live.end_offset, transcript)
        self.notify(NOTICE_INSERTED)
        return PipelineResult(Outcome.INSERTED, live, transcript, position)
