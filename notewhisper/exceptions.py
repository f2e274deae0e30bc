"""
notewhisper.exceptions - Custom exception classes.

All notewhisper-specific exceptions inherit from NoteWhisperError.
"""


class NoteWhisperError(Exception):
    """Base exception for all notewhisper errors."""

    pass


class ConfigError(NoteWhisperError):
    """Configuration loading or validation error."""

    pass


class NoteError(NoteWhisperError):
    """Note missing, unreadable, or not a Markdown file."""

    pass


class NoAudioLinksError(NoteWhisperError):
    """The note contains no audio link that resolves to a vault file."""

    pass


class TranscriptionError(NoteWhisperError):
    """Transcription error."""

    pass


class WhisperProcessError(TranscriptionError):
    """The whisper process could not be started or exited non-zero."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ):
        self.command = command or []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)


class TranscriptionCancelled(TranscriptionError):
    """The user aborted a running transcription."""

    pass


class TranscriptReadError(NoteWhisperError):
    """Transcript file missing or unreadable."""

    pass


class DependencyError(NoteWhisperError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
