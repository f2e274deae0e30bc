"""
notewhisper.transcribe.whisper - whisper CLI runner.

Builds the whisper command line, runs it as a child process, and reads the
plain-text transcript it writes. Only the exit status decides success;
stdout and stderr are logged, never parsed.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from notewhisper.config import WhisperSettings
from notewhisper.exceptions import (
    TranscriptionCancelled,
    TranscriptReadError,
    WhisperProcessError,
)
from notewhisper.io import read_text
from notewhisper.logging import logger
from notewhisper.transcribe.naming import transcript_path_for


def build_whisper_command(audio_path: Path, settings: WhisperSettings) -> list[str]:
    """Build the whisper argument list for one audio file."""
    return [
        settings.binary_path,
        str(audio_path),
        "--model",
        settings.model_name,
        "--output_format",
        "txt",
        "--output_dir",
        str(settings.output_dir),
    ]


def build_whisper_env(
    settings: WhisperSettings, base_env: dict[str, str] | None = None
) -> dict[str, str]:
    """Environment for the whisper process.

    PATH gets the binary's own folder (when a path was configured) and the
    extra search folders in front, so whisper and the ffmpeg it calls are
    found even when the caller's PATH is minimal.
    """
    env = dict(os.environ if base_env is None else base_env)
    dirs: list[str] = []
    binary_dir = os.path.dirname(settings.binary_path)
    if binary_dir:
        dirs.append(binary_dir)
    for d in settings.extra_path_dirs:
        if d and d not in dirs:
            dirs.append(d)
    current = env.get("PATH", "")
    if current:
        dirs.append(current)
    env["PATH"] = os.pathsep.join(dirs)
    return env


class WhisperJob:
    """A running whisper process that can be waited on or killed."""

    def __init__(self, command: list[str], env: dict[str, str]) -> None:
        self.command = command
        self.env = env
        self.process: subprocess.Popen[str] | None = None

    @property
    def running(self) -> bool:
        return self.process is not None and self.process.poll() is None

    def _spawn(self) -> subprocess.Popen[str]:
        logger.info("Running whisper: %s", " ".join(self.command))
        try:
            return subprocess.Popen(
                self.command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                env=self.env,
            )
        except OSError as e:
            raise WhisperProcessError(
                f"Could not start whisper ({self.command[0]}): {e}",
                command=self.command,
            ) from e

    def start(self) -> WhisperJob:
        self.process = self._spawn()
        return self

    def wait(self, timeout: float | None = None) -> tuple[str, str]:
        """Block until whisper exits, starting it first if needed.

        Returns:
            Captured (stdout, stderr)

        Raises:
            WhisperProcessError: On non-zero exit or timeout
            TranscriptionCancelled: If interrupted with Ctrl-C
        """
        process = self.process
        if process is None:
            process = self.process = self._spawn()

        try:
            stdout, stderr = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            self.cancel()
            raise WhisperProcessError(
                f"whisper did not finish within {timeout} seconds",
                command=self.command,
            ) from e
        except KeyboardInterrupt as e:
            self.cancel()
            raise TranscriptionCancelled("Transcription cancelled") from e

        if stdout:
            logger.info("whisper stdout:\n%s", stdout)
        if stderr:
            logger.warning("whisper stderr:\n%s", stderr)

        if process.returncode != 0:
            raise WhisperProcessError(
                f"whisper exited with status {process.returncode}",
                command=self.command,
                returncode=process.returncode,
                stdout=stdout or "",
                stderr=stderr or "",
            )
        return stdout or "", stderr or ""

    def cancel(self) -> None:
        """Kill the child process if it is still running."""
        process = self.process
        if process is None or process.poll() is not None:
            return
        logger.info("Killing whisper process %s", process.pid)
        process.kill()
        process.communicate()


class WhisperRunner:
    """Runs whisper with fixed settings and reads back transcripts."""

    def __init__(self, settings: WhisperSettings) -> None:
        self.settings = settings

    def transcript_path(self, audio_path: Path) -> Path:
        return transcript_path_for(audio_path, self.settings.output_dir)

    def start(self, audio_path: Path) -> WhisperJob:
        """Launch whisper on ``audio_path`` without waiting.

        Raises:
            WhisperProcessError: If the output folder can't be created or
                the process can't be started
        """
        command = build_whisper_command(audio_path, self.settings)
        try:
            self.settings.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WhisperProcessError(
                f"Could not create output folder {self.settings.output_dir}: {e}",
                command=command,
            ) from e
        return WhisperJob(command, build_whisper_env(self.settings)).start()

    def run(self, audio_path: Path) -> Path:
        """Transcribe ``audio_path`` and return where the transcript should be."""
        self.start(audio_path).wait(timeout=self.settings.timeout_seconds)
        return self.transcript_path(audio_path)


def read_transcript(path: Path) -> str:
    """Read a transcript file, trimmed of surrounding whitespace.

    Raises:
        TranscriptReadError: If the file is missing or unreadable
    """
    try:
        return read_text(path).strip()
    except (OSError, UnicodeDecodeError) as e:
        raise TranscriptReadError(f"Could not read transcript {path}: {e}") from e
