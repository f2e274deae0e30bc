"""
notewhisper.validation - Dependency checks.

Verifies that the whisper CLI and the FFmpeg it decodes audio with can be
found with the same PATH the transcription run will use.
"""

from __future__ import annotations

import re
import shutil
import subprocess

from notewhisper.config import WhisperSettings
from notewhisper.exceptions import DependencyError
from notewhisper.logging import logger
from notewhisper.transcribe.whisper import build_whisper_env

FFMPEG_VERSION_RE = re.compile(r"ffmpeg version (\S+)")


def check_whisper(settings: WhisperSettings) -> dict[str, str]:
    """Check that the whisper binary can be found and started.

    Returns:
        Dict with 'whisper_path'

    Raises:
        DependencyError: If whisper is not found or fails to start
    """
    env = build_whisper_env(settings)
    whisper_path = shutil.which(settings.binary_path, path=env["PATH"])
    if not whisper_path:
        raise DependencyError(
            "whisper",
            f"'{settings.binary_path}' not found in PATH",
            "Install with: pip install openai-whisper, or set whisper_binary_path",
        )

    try:
        proc = subprocess.run(
            [whisper_path, "--help"],
            capture_output=True,
            text=True,
            timeout=30,
            env=env,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise DependencyError("whisper", f"Could not run {whisper_path}: {e}") from e
    if proc.returncode != 0:
        raise DependencyError("whisper", f"{whisper_path} --help exited with {proc.returncode}")

    return {"whisper_path": whisper_path}


def check_ffmpeg(settings: WhisperSettings) -> dict[str, str]:
    """Check that whisper will find FFmpeg to decode audio with.

    The version is informational; an unparseable banner reports "unknown".

    Returns:
        Dict with 'ffmpeg_path' and 'ffmpeg_version'

    Raises:
        DependencyError: If FFmpeg is not on whisper's PATH
    """
    env = build_whisper_env(settings)
    ffmpeg_path = shutil.which("ffmpeg", path=env["PATH"])
    if not ffmpeg_path:
        raise DependencyError(
            "ffmpeg",
            "FFmpeg not found on whisper's PATH",
            "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux), "
            "or add its folder to extra_path_dirs",
        )

    version = "unknown"
    try:
        proc = subprocess.run(
            [ffmpeg_path, "-version"],
            capture_output=True,
            text=True,
            timeout=5,
            env=env,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("ffmpeg -version failed: %s", e)
    else:
        match = FFMPEG_VERSION_RE.match(proc.stdout)
        if match:
            version = match.group(1)

    return {"ffmpeg_path": ffmpeg_path, "ffmpeg_version": version}
