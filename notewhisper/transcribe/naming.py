"""
notewhisper.transcribe.naming - Transcript file naming policy.

whisper names its output after the input file: ``meeting.m4a`` becomes
``<output_dir>/meeting.txt``. Both the runner and the reader go through
these functions.
"""

from __future__ import annotations

import re
from pathlib import Path

from notewhisper.links import AUDIO_EXTENSIONS

TRANSCRIPT_SUFFIX = ".txt"

_AUDIO_SUFFIX_RE = re.compile(rf"\.(?:{'|'.join(AUDIO_EXTENSIONS)})$", re.IGNORECASE)


def transcript_name_for(audio_path: Path | str) -> str:
    """File name whisper gives the transcript of ``audio_path``."""
    base_name = Path(audio_path).name
    return _AUDIO_SUFFIX_RE.sub("", base_name) + TRANSCRIPT_SUFFIX


def transcript_path_for(audio_path: Path | str, output_dir: Path) -> Path:
    """Where whisper writes the transcript of ``audio_path``."""
    return output_dir / transcript_name_for(audio_path)
