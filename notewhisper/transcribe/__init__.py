"""
notewhisper.transcribe - Whisper CLI transcription.

Runs the external whisper binary on one audio file and reads back the
plain-text transcript it leaves in the output directory.
"""

from __future__ import annotations
