"""
notewhisper - Transcribe audio links in Markdown notes with local Whisper.

Finds audio references in a note, runs the whisper CLI on the one you pick,
and splices the transcript back in as a callout right below the link:
link scan → resolution → selection → transcription → insertion.
"""

__version__ = "0.1.0"
