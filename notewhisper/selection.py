"""
notewhisper.selection - Pick the audio link to transcribe.
"""

from __future__ import annotations

from notewhisper.exceptions import NoAudioLinksError
from notewhisper.host import Choice, ChoicePrompt
from notewhisper.links import ResolvedAudioReference


def select_audio_reference(
    references: list[ResolvedAudioReference],
    prompt: ChoicePrompt,
) -> ResolvedAudioReference | None:
    """Choose one reference, asking the user only when there are several.

    Args:
        references: Resolved audio links in document order
        prompt: Interactive chooser, used only for two or more references

    Returns:
        The chosen reference, or None if the user cancelled

    Raises:
        NoAudioLinksError: If there are no references at all
    """
    if not references:
        raise NoAudioLinksError("No audio links found in this note.")
    if len(references) == 1:
        return references[0]
    choices = [Choice(label=ref.file.path, value=ref) for ref in references]
    return prompt.present_choices(choices)
