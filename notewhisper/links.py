"""
notewhisper.links - Audio link scanning and resolution.

Finds Markdown links ``[label](clip.m4a)`` and wikilinks ``[[clip.m4a]]``
that point at audio files, and resolves them to vault files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from notewhisper.host import LinkResolver, VaultFile

AUDIO_EXTENSIONS = ("mp3", "wav", "m4a", "flac", "ogg", "aac")

_EXT_PATTERN = "|".join(AUDIO_EXTENSIONS)

# group 2: markdown link target, group 3: wikilink target
AUDIO_LINK_RE = re.compile(
    rf"\[([^\]]*)\]\(([^)]+\.(?:{_EXT_PATTERN}))\)"
    rf"|\[\[([^\]]+\.(?:{_EXT_PATTERN}))\]\]",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class LinkMatch:
    """One raw audio link in a text snapshot."""

    reference_text: str
    start_offset: int
    end_offset: int


@dataclass(frozen=True)
class ResolvedAudioReference:
    """An audio link that points at an existing vault file."""

    file: VaultFile
    start_offset: int
    end_offset: int
    reference_text: str = ""


def find_audio_link_matches(text: str) -> list[LinkMatch]:
    """Scan note text for audio links, in document order.

    Args:
        text: Full note text

    Returns:
        One LinkMatch per link; the same file linked twice yields two matches
    """
    results = []
    for match in AUDIO_LINK_RE.finditer(text):
        reference_text = match.group(2) or match.group(3)
        if not reference_text:
            continue
        results.append(
            LinkMatch(
                reference_text=reference_text,
                start_offset=match.start(),
                end_offset=match.end(),
            )
        )
    return results


def resolve_matches_to_files(
    resolver: LinkResolver,
    matches: list[LinkMatch],
    source_path: str,
) -> list[ResolvedAudioReference]:
    """Resolve link matches against the vault, dropping the ones that don't resolve."""
    results = []
    for match in matches:
        file = resolver.resolve_reference(match.reference_text, source_path)
        if file is None:
            continue
        results.append(
            ResolvedAudioReference(
                file=file,
                start_offset=match.start_offset,
                end_offset=match.end_offset,
                reference_text=match.reference_text,
            )
        )
    return results


def relocate_reference(
    text: str, reference: ResolvedAudioReference
) -> ResolvedAudioReference | None:
    """Find a reference again in text that may have been edited since the scan.

    Picks the match with the same link text whose start is nearest to the
    original one. Returns None if the link is gone.
    """
    candidates = [
        m for m in find_audio_link_matches(text) if m.reference_text == reference.reference_text
    ]
    if not candidates:
        return None
    best = min(candidates, key=lambda m: abs(m.start_offset - reference.start_offset))
    return ResolvedAudioReference(
        file=reference.file,
        start_offset=best.start_offset,
        end_offset=best.end_offset,
        reference_text=best.reference_text,
    )
