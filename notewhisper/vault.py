"""
notewhisper.vault - Local vault file index and link resolution.

Resolves link text the way note apps do for "first link destination":
relative to the linking note, then vault-absolute, then by shortest
matching path anywhere in the vault.
"""

from __future__ import annotations

import posixpath
from pathlib import Path
from urllib.parse import unquote

from notewhisper.host import VaultFile
from notewhisper.logging import logger


def normalize_link_path(reference_text: str) -> str:
    """Strip subpaths, angle brackets and percent-escapes from link text."""
    link = reference_text.strip()
    if link.startswith("<") and link.endswith(">"):
        link = link[1:-1].strip()
    link = link.split("#", 1)[0]
    return unquote(link).replace("\\", "/")


class FileSystemVault:
    """A vault rooted at a directory on the local file system."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()
        self._files: list[VaultFile] | None = None

    @property
    def base_path(self) -> Path | None:
        return self.root

    def get_full_path(self, file: VaultFile) -> Path:
        return self.root.joinpath(*file.path.split("/"))

    def get_files(self) -> list[VaultFile]:
        """All files in the vault, skipping hidden files and folders."""
        if self._files is None:
            files = []
            for path in sorted(self.root.rglob("*")):
                rel = path.relative_to(self.root)
                if any(part.startswith(".") for part in rel.parts):
                    continue
                if path.is_file():
                    files.append(VaultFile(rel.as_posix()))
            self._files = files
            logger.debug("Indexed %d files in vault %s", len(files), self.root)
        return self._files

    def get_file(self, vault_path: str) -> VaultFile | None:
        """Look up an existing file by its vault-relative path."""
        normalized = posixpath.normpath(vault_path.lstrip("/"))
        if normalized in ("", ".") or normalized == ".." or normalized.startswith("../"):
            return None
        if self.root.joinpath(*normalized.split("/")).is_file():
            return VaultFile(normalized)
        return None

    def resolve_reference(self, reference_text: str, relative_to_path: str) -> VaultFile | None:
        """Resolve link text from the note at ``relative_to_path``.

        Args:
            reference_text: Link target as written in the note
            relative_to_path: Vault-relative path of the linking note

        Returns:
            The linked file, or None if nothing in the vault matches
        """
        link = normalize_link_path(reference_text)
        if not link:
            return None

        if link.startswith("/"):
            return self.get_file(link)

        source_dir = posixpath.dirname(relative_to_path)
        if source_dir:
            found = self.get_file(posixpath.join(source_dir, link))
            if found:
                return found

        found = self.get_file(link)
        if found:
            return found

        return self._match_shortest_path(link, source_dir)

    def _match_shortest_path(self, link: str, source_dir: str) -> VaultFile | None:
        needle = posixpath.normpath(link).lower()
        if needle == ".." or needle.startswith("../"):
            return None
        candidates = [
            f
            for f in self.get_files()
            if f.path.lower() == needle or f.path.lower().endswith("/" + needle)
        ]
        if not candidates:
            return None
        return min(
            candidates,
            key=lambda f: (f.parent != source_dir, f.path.count("/"), len(f.path), f.path),
        )
