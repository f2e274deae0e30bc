"""
notewhisper.host - Ports for the editor-side collaborators.

The pipeline only talks to these protocols, so it can run against a
file-backed note and console prompt in the CLI, or against fakes in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, NamedTuple, Protocol


@dataclass(frozen=True)
class VaultFile:
    """A file inside a vault, addressed by its vault-relative path."""

    path: str

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def basename(self) -> str:
        return PurePosixPath(self.path).stem

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix.lstrip(".").lower()

    @property
    def parent(self) -> str:
        parent = str(PurePosixPath(self.path).parent)
        return "" if parent == "." else parent


class Choice(NamedTuple):
    label: str
    value: Any


class Document(Protocol):
    """An open note the pipeline reads and inserts into."""

    def get_text(self) -> str: ...

    def get_document_path(self) -> str: ...

    def insert_at(self, line: int, col: int, text: str) -> None: ...


class LinkResolver(Protocol):
    def resolve_reference(self, reference_text: str, relative_to_path: str) -> VaultFile | None:
        """Return the vault file a link points at, or None."""
        ...


class Vault(LinkResolver, Protocol):
    """A link resolver that can also locate files on disk.

    ``base_path`` is None when the vault is not stored on a local file system.
    """

    @property
    def base_path(self) -> Path | None: ...

    def get_full_path(self, file: VaultFile) -> Path: ...


class ChoicePrompt(Protocol):
    def present_choices(self, items: list[Choice]) -> Any | None:
        """Block until the user picks one item's value, or return None on cancel."""
        ...


class Notifier(Protocol):
    def __call__(self, message: str) -> None: ...
