"""
notewhisper.config - YAML config loading, CLI overrides, validation.

Handles locating the vault root, loading notewhisper.yaml from it, applying
command-line overrides, and validating all parameters.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from notewhisper.exceptions import ConfigError

CONFIG_FILENAME = "notewhisper.yaml"
VAULT_MARKER_DIR = ".obsidian"

WHISPER_MODELS = {
    "tiny",
    "tiny.en",
    "base",
    "base.en",
    "small",
    "small.en",
    "medium",
    "medium.en",
    "large",
    "large-v1",
    "large-v2",
    "large-v3",
    "large-v3-turbo",
    "turbo",
}

DEFAULT_BINARY = "whisper"


class NoteWhisperConfig(BaseModel):
    """Resolved configuration for transcribing notes in a vault."""

    whisper_model: str = "base"
    whisper_binary_path: str = ""
    output_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    extra_path_dirs: list[str] = Field(default_factory=lambda: ["/opt/homebrew/bin"])
    timeout_seconds: float | None = Field(default=None, gt=0.0)

    @field_validator("whisper_model")
    @classmethod
    def validate_whisper_model(cls, v: str) -> str:
        if v not in WHISPER_MODELS:
            raise ValueError(f"whisper_model must be one of: {sorted(WHISPER_MODELS)}")
        return v

    @field_validator("whisper_binary_path")
    @classmethod
    def strip_binary_path(cls, v: str) -> str:
        return v.strip()

    def whisper_settings(self) -> WhisperSettings:
        """Build the settings struct handed to the whisper runner."""
        return WhisperSettings(
            model_name=self.whisper_model,
            binary_path=self.whisper_binary_path or DEFAULT_BINARY,
            output_dir=self.output_dir,
            extra_path_dirs=tuple(self.extra_path_dirs),
            timeout_seconds=self.timeout_seconds,
        )


@dataclass(frozen=True)
class WhisperSettings:
    """Everything the whisper runner and transcript reader need."""

    model_name: str = "base"
    binary_path: str = DEFAULT_BINARY
    output_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    extra_path_dirs: tuple[str, ...] = ()
    timeout_seconds: float | None = None


def find_vault_root(start: Path) -> Path:
    """Find the vault containing ``start``.

    Walks up looking for an ``.obsidian`` directory or a notewhisper.yaml.
    Falls back to the folder of ``start`` when neither is found.
    """
    start = start.resolve()
    origin = start if start.is_dir() else start.parent
    current = origin
    while True:
        if (current / VAULT_MARKER_DIR).is_dir() or (current / CONFIG_FILENAME).is_file():
            return current
        if current == current.parent:
            return origin
        current = current.parent


def merge_config(file_config: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge CLI overrides onto file config. Overrides that are None are ignored."""
    merged = file_config.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def load_config(vault_root: Path, overrides: dict[str, Any] | None = None) -> NoteWhisperConfig:
    """Load and validate configuration for a vault.

    A missing config file is not an error; defaults apply.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation
    """
    config_file = vault_root / CONFIG_FILENAME
    raw_config: dict[str, Any] = {}
    if config_file.exists():
        try:
            with open(config_file, encoding="utf-8") as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
        if not isinstance(raw_config, dict):
            raise ConfigError(f"{config_file} must contain a mapping")

    merged = merge_config(raw_config, overrides or {})
    try:
        return NoteWhisperConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def create_default_config() -> dict[str, Any]:
    """Create a default config for a new vault."""
    defaults = NoteWhisperConfig()
    return {
        "whisper_model": defaults.whisper_model,
        "whisper_binary_path": defaults.whisper_binary_path,
        "output_dir": str(defaults.output_dir),
        "extra_path_dirs": list(defaults.extra_path_dirs),
        "timeout_seconds": defaults.timeout_seconds,
    }


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
