"""Tests for notewhisper.config module."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from notewhisper.config import (
    CONFIG_FILENAME,
    NoteWhisperConfig,
    create_default_config,
    find_vault_root,
    load_config,
    merge_config,
    write_config,
)
from notewhisper.exceptions import ConfigError


class TestNoteWhisperConfig:
    def test_defaults(self) -> None:
        config = NoteWhisperConfig()
        assert config.whisper_model == "base"
        assert config.whisper_binary_path == ""
        assert config.output_dir == Path(tempfile.gettempdir())
        assert config.extra_path_dirs == ["/opt/homebrew/bin"]
        assert config.timeout_seconds is None

    def test_invalid_model_raises(self) -> None:
        with pytest.raises(ValueError):
            NoteWhisperConfig(whisper_model="gigantic")

    def test_english_only_model(self) -> None:
        assert NoteWhisperConfig(whisper_model="medium.en").whisper_model == "medium.en"

    def test_non_positive_timeout_raises(self) -> None:
        with pytest.raises(ValueError):
            NoteWhisperConfig(timeout_seconds=0)

    def test_settings_default_binary_from_path(self) -> None:
        settings = NoteWhisperConfig(whisper_binary_path="  ").whisper_settings()
        assert settings.binary_path == "whisper"

    def test_settings_carry_values(self, tmp_path: Path) -> None:
        config = NoteWhisperConfig(
            whisper_model="small",
            whisper_binary_path="/usr/local/bin/whisper",
            output_dir=tmp_path,
            extra_path_dirs=[],
            timeout_seconds=60,
        )

        settings = config.whisper_settings()

        assert settings.model_name == "small"
        assert settings.binary_path == "/usr/local/bin/whisper"
        assert settings.output_dir == tmp_path
        assert settings.extra_path_dirs == ()
        assert settings.timeout_seconds == 60


class TestMergeConfig:
    def test_overrides_win(self) -> None:
        merged = merge_config({"whisper_model": "base"}, {"whisper_model": "medium"})
        assert merged["whisper_model"] == "medium"

    def test_none_overrides_ignored(self) -> None:
        merged = merge_config({"whisper_model": "tiny"}, {"whisper_model": None})
        assert merged["whisper_model"] == "tiny"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path) == NoteWhisperConfig()

    def test_load_from_file(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            "whisper_model: medium\nwhisper_binary_path: /opt/homebrew/bin/whisper\n"
        )

        config = load_config(tmp_path)

        assert config.whisper_model == "medium"
        assert config.whisper_binary_path == "/opt/homebrew/bin/whisper"

    def test_overrides_applied(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("whisper_model: medium\n")
        config = load_config(tmp_path, {"whisper_model": "tiny", "output_dir": None})
        assert config.whisper_model == "tiny"

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("whisper_model: enormous\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_yaml_raises_config_error(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("whisper_model: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_non_mapping_raises_config_error(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_round_trip_default_config(self, tmp_path: Path) -> None:
        write_config(create_default_config(), tmp_path / CONFIG_FILENAME)
        assert load_config(tmp_path) == NoteWhisperConfig()


class TestFindVaultRoot:
    def test_finds_obsidian_folder(self, tmp_vault: Path, write_note) -> None:
        note = write_note("x", "notes/deep/inner.md")
        assert find_vault_root(note) == tmp_vault.resolve()

    def test_finds_config_file(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("{}\n")
        (tmp_path / "sub").mkdir()
        note = tmp_path / "sub" / "n.md"
        note.write_text("x")
        assert find_vault_root(note) == tmp_path.resolve()

    def test_falls_back_to_note_folder(self, tmp_path: Path) -> None:
        folder = tmp_path / "loose"
        folder.mkdir()
        note = folder / "n.md"
        note.write_text("x")
        assert find_vault_root(note) in {folder.resolve(), *folder.resolve().parents}
