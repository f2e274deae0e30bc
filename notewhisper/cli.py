"""
notewhisper.cli - Typer CLI entry point.

Provides the transcribe command plus helpers for inspecting links,
writing a config file, and checking dependencies.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from notewhisper import __version__
from notewhisper.config import (
    CONFIG_FILENAME,
    NoteWhisperConfig,
    create_default_config,
    find_vault_root,
    load_config,
    write_config,
)
from notewhisper.exceptions import ConfigError, NoteError
from notewhisper.logging import configure_logging
from notewhisper.note import Note
from notewhisper.vault import FileSystemVault

app = typer.Typer(
    name="notewhisper",
    help="Transcribe audio links in Markdown notes with a local Whisper install.\n\n"
    "Finds [label](clip.m4a) and [[clip.m4a]] links in a note, runs whisper on "
    "the one you pick, and inserts the transcript below the link.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"notewhisper {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """notewhisper - transcribe audio links in notes."""
    pass


def open_note(note: Path, vault: Path | None) -> tuple[Note, FileSystemVault]:
    """Open a note and the vault it belongs to, exiting on error."""
    vault_root = vault.expanduser().resolve() if vault else find_vault_root(note)
    try:
        opened = Note.open(note, vault_root)
    except NoteError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    return opened, FileSystemVault(vault_root)


def load_vault_config(vault_root: Path, **overrides) -> NoteWhisperConfig:
    try:
        return load_config(vault_root, overrides)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command("transcribe")
def transcribe(
    note: Path = typer.Argument(..., help="Markdown note containing audio links"),
    vault: Path | None = typer.Option(
        None, "--vault", "-V", help="Vault root (default: nearest folder with .obsidian)"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Whisper model size"),
    binary: str | None = typer.Option(None, "--binary", "-b", help="Path to the whisper CLI"),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Folder whisper writes transcripts to"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Append whisper output and errors to this file"
    ),
) -> None:
    """Transcribe Audio Link in Note.

    Runs whisper on an audio file linked from NOTE and inserts the transcript
    as a callout on the line below the link.
    """
    configure_logging(verbose, log_file)

    from notewhisper.pipeline import Outcome, TranscribePipeline
    from notewhisper.prompt import ConsoleChoicePrompt, ConsoleNotifier
    from notewhisper.transcribe.whisper import WhisperRunner

    opened, file_vault = open_note(note, vault)
    config = load_vault_config(
        file_vault.root,
        whisper_model=model,
        whisper_binary_path=binary,
        output_dir=output_dir,
    )

    pipeline = TranscribePipeline(
        vault=file_vault,
        transcriber=WhisperRunner(config.whisper_settings()),
        prompt=ConsoleChoicePrompt(console),
        notify=ConsoleNotifier(console),
        progress=lambda message: console.status(escape(message)),
    )
    result = pipeline.run(opened)

    if result.status == Outcome.INSERTED:
        opened.save()
    if not result.ok:
        raise typer.Exit(1)


@app.command("links")
def list_links(
    note: Path = typer.Argument(..., help="Markdown note to scan"),
    vault: Path | None = typer.Option(None, "--vault", "-V", help="Vault root"),
) -> None:
    """List the audio links in a note and the files they resolve to."""
    from notewhisper.links import find_audio_link_matches

    opened, file_vault = open_note(note, vault)
    text = opened.get_text()
    matches = find_audio_link_matches(text)

    if not matches:
        console.print("[yellow]No audio links found in this note.[/yellow]")
        raise typer.Exit(0)

    from notewhisper.insert import offset_to_position

    table = Table(title=f"Audio links in {escape(opened.get_document_path())}")
    table.add_column("Line", style="cyan", justify="right")
    table.add_column("Link", style="green")
    table.add_column("Resolves to", style="yellow")

    for match in matches:
        line = offset_to_position(text, match.start_offset).line + 1
        file = file_vault.resolve_reference(match.reference_text, opened.get_document_path())
        target = escape(file.path) if file else "[red]unresolved[/red]"
        table.add_row(str(line), escape(match.reference_text), target)

    console.print(table)


@app.command("init")
def init_config(
    vault: Path = typer.Option(Path("."), "--vault", "-V", help="Vault root"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a default notewhisper.yaml into the vault."""
    config_path = vault.expanduser().resolve() / CONFIG_FILENAME
    if config_path.exists() and not force:
        console.print(f"[red]Error: config already exists: {escape(str(config_path))}[/red]")
        console.print("[dim]Use --force to overwrite it.[/dim]")
        raise typer.Exit(1)

    write_config(create_default_config(), config_path)
    console.print(f"[green]✓[/green] Wrote {escape(str(config_path))}")


@app.command("doctor")
def run_doctor(
    vault: Path = typer.Option(Path("."), "--vault", "-V", help="Vault root"),
) -> None:
    """Check that whisper and FFmpeg are installed."""
    console.print("[cyan]Running preflight checks...[/cyan]\n")

    from notewhisper.exceptions import DependencyError
    from notewhisper.validation import check_ffmpeg, check_whisper

    config = load_vault_config(vault.expanduser().resolve())
    settings = config.whisper_settings()

    table = Table(title="Dependency Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Version/Details")

    all_passed = True

    try:
        found = check_whisper(settings)
        table.add_row("whisper", "✓ Installed", escape(found["whisper_path"]))
    except DependencyError as e:
        table.add_row("whisper", "✗ Missing", escape(e.install_hint or e.message))
        all_passed = False

    try:
        versions = check_ffmpeg(settings)
        table.add_row("FFmpeg", "✓ Installed", versions.get("ffmpeg_version", "unknown"))
    except DependencyError as e:
        table.add_row("FFmpeg", "✗ Missing", e.install_hint or "")
        all_passed = False

    table.add_row("Model", settings.model_name, escape(str(settings.output_dir)))
    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed[/green]")
    else:
        console.print("\n[yellow]⚠ Some checks failed[/yellow]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
