"""
notewhisper.prompt - Console choice prompt and notices.
"""

from __future__ import annotations

from typing import Any, TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from notewhisper.host import Choice

CANCEL_KEY = "c"


class ConsoleChoicePrompt:
    """Numbered single-choice prompt with a cancel option."""

    def __init__(
        self,
        console: Console | None = None,
        title: str = "Choose an audio link to transcribe",
        stream: TextIO | None = None,
    ) -> None:
        self.console = console or Console()
        self.title = title
        self.stream = stream

    def present_choices(self, items: list[Choice]) -> Any | None:
        table = Table(title=self.title)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("File", style="green")
        for i, item in enumerate(items, start=1):
            table.add_row(str(i), escape(item.label))
        self.console.print(table)

        keys = [str(i) for i in range(1, len(items) + 1)] + [CANCEL_KEY]
        try:
            answer = Prompt.ask(
                f"Link number, or [bold]{CANCEL_KEY}[/bold] to cancel",
                console=self.console,
                choices=keys,
                show_choices=False,
                stream=self.stream,
            )
        except (EOFError, KeyboardInterrupt):
            return None

        if answer == CANCEL_KEY:
            return None
        return items[int(answer) - 1].value


class ConsoleNotifier:
    """Prints transient notices to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)
        self.console.print(message, markup=False)
