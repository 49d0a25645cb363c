"""Line-oriented prompts for the interactive wizard."""

from __future__ import annotations

from typing import Callable

from rich.console import Console

from nextflex.utils import console as default_console


class Prompter:
    """Asks one question at a time and normalises the answer.

    Answers are lower-cased and stripped; their content is not validated.
    Callers decide what an unrecognised answer means.
    """

    def __init__(
        self,
        console: Console | None = None,
        input_func: Callable[[str], str] | None = None,
    ) -> None:
        self.console = console or default_console
        self._input = input_func or self.console.input

    def ask(self, question: str) -> str:
        return self._input(f"[bold cyan]?[/bold cyan] {question} ").strip().lower()

    def ask_project_name(self) -> str:
        """Ask for the project name until a non-blank answer is given.

        Unlike :meth:`ask` the case of the answer is preserved.
        """
        while True:
            name = self._input("[bold cyan]?[/bold cyan] Enter your project name: ").strip()
            if name:
                return name
            self.console.print("[yellow]Project name cannot be empty.[/yellow]")
