"""Interactive terminal UI: yes/no prompts, numbered menus and status lines.

Answer parsing (`parse_yes_no`, `parse_selection`) is pure so it can be tested
without a terminal; `Terminal` only renders and reads lines.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, TextIO, TypeVar

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

T = TypeVar("T")

YES_NO_ERROR = "Please answer yes (y) or no (n)."
INVALID_SELECTION = "Invalid selection, please try again."


def parse_yes_no(answer: str) -> Optional[bool]:
    """y/Y... -> True, n/N... -> False, anything else -> None."""

    s = answer.strip()
    if not s:
        return None
    if s[0] in "yY":
        return True
    if s[0] in "nN":
        return False
    return None


def parse_selection(options: Sequence[T], answer: str) -> Optional[T]:
    """Map a 1-based menu answer to its option; None if non-numeric or out of range."""

    s = answer.strip()
    if not (s.isascii() and s.isdigit()):
        return None
    n = int(s)
    if 1 <= n <= len(options):
        return options[n - 1]
    return None


class Terminal:
    """Console front-end. `stream` replaces stdin (used by tests and scripted runs)."""

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console or Console(highlight=False)
        self.stream = stream

    def read(self, prompt: str) -> str:
        line = self.console.input(prompt, stream=self.stream)
        # input() raises EOFError itself; a stream just returns "".
        if self.stream is not None and line == "":
            raise EOFError("input closed")
        return line.rstrip("\r\n")

    def ask_yes_no(self, question: str) -> bool:
        self.console.print()
        while True:
            answer = parse_yes_no(self.read(f"{escape(question)} (y/n): "))
            if answer is not None:
                logger.info("Q: %s -> %s", question, "yes" if answer else "no")
                return answer
            self.console.print(YES_NO_ERROR)

    def choose(
        self,
        options: Sequence[T],
        *,
        title: str,
        label: Callable[[T], str] = str,
    ) -> T:
        if not options:
            raise ValueError("choose() needs at least one option")

        self.console.print(f"[bright_blue]{escape(title)}[/]")
        for i, opt in enumerate(options, start=1):
            self.console.print(f"{i}) {escape(label(opt))}")

        while True:
            picked = parse_selection(options, self.read("#? "))
            if picked is not None:
                self.console.print(f"[green]You selected {escape(label(picked))}[/]")
                logger.info("Selected %s", label(picked))
                return picked
            self.console.print(f"[yellow]{INVALID_SELECTION}[/]")

    def ask_text(self, question: str, *, default: str) -> str:
        answer = self.read(escape(f"{question} [{default}]: ")).strip()
        return answer or default

    def info(self, message: str) -> None:
        self.console.print(f"[bright_black]{escape(message)}[/]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{escape(message)}[/]")

    def skip(self, message: str) -> None:
        self.console.print(f"[yellow]{escape(message)}[/]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/]")
