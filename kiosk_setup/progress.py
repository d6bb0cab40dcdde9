from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from rich.console import Console
from rich.markup import escape
from rich.status import Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskEvent:
    """Completion event for one external task."""

    label: str
    argv: List[str]
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProgressNotifier(Protocol):
    def task_started(self, label: str) -> None:
        ...

    def task_finished(self, event: TaskEvent) -> None:
        ...


class ConsoleProgress:
    """Spinner while a task runs, then a check mark (or cross with exit status).

    The animation only runs on a real terminal; redirected output just gets
    the final line.
    """

    def __init__(self, console: Console):
        self.console = console
        self._status: Optional[Status] = None

    def task_started(self, label: str) -> None:
        if self.console.is_terminal:
            self._status = self.console.status(escape(label), spinner="dots", spinner_style="magenta")
            self._status.start()

    def task_finished(self, event: TaskEvent) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
        if event.ok:
            self.console.print(f"[green]✔[/] {escape(event.label)}")
        else:
            self.console.print(f"[red]✘[/] {escape(event.label)} [red](exit {event.returncode})[/]")
