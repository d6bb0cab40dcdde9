from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .compositors import CompositorProfile
from .config_store import KioskConfig
from .lib.command import CmdResult, run_cmd
from .lib.edid import Resolution
from .lib.patcher import PatchResult
from .progress import ProgressNotifier, TaskEvent
from .terminal import Terminal


@dataclass
class RunContext:
    """Everything a step may read or record, passed explicitly to each step."""

    config: KioskConfig
    compositor: CompositorProfile
    terminal: Terminal
    progress: ProgressNotifier
    current_user: str
    home: Path
    runner: Callable[..., CmdResult] = run_cmd

    chosen_resolution: Optional[Resolution] = None
    chosen_theme: Optional[str] = None
    kiosk_url: Optional[str] = None
    steps_completed: List[str] = field(default_factory=list)
    decisions: Dict[str, Any] = field(default_factory=dict)


@dataclass
class StepReport:
    step_id: str
    tasks: List[TaskEvent] = field(default_factory=list)
    patches: List[PatchResult] = field(default_factory=list)
    error: Optional[str] = None

    def add_task(self, event: TaskEvent) -> TaskEvent:
        self.tasks.append(event)
        return event

    def add_patch(self, result: PatchResult) -> PatchResult:
        self.patches.append(result)
        return result

    @property
    def failed_tasks(self) -> List[TaskEvent]:
        return [t for t in self.tasks if not t.ok]

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed_tasks
