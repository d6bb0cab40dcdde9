"""Pytest configuration and shared fixtures for kiosk-setup tests

Nothing here executes real system commands: external commands go through
FakeRunner, the terminal reads scripted answers from a string and all
"system" files live under tmp_path.
"""

import io
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest
from rich.console import Console

from kiosk_setup.compositors import get_profile
from kiosk_setup.config_store import KioskConfig, ensure_defaults
from kiosk_setup.context import RunContext
from kiosk_setup.lib.command import CmdResult
from kiosk_setup.progress import TaskEvent
from kiosk_setup.terminal import Terminal

CMDLINE = "console=serial0,115200 console=tty1 root=PARTUUID=4e639091-02 rootfstype=ext4 fsck.repair=yes rootwait\n"

CONFIG_TXT = (
    "# For more options and information see\n"
    "# http://rpf.io/configtxt\n"
    "dtparam=audio=on\n"
    "camera_auto_detect=1\n"
    "display_auto_detect=1\n"
    "\n"
    "[all]\n"
)


class FakeRunner:
    """Stands in for run_cmd: records every argv and returns scripted results.

    Results are matched on an argv prefix, so scripting ("edid-decode",)
    covers every edid-decode invocation.
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self._scripted: List[Tuple[Tuple[str, ...], int, str]] = []

    def script(self, *prefix: str, returncode: int = 0, stdout: str = "") -> None:
        self._scripted.append((tuple(prefix), returncode, stdout))

    def __call__(self, argv, *, check: bool = True, input_text: Optional[str] = None, **kwargs: Any) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        self.inputs.append(input_text)

        returncode, stdout = 0, ""
        for prefix, rc, out in self._scripted:
            if tuple(argv[: len(prefix)]) == prefix:
                returncode, stdout = rc, out

        if check and returncode != 0:
            raise RuntimeError(f"Command failed ({returncode}): {' '.join(argv)}")
        return CmdResult(argv=argv, returncode=returncode, stdout=stdout, stderr="")

    @property
    def commands(self) -> List[str]:
        return [" ".join(c) for c in self.calls]


class RecordingProgress:
    """Progress notifier that just remembers what it was told."""

    def __init__(self) -> None:
        self.started: List[str] = []
        self.finished: List[TaskEvent] = []

    def task_started(self, label: str) -> None:
        self.started.append(label)

    def task_finished(self, event: TaskEvent) -> None:
        self.finished.append(event)


def scripted_terminal(answers: str = "") -> Tuple[Terminal, io.StringIO]:
    """Terminal reading `answers` line by line; returns it with its output buffer."""

    out = io.StringIO()
    console = Console(file=out, force_terminal=False, color_system=None, width=200, highlight=False)
    return Terminal(console=console, stream=io.StringIO(answers)), out


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def kiosk_root(tmp_path: Path) -> Dict[str, Path]:
    """A fake home directory, boot partition and DRM tree under tmp_path."""

    home = tmp_path / "home" / "pi"
    home.mkdir(parents=True)

    boot = tmp_path / "boot" / "firmware"
    boot.mkdir(parents=True)
    (boot / "cmdline.txt").write_text(CMDLINE, encoding="utf-8")
    (boot / "config.txt").write_text(CONFIG_TXT, encoding="utf-8")

    drm = tmp_path / "sys" / "class" / "drm"
    drm.mkdir(parents=True)

    return {
        "root": tmp_path,
        "home": home,
        "boot": boot,
        "drm": drm,
        "greetd": tmp_path / "etc" / "greetd" / "config.toml",
    }


@pytest.fixture
def make_config(kiosk_root):
    def _make(**overrides: Any) -> KioskConfig:
        raw: Dict[str, Any] = {
            "compositor": "wayfire",
            "boot_dir": str(kiosk_root["boot"]),
            "greetd_config": str(kiosk_root["greetd"]),
            "edid_glob": str(kiosk_root["drm"] / "card*-{output}" / "edid"),
            "use_sudo": False,
        }
        raw.update(overrides)
        return KioskConfig(raw=ensure_defaults(raw))

    return _make


@pytest.fixture
def make_ctx(kiosk_root, make_config, runner, progress):
    """Factory for a RunContext wired to the fakes; returns (ctx, terminal output)."""

    def _make(answers: str = "", **config_overrides: Any) -> Tuple[RunContext, io.StringIO]:
        config = make_config(**config_overrides)
        terminal, out = scripted_terminal(answers)
        ctx = RunContext(
            config=config,
            compositor=get_profile(config.compositor or "wayfire"),
            terminal=terminal,
            progress=progress,
            current_user="pi",
            home=kiosk_root["home"],
            runner=runner,
        )
        return ctx, out

    return _make
