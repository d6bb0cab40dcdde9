"""Compositor profiles.

A profile captures everything that differs between the Wayfire and labwc kiosk
flows: packages, the session command greetd launches, where the per-user
config lives and how output modes and the browser launch are declared in it.
The step engine only ever talks to a profile, never to a compositor by name.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from .lib.autostart import AUTOSTART_HEADER, AutostartScript
from .lib.edid import Resolution
from .lib.wayfire_ini import WayfireIni

WAYFIRE_BASE_CONFIG = (
    "[core]\n"
    "plugins = \\\n"
    "  autostart \\\n"
    "  hide-cursor\n"
)

LABWC_BASE_AUTOSTART = AUTOSTART_HEADER + "\n"


def browser_command_line(command: str, flags: Sequence[str], url: str) -> str:
    return shlex.join([command, *flags, url])


class ConfigWriter(Protocol):
    """Text transforms over a compositor config; each one is idempotent."""

    def base(self, text: Optional[str]) -> str:
        ...

    def output_mode(self, text: Optional[str], output: str, resolution: Resolution) -> str:
        ...

    def browser(self, text: Optional[str], command_line: str) -> str:
        ...


class WayfireIniWriter:
    def base(self, text: Optional[str]) -> str:
        if text is None:
            return WAYFIRE_BASE_CONFIG
        doc = WayfireIni.parse(text)
        return doc.render() if doc.setdefault("core", "plugins", "autostart hide-cursor") else text

    def output_mode(self, text: Optional[str], output: str, resolution: Resolution) -> str:
        doc = WayfireIni.parse(text)
        changed = doc.set(f"output:{output}", "mode", resolution.wayfire_mode())
        return doc.render() if changed else (text or "")

    def browser(self, text: Optional[str], command_line: str) -> str:
        doc = WayfireIni.parse(text)
        changed = doc.set("autostart", "chromium", command_line)
        return doc.render() if changed else (text or "")


class LabwcAutostartWriter:
    def base(self, text: Optional[str]) -> str:
        return LABWC_BASE_AUTOSTART if text is None else text

    def output_mode(self, text: Optional[str], output: str, resolution: Resolution) -> str:
        script = AutostartScript.parse(text if text is not None else LABWC_BASE_AUTOSTART)
        line = shlex.join(["wlr-randr", "--output", output, "--mode", resolution.randr_mode()])
        changed = script.set_line(line)
        return script.render() if (changed or text is None) else text

    def browser(self, text: Optional[str], command_line: str) -> str:
        script = AutostartScript.parse(text if text is not None else LABWC_BASE_AUTOSTART)
        changed = script.set_line(f"{command_line} &")
        return script.render() if (changed or text is None) else text


@dataclass(frozen=True)
class CompositorProfile:
    name: str
    label: str
    packages: Tuple[str, ...]
    session_command: str
    config_relpath: str
    writer: ConfigWriter

    def config_path(self, home: Path) -> Path:
        return home / self.config_relpath

    @property
    def config_name(self) -> str:
        return Path(self.config_relpath).name


WAYFIRE = CompositorProfile(
    name="wayfire",
    label="Wayfire",
    packages=("wayfire", "seatd", "xdg-user-dirs", "mesa-utils", "libgl1-mesa-dri"),
    session_command="/usr/bin/wayfire",
    config_relpath=".config/wayfire.ini",
    writer=WayfireIniWriter(),
)

LABWC = CompositorProfile(
    name="labwc",
    label="labwc",
    packages=("labwc", "wlr-randr", "seatd"),
    session_command="/usr/bin/labwc",
    config_relpath=".config/labwc/autostart",
    writer=LabwcAutostartWriter(),
)

PROFILES: Dict[str, CompositorProfile] = {p.name: p for p in (WAYFIRE, LABWC)}


def all_profiles() -> List[CompositorProfile]:
    return list(PROFILES.values())


def get_profile(name: str) -> CompositorProfile:
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown compositor {name!r} (expected one of: {', '.join(PROFILES)})") from None
