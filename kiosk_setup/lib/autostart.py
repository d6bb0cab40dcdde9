from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from typing import List, Optional

AUTOSTART_HEADER = "# labwc autostart (managed by kiosk-setup)"


def line_key(line: str) -> Optional[str]:
    """Identity of an autostart command line.

    The key is the command's basename; for wlr-randr it also includes the
    `--output` name, so each output gets its own mode line. Blank lines and
    comments have no key.
    """

    s = line.strip()
    if not s or s.startswith("#"):
        return None
    try:
        words = shlex.split(s, comments=True)
    except ValueError:
        words = s.split()
    if not words:
        return None
    cmd = os.path.basename(words[0])
    if cmd == "wlr-randr" and "--output" in words:
        i = words.index("--output")
        if i + 1 < len(words):
            return f"{cmd}:{words[i + 1]}"
    return cmd


@dataclass
class AutostartScript:
    """Line list of a labwc `autostart` file (sourced by labwc at session start)."""

    lines: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, text: Optional[str]) -> "AutostartScript":
        return cls(lines=(text or "").splitlines())

    def render(self) -> str:
        return "\n".join(self.lines) + "\n" if self.lines else ""

    def find(self, key: str) -> Optional[int]:
        for i, line in enumerate(self.lines):
            if line_key(line) == key:
                return i
        return None

    def set_line(self, line: str) -> bool:
        """Replace the line with the same key, or append. Returns True on change."""

        key = line_key(line)
        if key is None:
            raise ValueError(f"Autostart line has no command: {line!r}")
        i = self.find(key)
        if i is None:
            self.lines.append(line)
            return True
        if self.lines[i].strip() == line.strip():
            return False
        self.lines[i] = line
        return True
