from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


def _norm(value: str) -> str:
    return " ".join(value.split())


def _is_header(line: str) -> bool:
    s = line.strip()
    return s.startswith("[") and s.endswith("]")


def _is_key_line(line: str) -> bool:
    if not line or line[0].isspace():
        return False
    s = line.strip()
    return bool(s) and not s.startswith("#") and not _is_header(s) and "=" in s


@dataclass
class WayfireIni:
    """Line-preserving model of a wayfire.ini file.

    Wayfire values may span lines with a trailing backslash, e.g.

        plugins = \\
          autostart \\
          hide-cursor

    Untouched lines (comments, blank lines, unknown sections) are rendered back
    exactly as read.
    """

    lines: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, text: Optional[str]) -> "WayfireIni":
        return cls(lines=(text or "").splitlines())

    def render(self) -> str:
        return "\n".join(self.lines) + "\n" if self.lines else ""

    def _section_span(self, name: str) -> Optional[Tuple[int, int]]:
        """(header index, end index exclusive) of the first section called `name`."""
        header = f"[{name}]"
        start = None
        for i, line in enumerate(self.lines):
            if start is None:
                if line.strip() == header:
                    start = i
            elif _is_header(line):
                return start, i
        if start is None:
            return None
        return start, len(self.lines)

    def _value_span(self, idx: int, end: int) -> int:
        """Index one past the last continuation line of the key at `idx`."""
        j = idx
        while j + 1 < end and self.lines[j].rstrip().endswith("\\"):
            j += 1
        return j + 1

    def _find_key(self, section: str, key: str) -> Optional[Tuple[int, int]]:
        span = self._section_span(section)
        if span is None:
            return None
        start, end = span
        i = start + 1
        while i < end:
            line = self.lines[i]
            if _is_key_line(line):
                stop = self._value_span(i, end)
                if line.split("=", 1)[0].strip() == key:
                    return i, stop
                i = stop
            else:
                i += 1
        return None

    def sections(self) -> List[str]:
        return [ln.strip()[1:-1] for ln in self.lines if _is_header(ln)]

    def get(self, section: str, key: str) -> Optional[str]:
        found = self._find_key(section, key)
        if found is None:
            return None
        start, stop = found
        parts = [self.lines[start].split("=", 1)[1]] + self.lines[start + 1:stop]
        return _norm(" ".join(p.rstrip().rstrip("\\") for p in parts))

    def set(self, section: str, key: str, value: str) -> bool:
        """Set section.key = value. Returns True if the document changed."""

        found = self._find_key(section, key)
        if found is not None:
            if self.get(section, key) == _norm(value):
                return False
            start, stop = found
            self.lines[start:stop] = [f"{key} = {value}"]
            return True

        span = self._section_span(section)
        if span is None:
            if self.lines and self.lines[-1].strip():
                self.lines.append("")
            self.lines += [f"[{section}]", f"{key} = {value}"]
            return True

        start, end = span
        insert_at = end
        while insert_at - 1 > start and not self.lines[insert_at - 1].strip():
            insert_at -= 1
        self.lines.insert(insert_at, f"{key} = {value}")
        return True

    def setdefault(self, section: str, key: str, value: str) -> bool:
        """Add section.key only if it is absent. Returns True if the document changed."""

        if self._find_key(section, key) is not None:
            return False
        return self.set(section, key, value)
