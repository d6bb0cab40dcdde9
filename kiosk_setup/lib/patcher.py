from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Transform = Callable[[Optional[str]], str]
Writer = Callable[[Path, str], None]


class PatchStatus(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class PatchResult:
    path: str
    status: PatchStatus

    @property
    def changed(self) -> bool:
        return self.status is not PatchStatus.UNCHANGED


def read_optional(path: Path) -> Optional[str]:
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def write_direct(path: Path, contents: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")


def patch_file(path: str | Path, transform: Transform, *, write: Writer = write_direct) -> PatchResult:
    """Apply `transform` to a file's text; write only if the text changes.

    `transform` receives None when the file does not exist. Transforms must be
    idempotent: applying one to its own output yields the same text.
    """

    p = Path(path)
    current = read_optional(p)
    updated = transform(current)

    if updated == current:
        logger.info("%s already configured; no changes", p)
        return PatchResult(path=str(p), status=PatchStatus.UNCHANGED)

    write(p, updated)
    status = PatchStatus.CREATED if current is None else PatchStatus.UPDATED
    logger.info("%s %s", p, status.value)
    return PatchResult(path=str(p), status=status)
