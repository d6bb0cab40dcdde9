from __future__ import annotations

import shutil
from typing import Sequence

# apt-get argv builders. Execution (privilege wrapper, progress, exit status)
# is handled by kiosk_setup.tasks.run_task.


def apt_update() -> list[str]:
    return ["apt-get", "update"]


def apt_upgrade() -> list[str]:
    return ["apt-get", "upgrade", "-y"]


def apt_install(packages: Sequence[str], *, with_recommends: bool = False) -> list[str]:
    if not packages:
        raise ValueError("apt_install requires at least one package")
    argv = ["apt-get", "install", "-y"]
    if not with_recommends:
        argv.append("--no-install-recommends")
    return [*argv, *packages]


def apt_clean() -> list[str]:
    return ["apt-get", "clean"]


def has_executable(name: str) -> bool:
    """Return True if an executable is on PATH (used to skip redundant installs)."""
    return shutil.which(name) is not None
