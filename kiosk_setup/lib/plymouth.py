from __future__ import annotations

import logging
from typing import Callable, List

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

PLYMOUTH_PACKAGES = ["plymouth", "plymouth-themes"]


def list_themes(*, runner: Callable[..., CmdResult] = run_cmd) -> List[str]:
    """Installed Plymouth themes, one per line of `plymouth-set-default-theme -l`."""

    r = runner(["plymouth-set-default-theme", "-l"], check=False)
    if not r.ok:
        logger.warning("Could not list Plymouth themes (exit %s)", r.returncode)
        return []
    return [ln.strip() for ln in r.stdout.splitlines() if ln.strip()]


def set_theme_argv(theme: str) -> list[str]:
    return ["plymouth-set-default-theme", theme]


def update_initramfs_argv() -> list[str]:
    return ["update-initramfs", "-u"]
