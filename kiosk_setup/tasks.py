from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .context import RunContext
from .lib.command import SUDO, fmt_argv, with_sudo
from .lib.patcher import PatchResult, PatchStatus, Transform, patch_file, write_direct
from .progress import TaskEvent

logger = logging.getLogger(__name__)


def run_task(
    ctx: RunContext,
    argv: Sequence[str],
    label: str,
    *,
    privileged: bool = True,
    cwd: str | None = None,
) -> TaskEvent:
    """Run one external command synchronously and report its completion.

    Privileged tasks go through sudo unless config.use_sudo is off. The exit
    status is never raised; callers inspect the returned event.
    """

    full = with_sudo(argv, use_sudo=privileged and ctx.config.use_sudo)
    ctx.progress.task_started(label)
    returncode = 1
    try:
        returncode = ctx.runner(full, check=False, cwd=cwd).returncode
    finally:
        event = TaskEvent(label=label, argv=full, returncode=returncode)
        ctx.progress.task_finished(event)

    if not event.ok:
        logger.error("Task failed (exit %s): %s", event.returncode, fmt_argv(full))
    return event


def is_privileged_path(ctx: RunContext, path: Path) -> bool:
    return not Path(path).absolute().is_relative_to(ctx.home.absolute())


def write_file(ctx: RunContext, path: Path, contents: str) -> None:
    """Write a file, through `sudo tee` when it lives outside the user's home."""

    if ctx.config.use_sudo and is_privileged_path(ctx, path):
        ctx.runner([SUDO, "mkdir", "-p", str(Path(path).parent)], check=True)
        ctx.runner([SUDO, "tee", str(path)], check=True, input_text=contents)
        return
    write_direct(Path(path), contents)


def patch(ctx: RunContext, path: Path, transform: Transform) -> PatchResult:
    return patch_file(path, transform, write=lambda p, c: write_file(ctx, p, c))


def announce_patch(ctx: RunContext, result: PatchResult, what: str) -> None:
    if result.status is PatchStatus.CREATED:
        ctx.terminal.success(f"{what} created and configured.")
    elif result.status is PatchStatus.UPDATED:
        ctx.terminal.success(f"{what} updated successfully!")
    else:
        ctx.terminal.skip(f"{what} is already configured. No changes made.")
