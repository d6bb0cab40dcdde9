from __future__ import annotations

import argparse
import getpass
import logging
import os
from pathlib import Path
from typing import Callable, Optional, Sequence

import yaml

from .compositors import CompositorProfile, all_profiles, get_profile
from .config_store import KioskConfig, load_config
from .context import RunContext
from .lib.command import CmdResult, run_cmd
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import PipelineResult, Step, run_pipeline
from .progress import ConsoleProgress, ProgressNotifier
from .steps import (
    CleanupStep,
    ConfigureGreetdStep,
    ConfigureResolutionStep,
    CreateAutostartStep,
    InstallBrowserStep,
    InstallCompositorStep,
    InstallHideCursorStep,
    InstallSplashStep,
    UpdatePackagesStep,
    UpgradePackagesStep,
)
from .terminal import Terminal

logger = logging.getLogger(__name__)

ROOT_MESSAGE = "This script should not be run as root. Please run as a regular user with sudo permissions."

EXIT_OK = 0
EXIT_PRECONDITION = 1
EXIT_STEP_FAILURES = 2
EXIT_ABORTED = 130


def build_steps() -> list[Step]:
    return [
        UpdatePackagesStep(),
        UpgradePackagesStep(),
        InstallCompositorStep(),
        InstallBrowserStep(),
        ConfigureResolutionStep(),
        InstallHideCursorStep(),
        ConfigureGreetdStep(),
        InstallSplashStep(),
        CreateAutostartStep(),
        CleanupStep(),
    ]


def select_compositor(config: KioskConfig, terminal: Terminal) -> CompositorProfile:
    if config.compositor:
        return get_profile(config.compositor)
    return terminal.choose(all_profiles(), title="Please choose a compositor:", label=lambda p: p.label)


def run(
    *,
    config: KioskConfig,
    terminal: Terminal,
    progress: ProgressNotifier,
    runner: Callable[..., CmdResult] = run_cmd,
    current_user: Optional[str] = None,
    home: Optional[Path] = None,
    steps: Optional[Sequence[Step]] = None,
) -> PipelineResult:
    """Select the compositor once, then run every prompt-gated step in order."""

    compositor = select_compositor(config, terminal)
    ctx = RunContext(
        config=config,
        compositor=compositor,
        terminal=terminal,
        progress=progress,
        current_user=current_user or getpass.getuser(),
        home=home or Path.home(),
        runner=runner,
    )
    logger.info("Kiosk setup started (user=%s, compositor=%s)", ctx.current_user, compositor.name)

    result = run_pipeline(ctx=ctx, steps=build_steps() if steps is None else steps)

    logger.info(
        "Kiosk setup finished: ran=%s declined=%s failed=%s decisions=%s",
        result.ran_steps,
        result.declined_steps,
        result.failed_steps,
        ctx.decisions,
    )
    return result


def main(argv: Optional[list[str]] = None) -> int:
    # Checked before anything touches the filesystem (including the log file).
    if os.geteuid() == 0:
        print(ROOT_MESSAGE)
        return EXIT_PRECONDITION

    p = argparse.ArgumentParser(
        prog="kiosk-setup",
        description="Interactively provision a Raspberry Pi as a browser kiosk display.",
    )
    p.add_argument("--config", default=None, help="Optional config file (yaml|json)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the setup log")
    p.add_argument("--verbose", action="store_true", help="Log at DEBUG level and mirror the log on stderr")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log, verbose=bool(args.verbose))
    terminal = Terminal()

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.exception("Could not load config")
        terminal.error(f"Could not load config: {e}")
        return EXIT_PRECONDITION

    try:
        result = run(config=config, terminal=terminal, progress=ConsoleProgress(terminal.console))
    except ValueError as e:
        logger.exception("Invalid configuration")
        terminal.error(str(e))
        return EXIT_PRECONDITION
    except (EOFError, KeyboardInterrupt):
        logger.warning("Aborted by operator")
        terminal.console.print()
        terminal.error("Aborted.")
        return EXIT_ABORTED

    if not result.ok:
        terminal.error(
            "Setup finished with failures in: "
            + ", ".join(result.failed_steps)
            + ". See the log for details."
        )
        return EXIT_STEP_FAILURES

    terminal.success("Setup completed successfully! Please reboot your system.")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
