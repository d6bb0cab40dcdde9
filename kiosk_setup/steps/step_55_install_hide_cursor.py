from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Optional

from ..context import RunContext, StepReport
from ..lib.plugins import hide_cursor_bundle
from ..tasks import run_task

logger = logging.getLogger(__name__)


class InstallHideCursorStep:
    """Wayfire-only: install hide-cursor from the wayfire-plugins-extra release tarball."""

    step_id = "55_install_hide_cursor"
    compositors = ("wayfire",)

    def question(self, ctx: RunContext) -> Optional[str]:
        return "Do you want to install the Wayfire hide cursor plugin?"

    def run(self, ctx: RunContext) -> StepReport:
        bundle = hide_cursor_bundle(ctx.config.hide_cursor_plugin_url)
        report = StepReport(self.step_id)

        with tempfile.TemporaryDirectory(prefix="kiosk-plugin-") as tmp:
            work = Path(tmp)

            ctx.terminal.info("Installing Wayfire hide cursor plugin, please wait...")
            fetched = report.add_task(
                run_task(ctx, bundle.download_argv(work), "Downloading Wayfire hide cursor plugin...", privileged=False)
            )
            if not fetched.ok:
                return report

            ctx.terminal.info("Extracting plugin files...")
            extracted = report.add_task(
                run_task(ctx, bundle.extract_argv(work), "Extracting plugin files...", privileged=False)
            )
            if not extracted.ok:
                return report

            ctx.terminal.info("Copying plugin files to the system...")
            for argv in bundle.install_argvs(work):
                report.add_task(run_task(ctx, argv, f"Copying {Path(argv[1]).name}..."))

            ctx.terminal.info("Cleaning up temporary files...")

        logger.info("Hide cursor plugin installed from %s", bundle.url)
        return report
