from __future__ import annotations

import logging
from typing import Optional

from ..context import RunContext, StepReport
from ..lib.pkg import apt_install
from ..tasks import run_task

logger = logging.getLogger(__name__)


class InstallBrowserStep:
    step_id = "40_install_browser"

    def question(self, ctx: RunContext) -> Optional[str]:
        return "Do you want to install Chromium Browser?"

    def run(self, ctx: RunContext) -> StepReport:
        report = StepReport(self.step_id)
        ctx.terminal.info("Installing Chromium Browser, please wait...")
        report.add_task(
            run_task(ctx, apt_install([ctx.config.browser_package]), "Installing Chromium Browser...")
        )
        return report
