from __future__ import annotations

import logging
from typing import Optional

from ..context import RunContext, StepReport
from ..lib.pkg import apt_upgrade
from ..tasks import run_task

logger = logging.getLogger(__name__)


class UpgradePackagesStep:
    step_id = "20_upgrade_packages"

    def question(self, ctx: RunContext) -> Optional[str]:
        return "Do you want to upgrade installed packages?"

    def run(self, ctx: RunContext) -> StepReport:
        report = StepReport(self.step_id)
        ctx.terminal.info("Upgrading installed packages. THIS MAY TAKE SOME TIME, please wait...")
        report.add_task(run_task(ctx, apt_upgrade(), "Upgrading installed packages..."))
        return report
