from __future__ import annotations

import logging
from typing import Optional

from ..context import RunContext, StepReport
from ..lib.pkg import apt_update
from ..tasks import run_task

logger = logging.getLogger(__name__)


class UpdatePackagesStep:
    step_id = "10_update_packages"

    def question(self, ctx: RunContext) -> Optional[str]:
        return "Do you want to update the package list?"

    def run(self, ctx: RunContext) -> StepReport:
        report = StepReport(self.step_id)
        ctx.terminal.info("Updating the package list, please wait...")
        report.add_task(run_task(ctx, apt_update(), "Updating package list..."))
        return report
