from __future__ import annotations

from typing import Optional

from ..context import RunContext, StepReport
from ..lib.pkg import apt_clean
from ..tasks import run_task


class CleanupStep:
    """Always runs, even when every other step was declined."""

    step_id = "90_cleanup"

    def question(self, ctx: RunContext) -> Optional[str]:
        return None

    def run(self, ctx: RunContext) -> StepReport:
        report = StepReport(self.step_id)
        ctx.terminal.info("Cleaning up apt caches, please wait...")
        report.add_task(run_task(ctx, apt_clean(), "Cleaning up apt caches..."))
        return report
