from __future__ import annotations

import logging
from typing import Optional

from ..context import RunContext, StepReport
from ..lib.pkg import apt_install
from ..tasks import announce_patch, patch, run_task

logger = logging.getLogger(__name__)


class InstallCompositorStep:
    step_id = "30_install_compositor"

    def question(self, ctx: RunContext) -> Optional[str]:
        return f"Do you want to install Wayland packages and do the {ctx.compositor.label} default config?"

    def run(self, ctx: RunContext) -> StepReport:
        profile = ctx.compositor
        report = StepReport(self.step_id)

        ctx.terminal.info("Installing Wayland packages, please wait...")
        report.add_task(run_task(ctx, apt_install(profile.packages), "Installing Wayland packages..."))

        # Created only if missing; an existing config only gains keys it lacks.
        ctx.terminal.info(f"Setting up {profile.label} configuration...")
        result = report.add_patch(patch(ctx, profile.config_path(ctx.home), profile.writer.base))
        announce_patch(ctx, result, profile.config_name)

        logger.info("Compositor %s installed (config=%s)", profile.name, result.status.value)
        return report
