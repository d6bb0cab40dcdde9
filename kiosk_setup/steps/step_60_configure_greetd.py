from __future__ import annotations

import logging
from typing import Optional

from ..context import RunContext, StepReport
from ..lib.greetd import GRAPHICAL_TARGET, GREETD_SERVICE, render_greetd_config
from ..lib.pkg import apt_install
from ..lib.services import systemctl_enable, systemctl_set_default
from ..tasks import announce_patch, patch, run_task

logger = logging.getLogger(__name__)


class ConfigureGreetdStep:
    step_id = "60_configure_greetd"

    def question(self, ctx: RunContext) -> Optional[str]:
        return f"Do you want to install and configure greetd for auto start of {ctx.compositor.label}?"

    def run(self, ctx: RunContext) -> StepReport:
        cfg = ctx.config
        report = StepReport(self.step_id)

        ctx.terminal.info(f"Installing greetd for auto start of {ctx.compositor.label}, please wait...")
        report.add_task(
            run_task(ctx, apt_install([GREETD_SERVICE], with_recommends=True), "Installing greetd...")
        )

        contents = render_greetd_config(
            session_command=ctx.compositor.session_command,
            user=ctx.current_user,
            vt=cfg.greetd_vt,
        )
        # Regenerated from scratch on every run; nothing in the old file survives.
        ctx.terminal.info(f"Writing {cfg.greetd_config}...")
        result = report.add_patch(patch(ctx, cfg.greetd_config, lambda _old: contents))
        announce_patch(ctx, result, "config.toml")

        ctx.terminal.info("Enabling greetd service...")
        report.add_task(run_task(ctx, systemctl_enable(GREETD_SERVICE), "Enabling greetd service..."))

        ctx.terminal.info("Setting graphical target as the default...")
        report.add_task(run_task(ctx, systemctl_set_default(GRAPHICAL_TARGET), "Setting graphical target..."))

        ctx.decisions["greetd"] = {"user": ctx.current_user, "session": ctx.compositor.session_command}
        logger.info("greetd configured (user=%s, session=%s)", ctx.current_user, ctx.compositor.session_command)
        return report
