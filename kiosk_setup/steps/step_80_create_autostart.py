from __future__ import annotations

import logging
from typing import Optional

from ..compositors import browser_command_line
from ..context import RunContext, StepReport
from ..tasks import announce_patch, patch

logger = logging.getLogger(__name__)


class CreateAutostartStep:
    step_id = "80_create_autostart"

    def question(self, ctx: RunContext) -> Optional[str]:
        return f"Do you want to create the browser autostart entry in {ctx.compositor.config_name}?"

    def run(self, ctx: RunContext) -> StepReport:
        cfg = ctx.config
        profile = ctx.compositor
        report = StepReport(self.step_id)

        url = cfg.kiosk_url or ctx.terminal.ask_text(
            "Enter the URL to show in kiosk mode", default=cfg.default_kiosk_url
        )
        ctx.kiosk_url = url
        ctx.decisions["kiosk_url"] = url

        line = browser_command_line(cfg.browser_command, cfg.browser_flags, url)
        ctx.terminal.info(f"Adding browser autostart to {profile.config_name}...")
        result = report.add_patch(
            patch(ctx, profile.config_path(ctx.home), lambda text: profile.writer.browser(text, line))
        )
        announce_patch(ctx, result, profile.config_name)

        logger.info("Browser autostart set to %s", url)
        return report
