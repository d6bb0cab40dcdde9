from __future__ import annotations

import logging
from typing import Optional

from ..context import RunContext, StepReport
from ..lib.bootfiles import SPLASH_TOKENS, ensure_tokens, set_config_value
from ..lib.pkg import apt_install
from ..lib.plymouth import PLYMOUTH_PACKAGES, list_themes, set_theme_argv, update_initramfs_argv
from ..tasks import announce_patch, patch, run_task

logger = logging.getLogger(__name__)


class InstallSplashStep:
    step_id = "70_install_splash"

    def question(self, ctx: RunContext) -> Optional[str]:
        return "Do you want to install the Plymouth splash screen?"

    def run(self, ctx: RunContext) -> StepReport:
        cfg = ctx.config
        report = StepReport(self.step_id)

        ctx.terminal.info(f"Adding disable_splash=1 to {cfg.config_txt_path}...")
        result = report.add_patch(
            patch(ctx, cfg.config_txt_path, lambda text: set_config_value(text, "disable_splash", "1"))
        )
        announce_patch(ctx, result, "config.txt")

        ctx.terminal.info(f"Adding {' '.join(SPLASH_TOKENS)} to {cfg.cmdline_path}...")
        result = report.add_patch(patch(ctx, cfg.cmdline_path, lambda text: ensure_tokens(text, SPLASH_TOKENS)))
        announce_patch(ctx, result, "cmdline.txt")

        ctx.terminal.info("Installing Plymouth and themes...")
        report.add_task(
            run_task(ctx, apt_install(PLYMOUTH_PACKAGES, with_recommends=True), "Installing Plymouth...")
        )

        ctx.terminal.info("Listing available Plymouth themes...")
        themes = list_themes(runner=ctx.runner)
        if not themes:
            ctx.terminal.skip("No Plymouth themes found. The theme was left unchanged.")
            return report

        theme = ctx.terminal.choose(themes, title="Please choose a theme (enter the number):")
        ctx.chosen_theme = theme
        ctx.decisions["plymouth_theme"] = theme

        ctx.terminal.info(f"Setting Plymouth theme to {theme}...")
        report.add_task(run_task(ctx, set_theme_argv(theme), f"Setting Plymouth theme to {theme}..."))
        report.add_task(run_task(ctx, update_initramfs_argv(), "Updating initramfs..."))

        if report.ok:
            ctx.terminal.success(f"Plymouth splash screen installed and configured with {theme} theme.")
        return report
