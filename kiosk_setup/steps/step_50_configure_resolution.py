from __future__ import annotations

import logging
from typing import Optional

from ..context import RunContext, StepReport
from ..lib.bootfiles import set_video_mode
from ..lib.edid import Resolution, discover_resolutions
from ..lib.pkg import apt_install, has_executable
from ..tasks import announce_patch, patch, run_task

logger = logging.getLogger(__name__)

EDID_DECODER = "edid-decode"


class ConfigureResolutionStep:
    step_id = "50_configure_resolution"

    def question(self, ctx: RunContext) -> Optional[str]:
        return f"Do you want to configure a resolution in cmdline.txt and {ctx.compositor.config_name}?"

    def run(self, ctx: RunContext) -> StepReport:
        cfg = ctx.config
        profile = ctx.compositor
        output = cfg.output_name
        report = StepReport(self.step_id)

        # A failed install is not fatal: discovery falls back to the default list.
        if not has_executable(EDID_DECODER):
            ctx.terminal.info("Installing edid-decode, please wait...")
            report.add_task(run_task(ctx, apt_install([EDID_DECODER]), "Installing edid-decode..."))

        candidates = discover_resolutions(output, edid_glob=cfg.edid_glob, runner=ctx.runner)
        choice = ctx.terminal.choose(candidates, title="Please choose a resolution:")
        resolution = Resolution.parse(choice)
        ctx.chosen_resolution = resolution
        ctx.decisions["resolution"] = choice

        mode = resolution.kernel_mode()
        ctx.terminal.info(f"Adding video={output}:{mode} to {cfg.cmdline_path}...")
        result = report.add_patch(
            patch(ctx, cfg.cmdline_path, lambda text: set_video_mode(text, output, mode))
        )
        announce_patch(ctx, result, "cmdline.txt")

        ctx.terminal.info(f"Adding resolution to {profile.config_name}...")
        result = report.add_patch(
            patch(
                ctx,
                profile.config_path(ctx.home),
                lambda text: profile.writer.output_mode(text, output, resolution),
            )
        )
        announce_patch(ctx, result, profile.config_name)

        logger.info("Resolution %s configured for %s", choice, output)
        return report
