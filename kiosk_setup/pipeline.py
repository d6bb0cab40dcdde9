from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .context import RunContext, StepReport

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single prompt-gated step.

    `question` returns None for steps that always run. Steps may also declare
    a `compositors` tuple to restrict themselves to some compositor profiles.
    """

    step_id: str

    def question(self, ctx: RunContext) -> Optional[str]:
        ...

    def run(self, ctx: RunContext) -> StepReport:
        ...


@dataclass
class PipelineResult:
    ran_steps: List[str] = field(default_factory=list)
    declined_steps: List[str] = field(default_factory=list)
    skipped_steps: List[str] = field(default_factory=list)
    failed_steps: List[str] = field(default_factory=list)
    reports: List[StepReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed_steps


def run_pipeline(*, ctx: RunContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order, each behind its yes/no prompt.

    There is no rollback: a failed step is recorded and the run moves on.
    EOFError/KeyboardInterrupt from the prompts propagate to the caller.
    """

    result = PipelineResult()

    for step in steps:
        supported = getattr(step, "compositors", None)
        if supported and ctx.compositor.name not in supported:
            logger.info("Skipping step %s (not applicable to %s)", step.step_id, ctx.compositor.name)
            result.skipped_steps.append(step.step_id)
            continue

        question = step.question(ctx)
        if question is not None and not ctx.terminal.ask_yes_no(question):
            logger.info("Declined step %s", step.step_id)
            result.declined_steps.append(step.step_id)
            continue

        logger.info("Running step %s", step.step_id)
        try:
            report = step.run(ctx)
        except (OSError, RuntimeError, ValueError) as e:
            logger.exception("Step %s failed", step.step_id)
            ctx.terminal.error(f"Step {step.step_id} failed: {e}")
            report = StepReport(step_id=step.step_id, error=str(e))

        result.ran_steps.append(step.step_id)
        result.reports.append(report)
        if report.ok:
            ctx.steps_completed.append(step.step_id)
        else:
            logger.error(
                "Step %s finished with failures: %s",
                step.step_id,
                report.error or ", ".join(t.label for t in report.failed_tasks),
            )
            result.failed_steps.append(step.step_id)

    return result
