"""Unit tests for the prompt-gated step runner and task execution"""

import pytest

from kiosk_setup.context import StepReport
from kiosk_setup.pipeline import run_pipeline
from kiosk_setup.tasks import run_task


class FakeStep:
    """Configurable step: records runs, may fail a task or raise."""

    def __init__(self, step_id, question="Proceed?", argv=None, raises=None, compositors=None):
        self.step_id = step_id
        self._question = question
        self._argv = argv
        self._raises = raises
        self.runs = 0
        if compositors is not None:
            self.compositors = compositors

    def question(self, ctx):
        return self._question

    def run(self, ctx):
        self.runs += 1
        if self._raises is not None:
            raise self._raises
        report = StepReport(self.step_id)
        if self._argv:
            report.add_task(run_task(ctx, self._argv, f"Running {self.step_id}..."))
        return report


class TestRunPipeline:
    """Test gating, skipping and failure handling"""

    def test_declined_step_does_not_run(self, make_ctx):
        """Test 'n' skips a step and 'y' runs the next"""
        ctx, _ = make_ctx("n\ny\n")
        first, second = FakeStep("a"), FakeStep("b")

        result = run_pipeline(ctx=ctx, steps=[first, second])

        assert (first.runs, second.runs) == (0, 1)
        assert result.declined_steps == ["a"]
        assert result.ran_steps == ["b"]
        assert ctx.steps_completed == ["b"]
        assert result.ok

    def test_ungated_step_runs_without_prompt(self, make_ctx):
        """Test a step with no question runs with no input available"""
        ctx, out = make_ctx("")
        step = FakeStep("cleanup", question=None)

        result = run_pipeline(ctx=ctx, steps=[step])

        assert step.runs == 1
        assert result.ran_steps == ["cleanup"]
        assert "(y/n)" not in out.getvalue()

    def test_step_for_other_compositor_is_not_asked(self, make_ctx):
        """Test compositor-restricted steps are skipped silently"""
        ctx, out = make_ctx("", compositor="labwc")
        step = FakeStep("plugin", question="Install plugin?", compositors=("wayfire",))

        result = run_pipeline(ctx=ctx, steps=[step])

        assert step.runs == 0
        assert result.skipped_steps == ["plugin"]
        assert "Install plugin?" not in out.getvalue()

    def test_failed_task_is_reported_and_run_continues(self, make_ctx, runner):
        """Test a non-zero exit marks the step failed but later steps still run"""
        ctx, _ = make_ctx("y\ny\n")
        runner.script("apt-get", "update", returncode=100)
        failing = FakeStep("update", argv=["apt-get", "update"])
        later = FakeStep("later", argv=["apt-get", "clean"])

        result = run_pipeline(ctx=ctx, steps=[failing, later])

        assert result.failed_steps == ["update"]
        assert result.ran_steps == ["update", "later"]
        assert ctx.steps_completed == ["later"]
        assert not result.ok
        assert result.reports[0].failed_tasks[0].returncode == 100

    @pytest.mark.parametrize("exc", [OSError("disk full"), RuntimeError("boom"), ValueError("bad mode")])
    def test_step_exception_becomes_failure(self, make_ctx, exc):
        """Test expected exceptions are contained to their step"""
        ctx, out = make_ctx("y\ny\n")
        broken, later = FakeStep("broken", raises=exc), FakeStep("later")

        result = run_pipeline(ctx=ctx, steps=[broken, later])

        assert result.failed_steps == ["broken"]
        assert later.runs == 1
        assert result.reports[0].error == str(exc)
        assert f"Step broken failed: {exc}" in out.getvalue()

    def test_eof_propagates(self, make_ctx):
        """Test closed input aborts the whole run"""
        ctx, _ = make_ctx("y\n")
        first, second = FakeStep("a"), FakeStep("b")

        with pytest.raises(EOFError):
            run_pipeline(ctx=ctx, steps=[first, second])
        assert first.runs == 1


class TestRunTask:
    """Test privilege wrapping and progress notifications"""

    def test_sudo_prefix(self, make_ctx, runner, progress):
        """Test privileged tasks go through sudo when enabled"""
        ctx, _ = make_ctx(use_sudo=True)
        event = run_task(ctx, ["apt-get", "update"], "Updating package list...")

        assert runner.calls == [["sudo", "apt-get", "update"]]
        assert event.ok
        assert progress.started == ["Updating package list..."]
        assert progress.finished == [event]

    def test_unprivileged_task(self, make_ctx, runner):
        """Test privileged=False never adds sudo"""
        ctx, _ = make_ctx(use_sudo=True)
        run_task(ctx, ["wget", "-q", "x"], "Downloading...", privileged=False)
        assert runner.calls == [["wget", "-q", "x"]]

    def test_failure_is_returned_not_raised(self, make_ctx, runner, progress):
        """Test the exit status is carried by the event"""
        ctx, _ = make_ctx()
        runner.script("false", returncode=1)
        event = run_task(ctx, ["false"], "Failing...")
        assert not event.ok
        assert progress.finished[0].returncode == 1

    def test_runner_crash_still_notifies(self, make_ctx, progress):
        """Test progress is finished even if the runner raises"""
        ctx, _ = make_ctx()

        def explode(argv, **kwargs):
            raise OSError("fork failed")

        ctx.runner = explode
        with pytest.raises(OSError):
            run_task(ctx, ["apt-get", "update"], "Updating...")
        assert [e.returncode for e in progress.finished] == [1]
