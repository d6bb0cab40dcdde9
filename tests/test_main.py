"""End-to-end runs of the step sequence and exit codes of the CLI entry point"""

import pytest

from kiosk_setup import main as main_mod
from kiosk_setup.main import EXIT_ABORTED, EXIT_OK, EXIT_PRECONDITION, EXIT_STEP_FAILURES, ROOT_MESSAGE, main, run
from kiosk_setup.pipeline import PipelineResult

from .conftest import CMDLINE, scripted_terminal


def _run(make_config, kiosk_root, runner, progress, answers, **overrides):
    terminal, out = scripted_terminal(answers)
    result = run(
        config=make_config(**overrides),
        terminal=terminal,
        progress=progress,
        runner=runner,
        current_user="pi",
        home=kiosk_root["home"],
    )
    return result, out


class TestRun:
    """Test whole runs against fake commands"""

    def test_wayfire_all_declined(self, make_config, kiosk_root, runner, progress):
        """Test answering no to every prompt only runs the cleanup"""
        result, out = _run(make_config, kiosk_root, runner, progress, "n\n" * 9)

        assert runner.calls == [["apt-get", "clean"]]
        assert out.getvalue().count("(y/n)") == 9
        assert result.ran_steps == ["90_cleanup"]
        assert result.ok
        assert (kiosk_root["boot"] / "cmdline.txt").read_text() == CMDLINE

    def test_labwc_all_declined(self, make_config, kiosk_root, runner, progress):
        """Test labwc has no hide-cursor prompt"""
        result, out = _run(make_config, kiosk_root, runner, progress, "n\n" * 8, compositor="labwc")

        assert runner.calls == [["apt-get", "clean"]]
        assert out.getvalue().count("(y/n)") == 8
        assert result.skipped_steps == ["55_install_hide_cursor"]

    def test_compositor_menu(self, make_config, kiosk_root, runner, progress):
        """Test the compositor is chosen from a menu when not configured"""
        result, out = _run(make_config, kiosk_root, runner, progress, "3\n2\n" + "n\n" * 8, compositor=None)

        text = out.getvalue()
        assert "Please choose a compositor:" in text
        assert "1) Wayfire" in text
        assert "2) labwc" in text
        assert "You selected labwc" in text
        assert result.ok

    def test_wayfire_all_accepted(self, make_config, kiosk_root, runner, progress, monkeypatch):
        """Test a full run touches every file and ends with cleanup"""
        monkeypatch.setattr("kiosk_setup.steps.step_50_configure_resolution.has_executable", lambda name: True)
        answers = "y\n" * 5 + "1\n" + "y\n" * 4 + "\n"

        result, _ = _run(make_config, kiosk_root, runner, progress, answers)

        assert result.ok
        assert result.failed_steps == []
        assert len(result.ran_steps) == 10
        ini = (kiosk_root["home"] / ".config" / "wayfire.ini").read_text()
        assert ini.startswith("[core]\nplugins = \\\n  autostart \\\n  hide-cursor\n")
        assert "[output:HDMI-A-1]\nmode = 1920x1080@60\n" in ini
        assert "[autostart]\nchromium = chromium-browser" in ini
        assert kiosk_root["greetd"].exists()
        cmdline = (kiosk_root["boot"] / "cmdline.txt").read_text()
        assert cmdline.startswith("video=HDMI-A-1:1920x1080@60 ")
        assert cmdline.rstrip("\n").endswith("quiet splash plymouth.ignore-serial-consoles")
        assert runner.calls[-1] == ["apt-get", "clean"]

    def test_failed_step_does_not_stop_run(self, make_config, kiosk_root, runner, progress):
        """Test a failing apt-get update is recorded and the run continues"""
        runner.script("apt-get", "update", returncode=100)
        result, _ = _run(make_config, kiosk_root, runner, progress, "y\n" + "n\n" * 8)

        assert result.failed_steps == ["10_update_packages"]
        assert result.ran_steps == ["10_update_packages", "90_cleanup"]


class TestMain:
    """Test exit codes of the entry point"""

    @pytest.fixture(autouse=True)
    def quiet(self, monkeypatch):
        monkeypatch.setattr(main_mod.os, "geteuid", lambda: 1000)
        monkeypatch.setattr(main_mod, "configure_logging", lambda **kwargs: "")

    def test_root_is_refused(self, monkeypatch, capsys):
        """Test running as root prints the message and runs nothing"""
        monkeypatch.setattr(main_mod.os, "geteuid", lambda: 0)
        called = []
        monkeypatch.setattr(main_mod, "run", lambda **kwargs: called.append(kwargs))

        assert main([]) == EXIT_PRECONDITION
        assert ROOT_MESSAGE in capsys.readouterr().out
        assert called == []

    def test_success(self, monkeypatch, capsys):
        """Test a clean run exits 0 with the reboot hint"""
        monkeypatch.setattr(main_mod, "run", lambda **kwargs: PipelineResult(ran_steps=["90_cleanup"]))
        assert main([]) == EXIT_OK
        assert "Please reboot your system." in capsys.readouterr().out

    def test_step_failures(self, monkeypatch, capsys):
        """Test failed steps give exit status 2 and are named"""
        monkeypatch.setattr(main_mod, "run", lambda **kwargs: PipelineResult(failed_steps=["60_configure_greetd"]))
        assert main([]) == EXIT_STEP_FAILURES
        assert "60_configure_greetd" in capsys.readouterr().out

    @pytest.mark.parametrize("exc", [EOFError, KeyboardInterrupt])
    def test_abort(self, monkeypatch, exc):
        """Test closed input or Ctrl-C exits 130"""

        def abort(**kwargs):
            raise exc()

        monkeypatch.setattr(main_mod, "run", abort)
        assert main([]) == EXIT_ABORTED

    def test_bad_config(self, monkeypatch, tmp_path):
        """Test an unreadable config exits 1"""
        bad = tmp_path / "kiosk.yaml"
        bad.write_text("- just\n- a list\n")
        assert main(["--config", str(bad)]) == EXIT_PRECONDITION

    def test_missing_config(self, tmp_path):
        """Test an explicit config path that does not exist exits 1"""
        assert main(["--config", str(tmp_path / "nope.yaml")]) == EXIT_PRECONDITION

    def test_unknown_compositor(self, monkeypatch, tmp_path):
        """Test an unknown compositor in the config exits 1"""
        cfg = tmp_path / "kiosk.yaml"
        cfg.write_text("compositor: sway\n")
        assert main(["--config", str(cfg)]) == EXIT_PRECONDITION
