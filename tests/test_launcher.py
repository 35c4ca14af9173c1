"""Tests for launching menu commands."""
import sys
import signal
import pytest
from contextlib import contextmanager
from unittest.mock import MagicMock, patch

from term_commander.errors import LaunchError
from term_commander.launcher import Launcher
from term_commander.menu import LeafAction


class RecordingTerminal:
    """Records when the terminal is handed to a child process."""

    def __init__(self):
        self.events = []

    @contextmanager
    def suspended(self):
        self.events.append("suspend")
        try:
            yield
        finally:
            self.events.append("resume")


@pytest.fixture
def terminal():
    return RecordingTerminal()


class TestLaunch:
    """Running commands."""

    def test_successful_command(self, terminal):
        """A zero exit status returns normally."""
        entry = LeafAction("Python", (sys.executable, "-c", "pass"))
        Launcher(terminal).launch(entry)
        assert terminal.events == ["suspend", "resume"]

    def test_runs_in_working_dir(self, terminal, tmp_path):
        """The child process starts in the entry's working directory."""
        script = "open('out.txt', 'w').write('ran')"
        entry = LeafAction("Write", (sys.executable, "-c", script), str(tmp_path))
        Launcher(terminal).launch(entry)
        assert (tmp_path / "out.txt").read_text() == "ran"

    def test_command_runs_while_terminal_suspended(self, terminal):
        """subprocess.run is called between suspend and resume."""
        def fake_run(argv, cwd=None):
            terminal.events.append("run")
            return MagicMock(returncode=0)

        with patch('term_commander.launcher.subprocess.run', side_effect=fake_run) as run:
            Launcher(terminal).launch(LeafAction("Chess", ("chess.exe", "--easy"), "/games"))

        run.assert_called_once_with(["chess.exe", "--easy"], cwd="/games")
        assert terminal.events == ["suspend", "run", "resume"]

    def test_wait_for_key_pauses_before_resume(self, terminal):
        """With wait_for_key the user confirms before the menu returns."""
        def fake_input(prompt):
            terminal.events.append("input")
            return ""

        with patch('term_commander.launcher.subprocess.run', return_value=MagicMock(returncode=0)), \
             patch('builtins.input', side_effect=fake_input):
            Launcher(terminal, wait_for_key=True).launch(LeafAction("Top", ("htop",)))

        assert terminal.events == ["suspend", "input", "resume"]


class TestLaunchErrors:
    """Failures are raised as LaunchError."""

    def test_missing_executable(self, terminal):
        """A command that does not exist cannot be started."""
        entry = LeafAction("Ghost", ("no-such-command-term-commander",))
        with pytest.raises(LaunchError, match="Failed to execute 'no-such-command-term-commander'") as err:
            Launcher(terminal).launch(entry)
        assert err.value.returncode is None
        assert terminal.events == ["suspend", "resume"]

    def test_missing_working_dir(self, terminal, tmp_path):
        """A working directory that does not exist is a launch failure."""
        entry = LeafAction("Python", (sys.executable, "-c", "pass"), str(tmp_path / "gone"))
        with pytest.raises(LaunchError):
            Launcher(terminal).launch(entry)

    def test_non_zero_exit_status(self, terminal):
        """A failing command reports its status."""
        entry = LeafAction("Fail", (sys.executable, "-c", "import sys; sys.exit(3)"))
        with pytest.raises(LaunchError, match="status: 3") as err:
            Launcher(terminal).launch(entry)
        assert err.value.returncode == 3
        assert terminal.events == ["suspend", "resume"]


class TestInterrupts:
    """Ctrl+C while a command runs belongs to the command."""

    INTERRUPT_SELF_AND_MENU = (
        "import os, signal; "
        "os.kill(os.getppid(), signal.SIGINT); "
        "os.kill(os.getpid(), signal.SIGINT)"
    )

    def test_interrupted_command_is_a_launch_error(self, terminal):
        """SIGINT reaching the menu too does not escape as KeyboardInterrupt."""
        entry = LeafAction("Ping", (sys.executable, "-c", self.INTERRUPT_SELF_AND_MENU))
        with pytest.raises(LaunchError, match="signal 2") as err:
            Launcher(terminal).launch(entry)
        assert err.value.returncode == -signal.SIGINT
        assert terminal.events == ["suspend", "resume"]

    def test_sigint_handler_is_restored(self, terminal):
        """The menu's own Ctrl+C handling returns after the command."""
        before = signal.getsignal(signal.SIGINT)
        Launcher(terminal).launch(LeafAction("Python", (sys.executable, "-c", "pass")))
        assert signal.getsignal(signal.SIGINT) is before

    @pytest.mark.parametrize("error", [EOFError, KeyboardInterrupt])
    def test_wait_prompt_interrupted(self, terminal, error):
        """Closing or interrupting the Enter prompt returns to the menu."""
        with patch('term_commander.launcher.subprocess.run', return_value=MagicMock(returncode=0)), \
             patch('builtins.input', side_effect=error):
            Launcher(terminal, wait_for_key=True).launch(LeafAction("Top", ("htop",)))
        assert terminal.events == ["suspend", "resume"]
