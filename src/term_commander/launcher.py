"""Running menu commands as child processes."""
import logging
import signal
import subprocess
from contextlib import contextmanager

from .errors import LaunchError

logger = logging.getLogger(__name__)


@contextmanager
def _interrupts_go_to_child():
    """Keep Ctrl+C from ending the menu while a child owns the terminal.

    A handler (not SIG_IGN) is installed so the child still gets the default
    SIGINT behaviour after exec.
    """
    previous = signal.signal(signal.SIGINT, lambda signum, frame: None)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


class Launcher:
    """Runs a leaf entry's command with the terminal handed over to it."""

    def __init__(self, terminal, wait_for_key=False):
        """
        Args:
            terminal: ``Terminal`` providing ``suspended()``.
            wait_for_key: Pause for Enter after the command finishes so its
                output stays visible.
        """
        self.terminal = terminal
        self.wait_for_key = wait_for_key

    def launch(self, entry):
        """Run ``entry.command`` and block until it exits.

        Raises:
            LaunchError: If the process could not be started or exited with
                a non-zero status.
        """
        program = entry.command[0]
        logger.info(f"Launching '{entry.label}': {list(entry.command)}")
        with self.terminal.suspended(), _interrupts_go_to_child():
            try:
                result = subprocess.run(list(entry.command), cwd=entry.working_dir)
            except OSError as e:
                raise LaunchError(f"Failed to execute '{program}': {e}") from e

            if self.wait_for_key:
                try:
                    input("\nPress Enter to return to the menu...")
                except (EOFError, KeyboardInterrupt):
                    pass

        if result.returncode < 0:
            raise LaunchError(
                f"Command terminated by signal {-result.returncode}",
                returncode=result.returncode,
            )
        if result.returncode != 0:
            raise LaunchError(
                f"Command failed with status: {result.returncode}",
                returncode=result.returncode,
            )
        logger.info(f"'{entry.label}' finished")
