import sys
import argparse
import logging

# Local imports
from .config import load_menu, load_settings, SETTINGS_FILE
from .display import Renderer, Terminal
from .errors import ConfigError, LaunchError
from .keys import command_for_key
from .launcher import Launcher
from .navigator import Navigator

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


class MenuController:
    def __init__(self, settings, terminal=None, launcher=None):
        self.settings = settings
        display_config = settings.get('display', {})
        self.title = str(display_config.get('title', 'Term Commander'))
        self.marker = str(display_config.get('marker', '>'))
        launcher_config = settings.get('launcher', {})

        # Load Menu Tree
        self.root_nodes = load_menu(settings['menu_file'])
        self.navigator = Navigator(self.root_nodes)

        self.terminal = terminal if terminal is not None else Terminal()
        self.launcher = launcher if launcher is not None else Launcher(
            self.terminal, wait_for_key=launcher_config.get('wait_for_key', False)
        )
        self.error_message = None

    def run(self):
        """Run the input/render loop until the user exits."""
        with self.terminal:
            renderer = Renderer(self.terminal.stdscr, self.title, self.marker)
            try:
                while not self.navigator.finished:
                    self._step(renderer)
            except KeyboardInterrupt:
                logger.info("Interrupted")
        logger.info("Exiting")

    def _step(self, renderer):
        if self.error_message is not None:
            renderer.draw_message(self.error_message)
            self.terminal.read_key()
            self.error_message = None
            return

        state = self.navigator.state
        renderer.draw(state.current_level, state.selected_index, self.navigator.breadcrumb())

        command = command_for_key(self.terminal.read_key())
        if command is None:
            return

        entry = self.navigator.apply(command)
        if entry is not None:
            self._launch(entry)

    def _launch(self, entry):
        try:
            self.launcher.launch(entry)
        except LaunchError as e:
            logger.info(f"Launch of '{entry.label}' failed: {e}")
            self.error_message = str(e)


def _setup_logging(level, log_file):
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    if not log_file:
        # stderr is under curses control while the menu is on screen
        numeric_level = max(numeric_level, logging.WARNING)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, filename=log_file)


def _report_fatal(message, log_file):
    logger.error(message)
    if log_file:
        # Records go to the file only; the user still needs to see why we stopped
        print(message, file=sys.stderr)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Term Commander")
    parser.add_argument("--config", help=f"Path to settings file (default: {SETTINGS_FILE})")
    parser.add_argument("--menu", help="Path to menu file (default: menu.csv)")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG or INFO")
    parser.add_argument("--log-file", help="Write log records to this file")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config or SETTINGS_FILE, required=args.config is not None)
    except ConfigError as e:
        _setup_logging(args.log_level or 'WARNING', args.log_file)
        _report_fatal(f"Failed to load config: {e}", args.log_file)
        return 1

    log_config = settings.get('logging', {})
    log_file = args.log_file or log_config.get('file')
    _setup_logging(args.log_level or log_config.get('level', 'WARNING'), log_file)
    if args.menu:
        settings['menu_file'] = args.menu

    try:
        app = MenuController(settings)
    except ConfigError as e:
        _report_fatal(f"Failed to load menu: {e}", log_file)
        return 1

    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
