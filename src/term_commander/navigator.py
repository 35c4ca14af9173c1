"""Cursor into the menu tree and the commands that move it."""
import logging
from collections import deque
from enum import Enum

logger = logging.getLogger(__name__)


class Command(Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SELECT = "select"
    BACK = "back"
    HOME = "home"
    EXIT = "exit"


class NavigationState:
    """Current level, selected index and the stack of parent levels."""

    def __init__(self, root):
        self.root = root
        self.current_level = root
        self.selected_index = 0
        self.path = deque()

    @property
    def depth(self):
        return len(self.path)

    @property
    def at_root(self):
        return not self.path

    @property
    def selected_entry(self):
        if not self.current_level:
            return None
        return self.current_level[self.selected_index]


class Navigator:
    """Applies commands to a ``NavigationState``."""

    def __init__(self, root):
        self.state = NavigationState(root)
        self.finished = False

    def apply(self, command):
        """Apply one command.

        Returns:
            The ``LeafAction`` to launch when a leaf was selected, else None.
        """
        handler = {
            Command.MOVE_UP: self._on_move_up,
            Command.MOVE_DOWN: self._on_move_down,
            Command.SELECT: self._on_select,
            Command.BACK: self._on_back,
            Command.HOME: self._on_home,
            Command.EXIT: self._on_exit,
        }[command]
        return handler()

    def _on_move_up(self):
        state = self.state
        if state.current_level:
            state.selected_index = (state.selected_index - 1) % len(state.current_level)

    def _on_move_down(self):
        state = self.state
        if state.current_level:
            state.selected_index = (state.selected_index + 1) % len(state.current_level)

    def _on_select(self):
        state = self.state
        entry = state.selected_entry
        if entry is None:
            return None
        if entry.is_submenu:
            state.path.append((state.current_level, state.selected_index))
            state.current_level = entry.children
            state.selected_index = 0
            logger.debug(f"Entered '{entry.label}' (depth {state.depth})")
            return None
        return entry

    def _on_back(self):
        state = self.state
        if state.at_root:
            self._on_exit()
            return
        state.current_level, state.selected_index = state.path.pop()

    def _on_home(self):
        state = self.state
        state.path.clear()
        state.current_level = state.root
        state.selected_index = 0

    def _on_exit(self):
        self.finished = True

    def breadcrumb(self):
        """Labels of the sub-menus between the root and the current level."""
        return [level[index].label for level, index in self.state.path]
