"""Terminal management and menu rendering with curses."""
import curses
import locale
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

HINT = "Up/Down: move  Enter: select  Esc: back  Home: top"
EMPTY_LABEL = "(empty)"
MENU_TOP = 3


class Terminal:
    """Scoped ownership of the curses screen.

    Use as a context manager; the terminal is restored on every exit path.
    """

    def __init__(self, escape_delay=25):
        self.escape_delay = escape_delay
        self.stdscr = None

    def __enter__(self):
        locale.setlocale(locale.LC_ALL, '')
        self.stdscr = curses.initscr()
        try:
            curses.noecho()
            curses.cbreak()
            self.stdscr.keypad(True)
            curses.set_escdelay(self.escape_delay)
            self._hide_cursor()
        except Exception:
            self._restore()
            raise
        logger.debug("Terminal acquired")
        return self

    def __exit__(self, exc_type, exc, tb):
        self._restore()
        logger.debug("Terminal released")
        return False

    def _restore(self):
        if self.stdscr is None:
            return
        self.stdscr.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()
        self.stdscr = None

    def _hide_cursor(self):
        try:
            curses.curs_set(0)
        except curses.error:
            # Not every terminal can hide the cursor
            pass

    @contextmanager
    def suspended(self):
        """Hand the terminal to a child process, then take it back."""
        self.stdscr.clear()
        self.stdscr.refresh()
        curses.def_prog_mode()
        curses.endwin()
        try:
            yield
        finally:
            curses.reset_prog_mode()
            self._hide_cursor()
            self.stdscr.clear()
            self.stdscr.refresh()

    def read_key(self):
        """Block until a key is pressed and return its curses code."""
        return self.stdscr.getch()


def _fit(label, width):
    if len(label) <= width:
        return label
    if width <= 1:
        return label[:width]
    return label[:width - 1] + "…"


def format_menu(level, selected_index, width, marker='>', max_rows=None):
    """Build the lines of the menu box.

    The selected entry gets double side borders and the marker, as in::

        ┌───────────┐
        │   Games   │
        ║>  Tools   ║
        └───────────┘

    Args:
        level: Entries of the level being shown.
        selected_index: Index of the highlighted entry.
        width: Columns available for the box.
        marker: Text drawn before the selected label.
        max_rows: Number of entry lines that fit; the window scrolls to keep
            the selection visible.

    Returns:
        List of ``(text, highlighted)`` tuples, top border first.
    """
    labels = [entry.label for entry in level] or [EMPTY_LABEL]
    pad = len(marker) + 1
    label_width = max(len(label) for label in labels)
    label_width = max(1, min(label_width, width - 2 - 2 * pad))
    inner = label_width + 2 * pad

    offset = 0
    if max_rows is not None and max_rows > 0 and len(labels) > max_rows:
        offset = min(max(0, selected_index - max_rows + 1), len(labels) - max_rows)
        labels = labels[offset:offset + max_rows]

    lines = [("┌" + "─" * inner + "┐", False)]
    for row, label in enumerate(labels):
        body = _fit(label, label_width).center(label_width)
        if level and offset + row == selected_index:
            lines.append((f"║{marker} {body}{' ' * pad}║", True))
        else:
            lines.append((f"│{' ' * pad}{body}{' ' * pad}│", False))
    lines.append(("└" + "─" * inner + "┘", False))
    return lines


class Renderer:
    """Draws menu levels and error views on a curses window."""

    def __init__(self, stdscr, title="Term Commander", marker='>'):
        self.stdscr = stdscr
        self.title = title
        self.marker = marker

    def draw(self, level, selected_index, breadcrumb=()):
        """Redraw the whole screen for the given level."""
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()

        self._put(0, max((width - len(self.title)) // 2, 0), self.title, curses.A_BOLD)
        if breadcrumb:
            self._put(1, 0, _fit(" / ".join(breadcrumb), width))

        max_rows = height - MENU_TOP - 3
        lines = format_menu(level, selected_index, width, self.marker, max_rows)
        x = max((width - len(lines[0][0])) // 2, 0)
        for row, (text, highlighted) in enumerate(lines):
            attr = curses.A_REVERSE if highlighted else curses.A_NORMAL
            self._put(MENU_TOP + row, x, text, attr)

        self._put(height - 1, 0, _fit(HINT, width - 1))
        self.stdscr.refresh()

    def draw_message(self, message):
        """Replace the menu with an error view."""
        self.stdscr.erase()
        self._put(0, 0, f"Error: {message}")
        self._put(2, 0, "Press any key to continue...")
        self.stdscr.refresh()

    def _put(self, y, x, text, attr=curses.A_NORMAL):
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Writing past the window edge; the rest of the frame still draws
            pass
