"""Keyboard input mapping."""
import curses

from .navigator import Command

KEY_ESCAPE = 27

KEY_COMMANDS = {
    curses.KEY_UP: Command.MOVE_UP,
    curses.KEY_DOWN: Command.MOVE_DOWN,
    curses.KEY_ENTER: Command.SELECT,
    ord('\n'): Command.SELECT,
    ord('\r'): Command.SELECT,
    KEY_ESCAPE: Command.BACK,
    curses.KEY_HOME: Command.HOME,
}


def command_for_key(key):
    """Map a curses key code to a ``Command``; None for unsupported keys.

    Escape always maps to BACK. The navigator treats BACK at the root level
    as exit.
    """
    return KEY_COMMANDS.get(key)
