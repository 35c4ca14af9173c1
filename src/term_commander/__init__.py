"""Term Commander - A configurable terminal menu launcher."""

from .main import MenuController, main
from .menu import LeafAction, SubMenu
from .navigator import Command, Navigator
from .errors import ConfigError, LaunchError

__all__ = ['MenuController', 'main', 'LeafAction', 'SubMenu', 'Command', 'Navigator',
           'ConfigError', 'LaunchError']
