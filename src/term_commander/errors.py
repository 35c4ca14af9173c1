"""Exceptions raised by Term Commander."""


class CommanderError(Exception):
    """Base class for all Term Commander errors."""


class ConfigError(CommanderError):
    """The menu or settings file is missing, unreadable or malformed."""


class LaunchError(CommanderError):
    """A menu command could not be started or exited with a failure status."""

    def __init__(self, message, returncode=None):
        super().__init__(message)
        self.returncode = returncode
