"""Exception hierarchy for startup failures."""

from __future__ import annotations


class TmateBootError(Exception):
    """Base exception for this project."""


class UsageError(TmateBootError):
    """Raised for malformed or conflicting command-line flags."""


class ConfigError(TmateBootError):
    """Raised when the settings file cannot be loaded."""


class LocaleError(TmateBootError):
    """Raised when no UTF-8 capable locale can be established."""


class SocketDirectoryError(TmateBootError):
    """Raised when the per-user socket directory is unusable."""

    def __init__(self, message: str, *, errno: int | None = None, path: str | None = None):
        super().__init__(message)
        self.errno = errno
        self.path = path


class OptionError(TmateBootError):
    """Raised when an option name is unknown or its value does not parse."""

    def __init__(self, message: str, *, name: str | None = None):
        super().__init__(message)
        self.name = name


class DeferredApplyError(TmateBootError):
    """Raised when a deferred command fails; collected rather than fatal."""

    def __init__(self, message: str, *, command: list[str] | None = None):
        super().__init__(message)
        self.command = list(command or [])
