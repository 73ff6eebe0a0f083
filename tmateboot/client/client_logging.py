"""
Client logging policy.

This module centralizes client logging setup: version-tagged formats, the
-v/-F verbosity steps and the per-process client log file.
"""

from __future__ import annotations

import logging
import os

from tmateboot import __version__

__all__ = ["logging_setup", "logLevel_resolve", "clientLogFile_get", "logFormatWithVersion_get"]

_LEVEL_STEPS: tuple[str, ...] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def logLevel_resolve(level: str, verbosity: int) -> str:
    """
    Lower the configured level one step per -v.

    Args:
        level:
            Configured level name.
        verbosity:
            Number of -v flags (plus one for -F).

    Returns:
        Effective level name, never below DEBUG.
    """
    name: str = level.upper()
    if name not in _LEVEL_STEPS:
        name = "WARNING"
    index: int = min(_LEVEL_STEPS.index(name) + max(verbosity, 0), len(_LEVEL_STEPS) - 1)
    return _LEVEL_STEPS[index]


def clientLogFile_get(progname: str, verbosity: int, log_file: str | None) -> str | None:
    """
    Pick the log file: the configured one, or `{progname}-client-{pid}.log`
    in the working directory once verbosity is raised.
    """
    if log_file:
        return log_file
    if verbosity <= 0:
        return None
    return f"{progname.lstrip('-')}-client-{os.getpid()}.log"


def logFormatWithVersion_get(log_format: str) -> str:
    """
    Inject runtime version tag into timestamped log format.

    Args:
        log_format:
            Base formatter string.

    Returns:
        Formatter string with embedded version token.
    """
    return log_format.replace("%(asctime)s", f"%(asctime)s [v{__version__}]")


def logging_setup(level: str, log_format: str, log_file: str | None) -> None:
    """
    Configure client logging handlers and format.

    Args:
        level:
            Log level name.
        log_format:
            Base logging format string.
        log_file:
            Optional log-file path.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=logFormatWithVersion_get(log_format),
        handlers=handlers,
    )
