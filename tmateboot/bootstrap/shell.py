"""
Login shell and home directory resolution.

The client must never pick itself as the default shell, otherwise every
new pane would start another client and recurse.
"""

from __future__ import annotations

import logging
import os
import pwd
from typing import Mapping

__all__ = ["shell_resolve", "shell_check", "shell_isSelf", "home_find"]

logger = logging.getLogger(__name__)

FALLBACK_SHELL: str = "/bin/sh"


def shell_isSelf(shell: str, progname: str) -> bool:
    """
    Check whether `shell` names this program.

    Args:
        shell:
            Candidate shell path.
        progname:
            Invocation name of this program; a leading `-` (login
            invocation) is ignored.

    Returns:
        True when the last path component equals the program name.
    """
    base: str = shell.rsplit("/", 1)[-1]
    if progname.startswith("-"):
        progname = progname[1:]
    return base == progname


def shell_check(shell: str | None, progname: str) -> bool:
    """
    Validate a candidate login shell.

    Args:
        shell:
            Candidate path, possibly None or empty.
        progname:
            Invocation name of this program.

    Returns:
        True for an absolute, executable path that is not this program.
    """
    if not shell or not shell.startswith("/"):
        return False
    if shell_isSelf(shell, progname):
        return False
    if not os.access(shell, os.X_OK):
        return False
    return True


def _passwdEntry_get() -> pwd.struct_passwd | None:
    try:
        return pwd.getpwuid(os.getuid())
    except KeyError:
        return None


def shell_resolve(
    environ: Mapping[str, str], progname: str, fallback: str = FALLBACK_SHELL
) -> str:
    """
    Resolve the default shell: $SHELL, then the user database, then `fallback`.

    Args:
        environ:
            Process environment.
        progname:
            Invocation name of this program.
        fallback:
            Shell used when neither candidate passes `shell_check`.

    Returns:
        Shell path.
    """
    shell: str | None = environ.get("SHELL")
    if shell_check(shell, progname):
        return shell

    entry = _passwdEntry_get()
    if entry is not None and shell_check(entry.pw_shell, progname):
        logger.debug(f"SHELL unusable, using login shell {entry.pw_shell}")
        return entry.pw_shell

    logger.debug(f"No usable login shell, falling back to {fallback}")
    return fallback


def home_find(environ: Mapping[str, str]) -> str | None:
    """Return $HOME, else the user database home directory, else None."""
    home: str | None = environ.get("HOME")
    if home:
        return home
    entry = _passwdEntry_get()
    if entry is not None:
        return entry.pw_dir
    return None
