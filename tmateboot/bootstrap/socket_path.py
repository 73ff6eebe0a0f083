"""
Control socket path derivation.

Precedence: an explicit `-S` path, then the path inherited through the
session marker variable (only when no `-L` label was given), then a label
inside the per-user runtime directory `{tmp}/{prefix}-{uid}`.

The runtime directory is shared territory under /tmp, so an existing one
is only reused when it is a real directory owned by us with no group or
other permissions. Anything else is an error, never silently accepted.
"""

from __future__ import annotations

import errno
import logging
import os
import secrets
import stat
import string
from pathlib import Path
from typing import Mapping

from tmateboot.bootstrap.locale_state import SESSION_MARKER
from tmateboot.common.config import RuntimeProfile
from tmateboot.common.errors import SocketDirectoryError

__all__ = [
    "socketPath_locate",
    "socketPath_inherit",
    "runtimeDir_path",
    "runtimeDir_ensure",
    "label_randomize",
    "DEFAULT_LABEL",
]

logger = logging.getLogger(__name__)

DEFAULT_LABEL: str = "default"
SYSTEM_TMP: str = "/tmp"
RANDOM_LABEL_LENGTH: int = 6
_LABEL_ALPHABET: str = string.ascii_letters + string.digits


def socketPath_inherit(environ: Mapping[str, str]) -> str | None:
    """
    Extract the socket path from the session marker variable.

    The marker has the form `path,pid,session`; only the path is used.

    Args:
        environ: Process environment.

    Returns:
        Socket path, or None when the marker is unset, empty or starts
        with a comma.
    """
    value: str = environ.get(SESSION_MARKER) or ""
    if not value or value.startswith(","):
        return None
    return value.split(",", 1)[0]


def runtimeDir_path(environ: Mapping[str, str], prefix: str, uid: int) -> str:
    """Return `{TMUX_TMPDIR or /tmp}/{prefix}-{uid}`."""
    base: str = environ.get("TMUX_TMPDIR") or SYSTEM_TMP
    return f"{base}/{prefix}-{uid}"


def _directory_fail(code: int, path: str) -> SocketDirectoryError:
    return SocketDirectoryError(os.strerror(code), errno=code, path=path)


def runtimeDir_ensure(path: str, uid: int) -> str:
    """
    Create or validate the per-user runtime directory.

    Args:
        path:
            Directory path.
        uid:
            User id that must own the directory.

    Returns:
        Canonical directory path, or `path` unchanged when it cannot be
        canonicalized.

    Raises:
        SocketDirectoryError:
            Creation failed, the path is not a directory, or ownership or
            permissions are wrong.
    """
    try:
        os.mkdir(path, stat.S_IRWXU)
        logger.debug(f"Created runtime directory {path}")
    except FileExistsError:
        pass
    except OSError as exc:
        raise _directory_fail(exc.errno or errno.EIO, path) from exc

    try:
        sb = os.lstat(path)
    except OSError as exc:
        raise _directory_fail(exc.errno or errno.EIO, path) from exc

    if not stat.S_ISDIR(sb.st_mode):
        raise _directory_fail(errno.ENOTDIR, path)
    if sb.st_uid != uid or (sb.st_mode & (stat.S_IRWXG | stat.S_IRWXO)) != 0:
        logger.warning(
            f"Refusing runtime directory {path}: uid={sb.st_uid} "
            f"mode={stat.S_IMODE(sb.st_mode):o}"
        )
        raise _directory_fail(errno.EACCES, path)

    try:
        return str(Path(path).resolve(strict=True))
    except (OSError, RuntimeError):
        logger.debug(f"Could not canonicalize {path}, using it as is")
        return path


def label_randomize(directory: str) -> str:
    """Pick a random label not yet present in `directory`."""
    while True:
        label = "".join(secrets.choice(_LABEL_ALPHABET) for _ in range(RANDOM_LABEL_LENGTH))
        if not os.path.lexists(os.path.join(directory, label)):
            return label


def socketPath_locate(
    explicit_path: str | None,
    label: str | None,
    environ: Mapping[str, str],
    profile: RuntimeProfile | None = None,
    uid: int | None = None,
) -> str:
    """
    Resolve the control socket path.

    Args:
        explicit_path:
            Value of `-S`, used verbatim when given.
        label:
            Value of `-L`; disables inheritance from the session marker.
        environ:
            Process environment.
        profile:
            Runtime profile (prefix and label randomization).
        uid:
            Current user id (defaults to `os.getuid()`).

    Returns:
        Socket path.

    Raises:
        SocketDirectoryError: The runtime directory is unusable.
    """
    if explicit_path is not None:
        return explicit_path

    if label is None:
        inherited: str | None = socketPath_inherit(environ)
        if inherited is not None:
            logger.debug(f"Using socket inherited from ${SESSION_MARKER}: {inherited}")
            return inherited

    profile = profile or RuntimeProfile()
    uid = os.getuid() if uid is None else uid
    directory: str = runtimeDir_ensure(
        runtimeDir_path(environ, profile.socket_prefix, uid), uid
    )

    if label is None:
        label = label_randomize(directory) if profile.randomize_label else DEFAULT_LABEL
    return f"{directory}/{label}"
