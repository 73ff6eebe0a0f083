"""Config file loading for the headless command layer."""

from __future__ import annotations

import logging
import os
import shlex
from typing import Mapping

from tmateboot.bootstrap.shell import home_find
from tmateboot.client.commands import CommandRunner

__all__ = ["cfgLines_split", "cfgFile_load", "cfgFiles_load", "SYSTEM_CFG_FILE", "USER_CFG_NAME"]

logger = logging.getLogger(__name__)

SYSTEM_CFG_FILE: str = "/etc/tmate.conf"
USER_CFG_NAME: str = ".tmate.conf"


def cfgLines_split(text: str) -> list[tuple[int, str]]:
    """
    Join backslash continuations and drop blank and comment lines.

    Returns:
        (line number, logical line) pairs; the number is where the logical
        line starts.
    """
    lines: list[tuple[int, str]] = []
    pending: str = ""
    start: int = 0
    for number, raw in enumerate(text.splitlines(), start=1):
        if not pending:
            start = number
        if raw.endswith("\\") and not raw.endswith("\\\\"):
            pending += raw[:-1]
            continue
        line = (pending + raw).strip()
        pending = ""
        if not line or line.startswith("#"):
            continue
        lines.append((start, line))
    if pending.strip():
        lines.append((start, pending.strip()))
    return lines


def cfgFile_load(path: str, runner: CommandRunner, quiet: bool = False) -> int:
    """
    Run every command in a config file with deferred errors.

    Args:
        path: Config file path.
        runner: Headless command runner.
        quiet: Missing file is not an error.

    Returns:
        Number of commands that succeeded.
    """
    try:
        with open(path, "r") as f:
            text: str = f.read()
    except FileNotFoundError:
        if not quiet:
            runner.cause_add(f"{path}: No such file or directory")
        return 0
    except OSError as exc:
        runner.cause_add(f"{path}: {exc.strerror or exc}")
        return 0

    logger.info(f"Loading config file {path}")
    succeeded: int = 0
    for number, line in cfgLines_split(text):
        try:
            argv: list[str] = shlex.split(line, comments=True)
        except ValueError as exc:
            runner.cause_add(f"{path}:{number}: {exc}")
            continue
        if not argv:
            continue
        if runner(argv, defer_errors=True, origin=f"{path}:{number}"):
            succeeded += 1
    return succeeded


def cfgFiles_load(
    cfg_file: str | None, runner: CommandRunner, environ: Mapping[str, str]
) -> int:
    """
    Load the -f file, or the system and per-user default files.

    Args:
        cfg_file: Path given with -f, if any.
        runner: Headless command runner.
        environ: Process environment for the home directory lookup.

    Returns:
        Number of commands that succeeded across all files.
    """
    if cfg_file is not None:
        return cfgFile_load(cfg_file, runner)

    total: int = cfgFile_load(SYSTEM_CFG_FILE, runner, quiet=True)
    home: str | None = home_find(environ)
    if home is not None:
        total += cfgFile_load(os.path.join(home, USER_CFG_NAME), runner, quiet=True)
    return total
