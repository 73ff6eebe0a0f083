"""Hand-off from startup to the client entry point"""

from __future__ import annotations

import logging
import sys
from importlib.metadata import entry_points
from typing import Callable, Mapping, Optional

from tmateboot.bootstrap.orchestrator import StartupContext
from tmateboot.client.cfg import cfgFiles_load
from tmateboot.client.commands import CommandRunner

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "tmateboot.client"

ClientEntry = Callable[[StartupContext], int]


def dryRun_client(context: StartupContext) -> int:
    """
    Client used when no client layer is installed: report what was resolved

    Args:
        context: Startup context

    Returns:
        0
    """
    if context.shell_command is not None:
        command = f"-c {context.shell_command}"
    elif context.arguments:
        command = " ".join(context.arguments)
    else:
        command = "(default)"

    print(f"socket: {context.socket_path}")
    print(f"flags: {context.flags.describe()}")
    print(f"shell: {context.trees.session.option_get('default-shell')}")
    print(f"command: {command}")
    logger.info("No client entry point installed, dry run only")
    return 0


def clientEntry_resolve() -> ClientEntry:
    """
    Find the client entry point registered under ENTRY_POINT_GROUP

    Returns:
        First registered entry point, or the dry-run client
    """
    found = list(entry_points(group=ENTRY_POINT_GROUP))
    if not found:
        return dryRun_client
    if len(found) > 1:
        logger.warning(
            f"Multiple client entry points registered, using {found[0].name}"
        )
    return found[0].load()


def causes_report(causes: list[str]) -> None:
    """Print collected deferred errors to stderr"""
    for cause in causes:
        print(cause, file=sys.stderr)


def clientMain_run(
    context: StartupContext,
    environ: Mapping[str, str],
    client_entry: Optional[ClientEntry] = None,
) -> int:
    """
    Load config files, apply deferred options, then run the client

    Args:
        context: Startup context
        environ: Process environment (home directory lookup)
        client_entry: Client to run; resolved from entry points when None

    Returns:
        Client exit status
    """
    runner = CommandRunner(context.trees)
    loaded = cfgFiles_load(context.cfg_file, runner, environ)
    delivered = context.deferred.options_drain(runner)
    logger.debug(f"Config commands applied: {loaded}, deferred options delivered: {delivered}")

    context.causes.extend(str(cause) for cause in runner.causes)
    causes_report(context.causes)

    entry = client_entry or clientEntry_resolve()
    return entry(context)
