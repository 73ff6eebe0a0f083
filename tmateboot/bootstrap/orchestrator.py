"""
Startup sequencing: from argv and the environment to a StartupContext.

Order matters and mirrors what the client layer expects:

1. establish a UTF-8 locale (fatal on failure)
2. login mode from a leading `-` in argv[0]
3. parse flags, queueing deferred options
4. fold in UTF-8 capability from the environment
5. build option trees and the environment snapshot
6. apply the editor key table override
7. locate the control socket
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass, field
from typing import Callable, MutableMapping, Sequence

from tmateboot.bootstrap.deferred import DeferredOptionQueue
from tmateboot.bootstrap.flags import DEFERRED_FLAGS, arguments_parse
from tmateboot.bootstrap.locale_state import SESSION_MARKER, locale_establish, utf8_resolve
from tmateboot.bootstrap.shell import shell_resolve
from tmateboot.bootstrap.socket_path import socketPath_locate
from tmateboot.bootstrap.trees import OptionTrees, cwd_get, modeKeys_apply, trees_bootstrap
from tmateboot.common.config import RuntimeProfile
from tmateboot.common.types import ClientFlags

__all__ = ["StartupContext", "startup_run", "progname_get", "flags_compose"]

logger = logging.getLogger(__name__)

DEFAULT_PROGNAME: str = "tmate"


@dataclass
class StartupContext:
    """Everything resolved at startup, handed by reference to the client layer."""

    progname: str
    socket_path: str
    flags: ClientFlags
    shell_command: str | None
    arguments: list[str]
    trees: OptionTrees
    deferred: DeferredOptionQueue
    profile: RuntimeProfile
    cfg_file: str | None = None
    verbosity: int = 0
    foreground: bool = False
    causes: list[str] = field(default_factory=list)


def progname_get(argv: Sequence[str]) -> str:
    """Return basename of argv[0], keeping a leading `-`."""
    if not argv or not argv[0]:
        return DEFAULT_PROGNAME
    return os.path.basename(argv[0]) or DEFAULT_PROGNAME


def flags_compose(
    argv0: str, args: argparse.Namespace, profile: RuntimeProfile
) -> ClientFlags:
    """
    Combine login mode, profile capabilities and parsed flags.

    Flags only ever add bits; nothing here clears one.

    Args:
        argv0: Program invocation name.
        args: Parsed flags.
        profile: Runtime profile.

    Returns:
        Client flags before environment UTF-8 detection.
    """
    flags = ClientFlags.LOGIN if argv0.startswith("-") else ClientFlags.NONE
    if profile.force_capabilities:
        flags |= ClientFlags.COLOURS_256 | ClientFlags.UTF8
    if args.colours_256:
        flags |= ClientFlags.COLOURS_256
    if args.control >= 1:
        flags |= ClientFlags.CONTROL
    if args.control >= 2:
        flags |= ClientFlags.CONTROL_CONTROL
    if args.login:
        flags |= ClientFlags.LOGIN
    if args.utf8:
        flags |= ClientFlags.UTF8
    return flags


def deferred_capture(args: argparse.Namespace) -> DeferredOptionQueue:
    """Queue -k, -n, -r and -a values for later application."""
    queue = DeferredOptionQueue()
    for attribute, name in DEFERRED_FLAGS.items():
        value: str | None = getattr(args, attribute, None)
        if value is not None:
            queue.option_enqueue(name, value)
    return queue


def startup_run(
    argv: Sequence[str],
    environ: MutableMapping[str, str] | None = None,
    profile: RuntimeProfile | None = None,
    locale_establish_func: Callable[[], str] | None = None,
    logging_setup_func: Callable[[int], None] | None = None,
    uid: int | None = None,
    cwd: str | None = None,
) -> StartupContext:
    """
    Run the startup sequence.

    Args:
        argv:
            Full argument vector including the program name.
        environ:
            Mutable process environment (defaults to os.environ); -F removes
            the session marker from it.
        profile:
            Runtime profile from the settings file.
        locale_establish_func:
            Locale setup callback (defaults to `locale_establish`).
        logging_setup_func:
            Called with the verbosity once flags are parsed.
        uid:
            User id for the runtime directory checks.
        cwd:
            Working directory for the PWD entry (defaults to os.getcwd()).

    Returns:
        Populated StartupContext.

    Raises:
        LocaleError: No UTF-8 locale.
        UsageError: Bad flags.
        SocketDirectoryError: Unusable runtime directory.
    """
    env: MutableMapping[str, str] = os.environ if environ is None else environ
    profile = profile or RuntimeProfile()

    (locale_establish_func or locale_establish)()

    progname: str = progname_get(argv)
    args: argparse.Namespace = arguments_parse(progname, argv[1:])

    verbosity: int = args.verbosity
    if args.foreground:
        verbosity += 1
        env.pop(SESSION_MARKER, None)
    if logging_setup_func is not None:
        logging_setup_func(verbosity)

    flags: ClientFlags = flags_compose(progname, args, profile)
    if utf8_resolve(env):
        flags |= ClientFlags.UTF8

    deferred: DeferredOptionQueue = deferred_capture(args)

    shell: str = shell_resolve(env, progname, profile.fallback_shell)
    trees: OptionTrees = trees_bootstrap(env, shell, cwd if cwd is not None else cwd_get())
    modeKeys_apply(trees, env)

    socket_path: str = socketPath_locate(args.socket_path, args.label, env, profile, uid)

    logger.info(f"Socket path: {socket_path}")
    logger.debug(f"Client flags: {flags.describe()} shell: {shell}")

    return StartupContext(
        progname=progname,
        socket_path=socket_path,
        flags=flags,
        shell_command=args.shell_command,
        arguments=list(args.command),
        trees=trees,
        deferred=deferred,
        profile=profile,
        cfg_file=args.cfg_file,
        verbosity=verbosity,
        foreground=args.foreground,
    )
