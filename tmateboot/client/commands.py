"""
Headless command execution against the global option trees.

Only the option commands are understood here; every other command belongs
to the server and is reported as unknown. In deferred mode failures are
collected as causes and shown once startup has finished, so one bad line
never stops the rest of a config file or the deferred options.
"""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from tmateboot.bootstrap.trees import OptionTrees
from tmateboot.common.errors import DeferredApplyError, OptionError, TmateBootError, UsageError
from tmateboot.options.table import entry_find
from tmateboot.options.tree import OptionsTree

__all__ = ["CommandRunner", "SET_OPTION_ALIASES"]

logger = logging.getLogger(__name__)

SET_OPTION_ALIASES: frozenset[str] = frozenset({"set-option", "set"})


class _CommandParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def _setOptionParser_build() -> argparse.ArgumentParser:
    parser = _CommandParser(prog="set-option", add_help=False, allow_abbrev=False)
    parser.add_argument("-g", dest="global_", action="store_true")
    parser.add_argument("-q", dest="quiet", action="store_true")
    parser.add_argument("-s", dest="server", action="store_true")
    parser.add_argument("-u", dest="unset", action="store_true")
    parser.add_argument("-w", dest="window", action="store_true")
    return parser


class CommandRunner:
    """Runs headless commands and keeps the causes of deferred failures."""

    def __init__(self, trees: OptionTrees) -> None:
        self.trees: OptionTrees = trees
        self.causes: list[DeferredApplyError] = []
        self._parser: argparse.ArgumentParser = _setOptionParser_build()

    def __call__(
        self, argv: Sequence[str], defer_errors: bool = False, origin: str | None = None
    ) -> bool:
        """
        Run one command.

        Args:
            argv: Command name followed by its arguments.
            defer_errors: Collect failures as causes instead of raising.
            origin: Location prefix for collected causes (`file:line`).

        Returns:
            True when the command succeeded.

        Raises:
            TmateBootError: Command failed and `defer_errors` is False.
        """
        command: list[str] = list(argv)
        try:
            self.command_execute(command)
        except TmateBootError as exc:
            if not defer_errors:
                raise
            message: str = f"{origin}: {exc}" if origin else str(exc)
            self.cause_add(message, command)
            return False
        return True

    def cause_add(self, message: str, command: Sequence[str] | None = None) -> None:
        """Record a deferred failure."""
        logger.warning(f"Deferred error: {message}")
        self.causes.append(DeferredApplyError(message, command=list(command or [])))

    def command_execute(self, argv: list[str]) -> None:
        """Dispatch `argv` to its command implementation."""
        if not argv:
            raise UsageError("empty command")
        name: str = argv[0]
        if name in SET_OPTION_ALIASES:
            self.setOption_run(argv[1:])
            return
        raise UsageError(f"unknown command: {name}")

    def tree_select(self, option: str, server: bool, window: bool) -> OptionsTree:
        """
        Pick the tree an option is set in.

        -s and -w force the server or window tree; otherwise the schema
        decides.
        """
        if server:
            tree = self.trees.server
        elif window:
            tree = self.trees.window
        else:
            entry = entry_find(option)
            if entry is None:
                raise OptionError(f"invalid option: {option}", name=option)
            tree = self.trees.tree_get(entry.scope)
        if option not in tree:
            raise OptionError(f"invalid option: {option}", name=option)
        return tree

    def setOption_run(self, args: list[str]) -> None:
        """
        Implement `set-option [-gqsuw] option [value]`.

        Flags end at the first word that is not one, so a value such as
        `-foo` stays a value.
        """
        index: int = 0
        while index < len(args) and args[index].startswith("-") and args[index] != "-":
            index += 1
            if args[index - 1] == "--":
                break
        flags: list[str] = [word for word in args[:index] if word != "--"]
        positionals: list[str] = args[index:]
        parsed: argparse.Namespace = self._parser.parse_args(flags)
        if not positionals:
            raise UsageError("missing option name")
        if len(positionals) > 2:
            raise UsageError("too many arguments")
        parsed.option = positionals[0]
        parsed.value = positionals[1] if len(positionals) == 2 else None
        try:
            tree: OptionsTree = self.tree_select(parsed.option, parsed.server, parsed.window)
        except OptionError:
            if parsed.quiet:
                logger.debug(f"Ignoring unknown option {parsed.option}")
                return
            raise

        if parsed.unset:
            if parsed.value is not None:
                raise UsageError("value given with -u")
            tree.option_unset(parsed.option)
            return
        tree.value_parse_set(parsed.option, parsed.value)
