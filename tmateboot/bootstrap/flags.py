"""
Command-line flag parsing and usage text.

Flags follow getopt conventions: single letters, bundling (`-2u`),
attached arguments (`-Sfoo`), and parsing stops at the first positional
argument so that `tmate new-session -d` passes `-d` through to the command.
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Sequence

import yaml

from tmateboot import __version__
from tmateboot.common.errors import UsageError

__all__ = ["arguments_parse", "usage_get", "version_get", "DEFERRED_FLAGS"]

USAGE_TEMPLATE: str = (
    "Usage: {prog} [options] [tmux-command [flags]]\n"
    "\n"
    "Basic options:\n"
    " -n <name>    specify the session token instead of getting a random one\n"
    " -r <name>    same, but for the read-only token\n"
    " -k <key>     specify an api-key, necessary for using named sessions on tmate.io\n"
    " -F           set the foreground mode, useful for setting remote access\n"
    " -f <path>    set the config file path\n"
    " -S <path>    set the socket path, useful to issue commands to a running tmate instance\n"
    " -a <path>    limit access to ssh public keys listed in provided file\n"
    " -v           set verbosity (can be repeated)\n"
    " -V           print version\n"
)

# Flag letter -> namespace attribute, for flags that take a value
VALUE_FLAGS: dict[str, str] = {
    "c": "shell_command",
    "f": "cfg_file",
    "L": "label",
    "S": "socket_path",
    "k": "api_key",
    "n": "session_name",
    "r": "session_name_ro",
    "a": "authorized_keys",
}

# Namespace attribute -> deferred option name
DEFERRED_FLAGS: dict[str, str] = {
    "api_key": "tmate-api-key",
    "session_name": "tmate-session-name",
    "session_name_ro": "tmate-session-name-ro",
    "authorized_keys": "tmate-authorized-keys",
}


def usage_get(prog: str) -> str:
    """Return usage text for `prog`."""
    return USAGE_TEMPLATE.format(prog=prog)


def version_get(prog: str) -> str:
    """Return the two-line version banner printed by -V."""
    return f"{prog} {__version__}\nPyYAML {yaml.__version__}\n"


class _FlagParser(argparse.ArgumentParser):
    """ArgumentParser raising UsageError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


class _UsageAction(argparse.Action):
    def __init__(self, option_strings, dest, **kwargs) -> None:
        super().__init__(option_strings, dest, nargs=0, default=argparse.SUPPRESS, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> NoReturn:
        raise UsageError("")


class _VersionAction(argparse.Action):
    def __init__(self, option_strings, dest, **kwargs) -> None:
        super().__init__(option_strings, dest, nargs=0, default=argparse.SUPPRESS, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> NoReturn:
        sys.stdout.write(version_get(parser.prog))
        sys.stdout.flush()
        parser.exit(0)


def flagValues_scan(args: Sequence[str]) -> tuple[list[str], dict[str, str]]:
    """
    Walk the flag words the way getopt does.

    getopt always takes the word after a value flag as its value, so
    `-n -foo` names the session `-foo`. argparse would read `-foo` as
    another flag, so such a value is glued on (`-n-foo`). The scan stops
    at the first positional argument or `--`.

    Args:
        args: Arguments without the program name.

    Returns:
        Arguments ready for argparse, and the last value seen for each
        value flag, keyed by namespace attribute.
    """
    words: list[str] = []
    values: dict[str, str] = {}
    index: int = 0
    while index < len(args):
        word: str = args[index]
        if word == "--" or word == "-" or not word.startswith("-"):
            break
        index += 1
        for position in range(1, len(word)):
            dest: str | None = VALUE_FLAGS.get(word[position])
            if dest is None:
                continue
            if position + 1 < len(word):
                values[dest] = word[position + 1 :]
            elif index < len(args):
                values[dest] = args[index]
                if args[index].startswith("-"):
                    word += args[index]
                else:
                    words.append(word)
                    word = args[index]
                index += 1
            break
        words.append(word)
    return words + list(args[index:]), values


def parser_build(prog: str) -> argparse.ArgumentParser:
    """
    Build the flag parser.

    Args:
        prog: Program name shown in messages.

    Returns:
        Configured parser.
    """
    parser: argparse.ArgumentParser = _FlagParser(
        prog=prog, add_help=False, allow_abbrev=False
    )
    parser.add_argument("-2", dest="colours_256", action="store_true")
    parser.add_argument("-c", dest="shell_command", default=None)
    parser.add_argument("-C", dest="control", action="count", default=0)
    parser.add_argument("-V", action=_VersionAction)
    parser.add_argument("-f", dest="cfg_file", default=None)
    parser.add_argument("-l", dest="login", action="store_true")
    parser.add_argument("-L", dest="label", default=None)
    parser.add_argument("-q", dest="quiet", action="store_true")
    parser.add_argument("-S", dest="socket_path", default=None)
    parser.add_argument("-u", dest="utf8", action="store_true")
    parser.add_argument("-v", dest="verbosity", action="count", default=0)
    parser.add_argument("-F", dest="foreground", action="store_true")
    parser.add_argument("-k", dest="api_key", default=None)
    parser.add_argument("-n", dest="session_name", default=None)
    parser.add_argument("-r", dest="session_name_ro", default=None)
    parser.add_argument("-a", dest="authorized_keys", default=None)
    parser.add_argument("-h", action=_UsageAction)
    parser.add_argument("command", nargs=argparse.REMAINDER)
    return parser


def arguments_parse(prog: str, args: Sequence[str]) -> argparse.Namespace:
    """
    Parse flags (everything after argv[0]).

    Args:
        prog: Program name.
        args: Arguments without the program name.

    Returns:
        Parsed namespace; `command` holds the remaining arguments.

    Raises:
        UsageError:
            -h, an unknown flag, a missing flag argument, or -c combined
            with a positional command.
    """
    parser = parser_build(prog)
    words, values = flagValues_scan(args)
    namespace: argparse.Namespace = parser.parse_args(words)
    # argparse drops a value spelled `--`
    for dest, value in values.items():
        setattr(namespace, dest, value)

    command: list[str] = list(namespace.command or [])
    if command and command[0] == "--":
        command = command[1:]
    namespace.command = command

    if namespace.shell_command is not None and command:
        raise UsageError("-c cannot be combined with a command")
    return namespace
