"""Static option schema for the server, session and window trees.

Each entry names an option, the tree it belongs to, how its value parses
and the default the tree is seeded with. The session ``default-shell``
default is replaced at startup with the resolved login shell.
"""

from __future__ import annotations

from dataclasses import dataclass

from tmateboot.common.types import ModeKeys, OptionScope, OptionType

__all__ = ["OptionEntry", "OPTIONS_TABLE", "entries_get", "entry_find"]

NUMBER_MAX: int = 2**31 - 1
MODE_KEY_CHOICES: tuple[str, ...] = (ModeKeys.EMACS.value, ModeKeys.VI.value)


@dataclass(frozen=True)
class OptionEntry:
    """Schema row for a single option."""

    name: str
    scope: OptionScope
    type: OptionType
    default: str | int | bool
    choices: tuple[str, ...] = ()
    minimum: int = 0
    maximum: int = NUMBER_MAX


def _server(name: str, kind: OptionType, default, **kwargs) -> OptionEntry:
    return OptionEntry(name, OptionScope.SERVER, kind, default, **kwargs)


def _session(name: str, kind: OptionType, default, **kwargs) -> OptionEntry:
    return OptionEntry(name, OptionScope.SESSION, kind, default, **kwargs)


def _window(name: str, kind: OptionType, default, **kwargs) -> OptionEntry:
    return OptionEntry(name, OptionScope.WINDOW, kind, default, **kwargs)


OPTIONS_TABLE: tuple[OptionEntry, ...] = (
    # Server
    _server("buffer-limit", OptionType.NUMBER, 20, minimum=1),
    _server("escape-time", OptionType.NUMBER, 500),
    _server("exit-unattached", OptionType.FLAG, False),
    _server("focus-events", OptionType.FLAG, False),
    _server("history-file", OptionType.STRING, ""),
    _server("message-limit", OptionType.NUMBER, 100),
    _server("set-clipboard", OptionType.FLAG, True),
    _server("terminal-overrides", OptionType.STRING, "xterm*:XT:Ms=\\E]52;%p1%s;%p2%s\\007"),
    # Session
    _session("base-index", OptionType.NUMBER, 0),
    _session("default-command", OptionType.STRING, ""),
    _session("default-shell", OptionType.STRING, "/bin/sh"),
    _session("default-terminal", OptionType.STRING, "screen"),
    _session("display-time", OptionType.NUMBER, 750),
    _session("history-limit", OptionType.NUMBER, 2000),
    _session("mouse", OptionType.FLAG, False),
    _session("prefix", OptionType.STRING, "C-b"),
    _session("set-titles", OptionType.FLAG, False),
    _session("status", OptionType.FLAG, True),
    _session("status-keys", OptionType.CHOICE, ModeKeys.EMACS.value, choices=MODE_KEY_CHOICES),
    _session(
        "status-position", OptionType.CHOICE, "bottom", choices=("top", "bottom")
    ),
    _session("tmate-api-key", OptionType.STRING, ""),
    _session("tmate-authorized-keys", OptionType.STRING, ""),
    _session("tmate-identity", OptionType.STRING, ""),
    _session("tmate-server-host", OptionType.STRING, "ssh.tmate.io"),
    _session("tmate-server-port", OptionType.NUMBER, 22, minimum=1, maximum=65535),
    _session("tmate-session-name", OptionType.STRING, ""),
    _session("tmate-session-name-ro", OptionType.STRING, ""),
    # Window
    _window("aggressive-resize", OptionType.FLAG, False),
    _window("allow-rename", OptionType.FLAG, True),
    _window("automatic-rename", OptionType.FLAG, True),
    _window("mode-keys", OptionType.CHOICE, ModeKeys.EMACS.value, choices=MODE_KEY_CHOICES),
    _window("monitor-activity", OptionType.FLAG, False),
    _window("pane-base-index", OptionType.NUMBER, 0, maximum=32767),
    _window("remain-on-exit", OptionType.FLAG, False),
    _window("synchronize-panes", OptionType.FLAG, False),
    _window("wrap-search", OptionType.FLAG, True),
)


def entries_get(scope: OptionScope) -> tuple[OptionEntry, ...]:
    """Return the schema rows belonging to one tree."""
    return tuple(entry for entry in OPTIONS_TABLE if entry.scope is scope)


def entry_find(name: str) -> OptionEntry | None:
    """Look up a schema row by option name."""
    for entry in OPTIONS_TABLE:
        if entry.name == name:
            return entry
    return None
