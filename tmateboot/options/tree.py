"""Typed option trees seeded from the static schema."""

from __future__ import annotations

import logging
from typing import Iterator

from tmateboot.common.errors import OptionError
from tmateboot.common.types import OptionScope, OptionType
from tmateboot.options.table import OptionEntry, entries_get

logger = logging.getLogger(__name__)

__all__ = ["OptionsTree"]

_FLAG_TRUE: frozenset[str] = frozenset({"on", "yes", "1"})
_FLAG_FALSE: frozenset[str] = frozenset({"off", "no", "0"})


class OptionsTree:
    """
    Mapping of option name to typed value for one scope.

    Trees are independent: a server tree never holds session or window
    options, and setting a value in one never touches another.
    """

    def __init__(self, scope: OptionScope) -> None:
        """
        Populate tree from the schema defaults for `scope`.

        Args:
            scope: Tree scope (server, session or window).
        """
        self.scope: OptionScope = scope
        self._entries: dict[str, OptionEntry] = {e.name: e for e in entries_get(scope)}
        self._values: dict[str, str | int | bool] = {
            name: entry.default for name, entry in self._entries.items()
        }

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def entry_get(self, name: str) -> OptionEntry:
        """Return schema row for `name` or raise OptionError."""
        entry = self._entries.get(name)
        if entry is None:
            raise OptionError(f"invalid option: {name}", name=name)
        return entry

    def option_get(self, name: str) -> str | int | bool:
        """Return current value of `name`."""
        self.entry_get(name)
        return self._values[name]

    def string_set(self, name: str, value: str) -> None:
        """Set a string or choice option without parsing."""
        entry = self.entry_get(name)
        if entry.type not in (OptionType.STRING, OptionType.CHOICE):
            raise OptionError(f"not a string option: {name}", name=name)
        if entry.type is OptionType.CHOICE and value not in entry.choices:
            raise OptionError(f"unknown value: {value}", name=name)
        self._values[name] = value

    def number_set(self, name: str, value: int) -> None:
        """Set a number option, enforcing schema bounds."""
        entry = self.entry_get(name)
        if entry.type is not OptionType.NUMBER:
            raise OptionError(f"not a number option: {name}", name=name)
        if value < entry.minimum:
            raise OptionError(f"value is too small: {value}", name=name)
        if value > entry.maximum:
            raise OptionError(f"value is too large: {value}", name=name)
        self._values[name] = value

    def value_parse_set(self, name: str, text: str | None) -> str | int | bool:
        """
        Parse `text` according to the schema type of `name` and store it.

        A missing value toggles flag options, matching `set-option name`
        with no argument.

        Args:
            name: Option name.
            text: Raw value from a command line or config file.

        Returns:
            The stored value.

        Raises:
            OptionError: Unknown option or unparseable value.
        """
        entry = self.entry_get(name)
        if entry.type is OptionType.FLAG:
            self._values[name] = self._flag_parse(entry, text)
        elif text is None:
            raise OptionError(f"empty value: {name}", name=name)
        elif entry.type is OptionType.NUMBER:
            try:
                number = int(text)
            except ValueError as exc:
                raise OptionError(f"value is invalid: {text}", name=name) from exc
            self.number_set(name, number)
        else:
            self.string_set(name, text)
        logger.debug(f"{self.scope.value} option {name} = {self._values[name]!r}")
        return self._values[name]

    def option_unset(self, name: str) -> None:
        """Restore schema default for `name`."""
        entry = self.entry_get(name)
        self._values[name] = entry.default

    def _flag_parse(self, entry: OptionEntry, text: str | None) -> bool:
        if text is None or text == "":
            return not self._values[entry.name]
        lowered = text.lower()
        if lowered in _FLAG_TRUE:
            return True
        if lowered in _FLAG_FALSE:
            return False
        raise OptionError(f"bad value: {text}", name=entry.name)
