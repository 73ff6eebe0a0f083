"""Unit tests for the option schema, option trees and environment snapshot"""

from __future__ import annotations

import pytest

from tmateboot.common.errors import OptionError
from tmateboot.common.types import OptionScope, OptionType
from tmateboot.options.environ import EnvironmentSnapshot
from tmateboot.options.table import OPTIONS_TABLE, entries_get, entry_find
from tmateboot.options.tree import OptionsTree


class TestOptionsTable:
    """Tests for the static schema"""

    def test_names_are_unique(self) -> None:
        names = [entry.name for entry in OPTIONS_TABLE]
        assert len(names) == len(set(names))

    def test_every_scope_has_entries(self) -> None:
        for scope in OptionScope:
            assert entries_get(scope)

    def test_deferred_targets_exist(self) -> None:
        for name in (
            "tmate-api-key",
            "tmate-session-name",
            "tmate-session-name-ro",
            "tmate-authorized-keys",
        ):
            entry = entry_find(name)
            assert entry is not None
            assert entry.type is OptionType.STRING

    def test_choice_defaults_are_valid(self) -> None:
        for entry in OPTIONS_TABLE:
            if entry.type is OptionType.CHOICE:
                assert entry.default in entry.choices

    def test_unknown_name(self) -> None:
        assert entry_find("no-such-option") is None


class TestOptionsTree:
    """Tests for typed option values"""

    def test_seeded_with_defaults(self) -> None:
        tree = OptionsTree(OptionScope.SESSION)
        assert tree.option_get("history-limit") == 2000
        assert tree.option_get("status") is True

    def test_number_parse_and_bounds(self) -> None:
        tree = OptionsTree(OptionScope.SESSION)
        assert tree.value_parse_set("tmate-server-port", "2222") == 2222
        with pytest.raises(OptionError, match="too large"):
            tree.value_parse_set("tmate-server-port", "70000")
        with pytest.raises(OptionError, match="too small"):
            tree.value_parse_set("tmate-server-port", "0")
        with pytest.raises(OptionError, match="invalid"):
            tree.value_parse_set("tmate-server-port", "ssh")

    def test_flag_values(self) -> None:
        tree = OptionsTree(OptionScope.SESSION)
        assert tree.value_parse_set("mouse", "on") is True
        assert tree.value_parse_set("mouse", "off") is False
        with pytest.raises(OptionError, match="bad value"):
            tree.value_parse_set("mouse", "maybe")

    def test_flag_without_value_toggles(self) -> None:
        tree = OptionsTree(OptionScope.WINDOW)
        assert tree.value_parse_set("wrap-search", None) is False
        assert tree.value_parse_set("wrap-search", None) is True

    def test_choice_rejects_unknown(self) -> None:
        tree = OptionsTree(OptionScope.WINDOW)
        with pytest.raises(OptionError, match="unknown value"):
            tree.value_parse_set("mode-keys", "ed")

    def test_string_requires_value(self) -> None:
        tree = OptionsTree(OptionScope.SESSION)
        with pytest.raises(OptionError, match="empty value"):
            tree.value_parse_set("prefix", None)

    def test_unset_restores_default(self) -> None:
        tree = OptionsTree(OptionScope.SERVER)
        tree.value_parse_set("escape-time", "10")
        tree.option_unset("escape-time")
        assert tree.option_get("escape-time") == 500

    def test_type_mismatch(self) -> None:
        tree = OptionsTree(OptionScope.SESSION)
        with pytest.raises(OptionError):
            tree.number_set("prefix", 1)
        with pytest.raises(OptionError):
            tree.string_set("history-limit", "5")

    def test_trees_are_independent(self) -> None:
        first = OptionsTree(OptionScope.SESSION)
        second = OptionsTree(OptionScope.SESSION)
        first.string_set("prefix", "C-a")
        assert second.option_get("prefix") == "C-b"


class TestEnvironmentSnapshot:
    """Tests for the environment snapshot"""

    def test_put_parses_entries(self) -> None:
        snapshot = EnvironmentSnapshot()
        snapshot.environ_put("A=1=2")
        snapshot.environ_put("NOEQUALS")
        snapshot.environ_put("=value")
        assert snapshot.items() == [("A", "1=2")]

    def test_set_and_unset(self) -> None:
        snapshot = EnvironmentSnapshot()
        snapshot.environ_set("TMUX", "x")
        snapshot.environ_unset("TMUX")
        snapshot.environ_unset("TMUX")
        assert "TMUX" not in snapshot
        assert len(snapshot) == 0
