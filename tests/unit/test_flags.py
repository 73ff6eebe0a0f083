"""Unit tests for command-line flag parsing"""

from __future__ import annotations

import pytest

from tmateboot import __version__
from tmateboot.bootstrap.flags import arguments_parse, usage_get, version_get
from tmateboot.common.errors import UsageError


class TestArgumentsParse:
    """Tests for getopt-style flag handling"""

    def test_defaults(self) -> None:
        args = arguments_parse("tmate", [])
        assert args.command == []
        assert args.shell_command is None
        assert args.control == 0
        assert args.verbosity == 0
        assert not args.colours_256 and not args.utf8 and not args.login

    def test_bundled_flags(self) -> None:
        args = arguments_parse("tmate", ["-2uvv"])
        assert args.colours_256 and args.utf8
        assert args.verbosity == 2

    def test_attached_and_separate_arguments(self) -> None:
        args = arguments_parse("tmate", ["-S/tmp/sock", "-L", "work"])
        assert args.socket_path == "/tmp/sock"
        assert args.label == "work"

    def test_control_counts(self) -> None:
        assert arguments_parse("tmate", ["-C"]).control == 1
        assert arguments_parse("tmate", ["-CC"]).control == 2

    def test_last_value_wins(self) -> None:
        args = arguments_parse("tmate", ["-c", "true", "-c", "false", "-L", "a", "-L", "b"])
        assert args.shell_command == "false"
        assert args.label == "b"

    def test_deferred_values(self) -> None:
        args = arguments_parse(
            "tmate", ["-k", "secret", "-n", "name", "-r", "ro", "-a", "/keys"]
        )
        assert (args.api_key, args.session_name, args.session_name_ro, args.authorized_keys) == (
            "secret",
            "name",
            "ro",
            "/keys",
        )

    def test_parsing_stops_at_command(self) -> None:
        args = arguments_parse("tmate", ["-v", "new-session", "-d", "-s", "x"])
        assert args.verbosity == 1
        assert args.command == ["new-session", "-d", "-s", "x"]

    def test_dash_led_values(self) -> None:
        args = arguments_parse("tmate", ["-n", "-foo", "-S", "-sock", "-k", "--"])
        assert args.session_name == "-foo"
        assert args.socket_path == "-sock"
        assert args.api_key == "--"
        assert args.command == []

    def test_shell_command_dash_value(self) -> None:
        args = arguments_parse("tmate", ["-c", "-l"])
        assert args.shell_command == "-l"
        assert not args.login

    def test_dash_value_after_bundle(self) -> None:
        args = arguments_parse("tmate", ["-vn", "-foo", "ls"])
        assert args.verbosity == 1
        assert args.session_name == "-foo"
        assert args.command == ["ls"]

    def test_dash_word_after_command_untouched(self) -> None:
        args = arguments_parse("tmate", ["new-session", "-n", "-x"])
        assert args.session_name is None
        assert args.command == ["new-session", "-n", "-x"]

    def test_double_dash_is_dropped(self) -> None:
        args = arguments_parse("tmate", ["--", "ls"])
        assert args.command == ["ls"]

    def test_quiet_is_accepted(self) -> None:
        assert arguments_parse("tmate", ["-q"]).quiet

    def test_shell_command_with_positional_is_usage_error(self) -> None:
        with pytest.raises(UsageError):
            arguments_parse("tmate", ["-c", "echo hi", "ls"])

    def test_help_is_usage_error(self) -> None:
        with pytest.raises(UsageError):
            arguments_parse("tmate", ["-h"])

    @pytest.mark.parametrize("argv", [["-x"], ["-S"], ["-k"], ["--long"]])
    def test_malformed_flags(self, argv) -> None:
        with pytest.raises(UsageError):
            arguments_parse("tmate", argv)

    def test_version_exits_zero(self, capsys) -> None:
        with pytest.raises(SystemExit) as info:
            arguments_parse("tmate", ["-V"])
        assert info.value.code == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == f"tmate {__version__}"
        assert out[1].startswith("PyYAML ")


class TestUsageText:
    """Tests for usage and version text"""

    def test_usage_names_program(self) -> None:
        text = usage_get("tmate")
        assert text.startswith("Usage: tmate [options]")
        assert " -k <key>" in text

    def test_version_two_lines(self) -> None:
        assert version_get("prog").count("\n") == 2
