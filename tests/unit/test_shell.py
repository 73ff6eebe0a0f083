"""Unit tests for login shell resolution"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from tmateboot.bootstrap import shell as shell_module
from tmateboot.bootstrap.shell import home_find, shell_check, shell_isSelf, shell_resolve


class TestShellIsSelf:
    """Tests for recognising this program as a shell"""

    def test_basename_matches_progname(self) -> None:
        assert shell_isSelf("/usr/bin/tmate", "tmate")

    def test_login_progname_dash_is_ignored(self) -> None:
        assert shell_isSelf("/usr/bin/tmate", "-tmate")

    def test_bare_name_matches(self) -> None:
        assert shell_isSelf("tmate", "tmate")

    def test_other_shell_does_not_match(self) -> None:
        assert not shell_isSelf("/bin/bash", "tmate")


class TestShellCheck:
    """Tests for shell candidate validation"""

    def test_rejects_none_and_empty(self) -> None:
        assert not shell_check(None, "tmate")
        assert not shell_check("", "tmate")

    def test_rejects_relative_path(self, fake_shell, monkeypatch) -> None:
        monkeypatch.chdir(fake_shell.parent)
        assert not shell_check("zsh", "tmate")

    def test_rejects_self(self, tmp_path) -> None:
        own = tmp_path / "tmate"
        own.write_text("")
        own.chmod(0o755)
        assert not shell_check(str(own), "tmate")
        assert not shell_check(str(own), "-tmate")

    def test_rejects_non_executable(self, tmp_path) -> None:
        plain = tmp_path / "notashell"
        plain.write_text("")
        plain.chmod(0o644)
        assert not shell_check(str(plain), "tmate")

    def test_rejects_missing_file(self, tmp_path) -> None:
        assert not shell_check(str(tmp_path / "missing"), "tmate")

    def test_accepts_absolute_executable(self, fake_shell) -> None:
        assert shell_check(str(fake_shell), "tmate")


class TestShellResolve:
    """Tests for $SHELL, user database and fallback precedence"""

    def test_shell_env_wins(self, fake_shell) -> None:
        assert shell_resolve({"SHELL": str(fake_shell)}, "tmate") == str(fake_shell)

    def test_user_database_when_env_invalid(self, fake_shell, monkeypatch) -> None:
        monkeypatch.setattr(
            shell_module,
            "_passwdEntry_get",
            lambda: SimpleNamespace(pw_shell=str(fake_shell), pw_dir="/home/u"),
        )
        assert shell_resolve({"SHELL": "relative/sh"}, "tmate") == str(fake_shell)

    def test_fallback_when_nothing_usable(self, monkeypatch) -> None:
        monkeypatch.setattr(
            shell_module,
            "_passwdEntry_get",
            lambda: SimpleNamespace(pw_shell="/usr/bin/tmate", pw_dir="/home/u"),
        )
        assert shell_resolve({}, "tmate", fallback="/bin/sh") == "/bin/sh"

    def test_fallback_without_passwd_entry(self, monkeypatch) -> None:
        monkeypatch.setattr(shell_module, "_passwdEntry_get", lambda: None)
        assert shell_resolve({"SHELL": ""}, "tmate", fallback="/bin/dash") == "/bin/dash"


class TestHomeFind:
    """Tests for home directory lookup"""

    def test_home_env(self) -> None:
        assert home_find({"HOME": "/home/alice"}) == "/home/alice"

    @pytest.mark.parametrize("environ", [{}, {"HOME": ""}])
    def test_user_database_fallback(self, environ, monkeypatch) -> None:
        monkeypatch.setattr(
            shell_module,
            "_passwdEntry_get",
            lambda: SimpleNamespace(pw_shell="/bin/sh", pw_dir="/var/home/u"),
        )
        assert home_find(environ) == "/var/home/u"

    def test_none_without_any_source(self, monkeypatch) -> None:
        monkeypatch.setattr(shell_module, "_passwdEntry_get", lambda: None)
        assert home_find({}) is None
