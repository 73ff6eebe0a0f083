"""Pytest configuration and shared fixtures for tmateboot tests

This module provides common fixtures used across the unit tests: an
isolated environment mapping, an executable fake shell and a runtime
directory root under tmp_path.
"""

import logging
import os
import stat
from pathlib import Path

import pytest

from tmateboot.common.config import ConfigLoader, RuntimeProfile


@pytest.fixture
def fake_shell(tmp_path) -> Path:
    """Executable file standing in for a login shell"""
    shell_dir = tmp_path / "bin"
    shell_dir.mkdir()
    shell = shell_dir / "zsh"
    shell.write_text("#!/bin/sh\n")
    shell.chmod(stat.S_IRWXU)
    return shell


@pytest.fixture
def tmux_tmpdir(tmp_path) -> Path:
    """Directory used as $TMUX_TMPDIR"""
    path = tmp_path / "runtime"
    path.mkdir()
    return path


@pytest.fixture
def environ(tmux_tmpdir, fake_shell, tmp_path) -> dict:
    """Minimal process environment with no inherited session

    Returns:
        Mutable environment mapping
    """
    home = tmp_path / "home"
    home.mkdir()
    return {
        "HOME": str(home),
        "SHELL": str(fake_shell),
        "LANG": "en_US.UTF-8",
        "TMUX_TMPDIR": str(tmux_tmpdir),
    }


@pytest.fixture
def profile() -> RuntimeProfile:
    """Default runtime profile"""
    return RuntimeProfile()


@pytest.fixture
def uid() -> int:
    """Current user id"""
    return os.getuid()


@pytest.fixture
def no_settings_file(monkeypatch):
    """Keep the settings search away from the real filesystem"""
    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_PATHS", [])


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)
