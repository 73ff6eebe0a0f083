"""
tmateboot: startup driver for a tmate-style terminal multiplexer client
Resolves locale, shell, option trees and the control socket path
"""

from importlib.metadata import PackageNotFoundError, version


def _version_get() -> str:
    """Installed distribution version, or the source tree's when not installed"""
    try:
        return version("tmateboot")
    except PackageNotFoundError:
        return "2.4.0"


__version__ = _version_get()
__author__ = "tmateboot contributors"
