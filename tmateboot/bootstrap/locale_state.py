"""
Process locale setup and UTF-8 capability detection.

Rendering downstream assumes a known charset, so failing to establish a
UTF-8 `LC_CTYPE` stops startup instead of degrading.
"""

from __future__ import annotations

import locale
import logging
import time
from typing import Mapping

from tmateboot.common.errors import LocaleError

__all__ = ["locale_establish", "utf8_resolve", "SESSION_MARKER"]

logger = logging.getLogger(__name__)

SESSION_MARKER: str = "TMUX"
PREFERRED_LOCALES: tuple[str, ...] = ("en_US.UTF-8", "C.UTF-8")
_UTF8_NAMES: tuple[str, ...] = ("utf-8", "utf8")


def _codeset_isUtf8(codeset: str) -> bool:
    return codeset.lower() in _UTF8_NAMES


def locale_establish() -> str:
    """
    Set LC_CTYPE to a UTF-8 locale, then LC_TIME and the timezone.

    Returns:
        The LC_CTYPE locale name in effect.

    Raises:
        LocaleError:
            Neither preferred locale is available and the environment's
            locale is invalid or not UTF-8.
    """
    selected: str | None = None
    for name in PREFERRED_LOCALES:
        try:
            selected = locale.setlocale(locale.LC_CTYPE, name)
            break
        except locale.Error:
            continue

    if selected is None:
        try:
            selected = locale.setlocale(locale.LC_CTYPE, "")
        except locale.Error as exc:
            raise LocaleError("invalid LC_ALL, LC_CTYPE or LANG") from exc
        codeset: str = locale.nl_langinfo(locale.CODESET)
        if not _codeset_isUtf8(codeset):
            raise LocaleError(f"need UTF-8 locale (LC_CTYPE) but have {codeset}")

    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        logger.debug("LC_TIME from environment unavailable, keeping default")
    time.tzset()

    logger.debug(f"LC_CTYPE set to {selected}")
    return selected


def utf8_resolve(environ: Mapping[str, str]) -> bool:
    """
    Decide whether the terminal is UTF-8 capable.

    Running inside a session (marker variable set) implies UTF-8. Otherwise
    the first non-empty of LC_ALL, LC_CTYPE and LANG must mention UTF-8.

    Args:
        environ: Process environment.

    Returns:
        True when UTF-8 can be assumed.
    """
    if environ.get(SESSION_MARKER) is not None:
        return True

    value: str = ""
    for name in ("LC_ALL", "LC_CTYPE", "LANG"):
        value = environ.get(name) or ""
        if value:
            break

    lowered: str = value.lower()
    return "utf-8" in lowered or "utf8" in lowered
