"""
Command-line options applied after the configuration files are loaded.

Values given with -k, -n, -r and -a must win over anything a config file
sets, so they are held here and replayed as `set-option` commands once the
client layer has loaded its configuration.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from tmateboot.common.types import DeferredOption

__all__ = ["DeferredOptionQueue", "DEFERRED_ORDER", "CommandRun"]

logger = logging.getLogger(__name__)

DEFERRED_ORDER: tuple[str, ...] = (
    "tmate-api-key",
    "tmate-session-name",
    "tmate-session-name-ro",
    "tmate-authorized-keys",
)


class CommandRun(Protocol):
    """Headless command runner accepted by `options_drain`."""

    def __call__(self, argv: list[str], defer_errors: bool = ...) -> bool: ...


class DeferredOptionQueue:
    """Ordered, drain-once holder for deferred option values."""

    def __init__(self) -> None:
        self._pending: dict[str, str] = {}

    def option_enqueue(self, name: str, value: str) -> None:
        """
        Capture `value` for `name`; a repeated name replaces the earlier value.

        Args:
            name: One of DEFERRED_ORDER.
            value: Raw option value.

        Raises:
            ValueError: `name` is not a deferrable option.
        """
        if name not in DEFERRED_ORDER:
            raise ValueError(f"Option '{name}' cannot be deferred")
        self._pending[name] = value

    def pending_get(self) -> list[DeferredOption]:
        """Return captured options in drain order without consuming them."""
        return [
            DeferredOption(name=name, value=self._pending[name])
            for name in DEFERRED_ORDER
            if name in self._pending
        ]

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)

    def options_drain(self, command_run: CommandRun | Callable[..., bool]) -> int:
        """
        Deliver each captured option once, in DEFERRED_ORDER.

        Errors are the runner's business: it is called in deferred-error
        mode and decides how failures are reported. The value is released
        as soon as it has been handed over.

        Args:
            command_run: Headless command runner.

        Returns:
            Number of options delivered; 0 once the queue is empty.
        """
        delivered: int = 0
        for option in self.pending_get():
            del self._pending[option.name]
            applied: bool = command_run(["set-option", option.name, option.value], defer_errors=True)
            if not applied:
                logger.info(f"Deferred option {option.name} was not applied")
            delivered += 1
        return delivered
