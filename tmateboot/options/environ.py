"""Environment snapshot handed to the client layer."""

from __future__ import annotations

from typing import Iterator, Mapping

__all__ = ["EnvironmentSnapshot"]


class EnvironmentSnapshot:
    """Name to value mapping captured from the process environment."""

    def __init__(self) -> None:
        self._vars: dict[str, str] = {}

    @classmethod
    def fromProcess_create(
        cls, environ: Mapping[str, str], cwd: str | None
    ) -> "EnvironmentSnapshot":
        """
        Copy `environ` and add a PWD entry for the working directory.

        Args:
            environ: Process environment.
            cwd: Working directory, or None when it could not be determined.

        Returns:
            New snapshot.
        """
        snapshot = cls()
        for name, value in environ.items():
            snapshot.environ_set(name, value)
        if cwd is not None:
            snapshot.environ_set("PWD", cwd)
        return snapshot

    def environ_put(self, entry: str) -> None:
        """Add a `NAME=VALUE` entry; entries without `=` are ignored."""
        name, sep, value = entry.partition("=")
        if not sep or not name:
            return
        self._vars[name] = value

    def environ_set(self, name: str, value: str) -> None:
        self._vars[name] = value

    def environ_unset(self, name: str) -> None:
        self._vars.pop(name, None)

    def environ_get(self, name: str) -> str | None:
        return self._vars.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._vars))

    def __len__(self) -> int:
        return len(self._vars)

    def items(self) -> list[tuple[str, str]]:
        return sorted(self._vars.items())
