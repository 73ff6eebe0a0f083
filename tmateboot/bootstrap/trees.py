"""Option tree and environment snapshot construction."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from tmateboot.common.types import ModeKeys, OptionScope
from tmateboot.options.environ import EnvironmentSnapshot
from tmateboot.options.tree import OptionsTree

__all__ = ["OptionTrees", "trees_bootstrap", "modeKeys_resolve", "modeKeys_apply", "cwd_get"]

logger = logging.getLogger(__name__)


@dataclass
class OptionTrees:
    """The three global option trees plus the environment snapshot."""

    server: OptionsTree
    session: OptionsTree
    window: OptionsTree
    environ: EnvironmentSnapshot

    def tree_get(self, scope: OptionScope) -> OptionsTree:
        """Return the tree for `scope`."""
        if scope is OptionScope.SERVER:
            return self.server
        if scope is OptionScope.SESSION:
            return self.session
        return self.window


def cwd_get() -> str | None:
    """Return the working directory, or None if it has gone away."""
    try:
        return os.getcwd()
    except OSError:
        return None


def trees_bootstrap(
    environ: Mapping[str, str], shell: str, cwd: str | None = None
) -> OptionTrees:
    """
    Build server, session and window trees and the environment snapshot.

    Args:
        environ:
            Process environment copied into the snapshot.
        shell:
            Resolved login shell, stored as session `default-shell`.
        cwd:
            Working directory for the PWD entry.

    Returns:
        Freshly populated trees.
    """
    snapshot = EnvironmentSnapshot.fromProcess_create(environ, cwd)

    server = OptionsTree(OptionScope.SERVER)
    session = OptionsTree(OptionScope.SESSION)
    session.string_set("default-shell", shell)
    window = OptionsTree(OptionScope.WINDOW)

    logger.debug(
        f"Option trees populated: server={len(server)} session={len(session)} "
        f"window={len(window)} environ={len(snapshot)}"
    )
    return OptionTrees(server=server, session=session, window=window, environ=snapshot)


def modeKeys_resolve(environ: Mapping[str, str]) -> ModeKeys | None:
    """
    Pick a key table from $VISUAL or $EDITOR.

    Args:
        environ: Process environment.

    Returns:
        VI when the editor basename contains "vi", EMACS for any other set
        value, None when neither variable is set.
    """
    editor: str | None = environ.get("VISUAL")
    if editor is None:
        editor = environ.get("EDITOR")
    if editor is None:
        return None
    base: str = editor.rsplit("/", 1)[-1]
    return ModeKeys.VI if "vi" in base else ModeKeys.EMACS


def modeKeys_apply(trees: OptionTrees, environ: Mapping[str, str]) -> ModeKeys | None:
    """Set status-keys and mode-keys from the editor environment, if any."""
    keys = modeKeys_resolve(environ)
    if keys is None:
        return None
    trees.session.string_set("status-keys", keys.value)
    trees.window.string_set("mode-keys", keys.value)
    logger.debug(f"Key tables set to {keys.value} from editor environment")
    return keys
