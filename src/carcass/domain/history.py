"""Bounded undo/redo history over immutable zone trees."""

from __future__ import annotations

import logging

from .zone import Zone

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 50


class ZoneHistory:
    """Snapshot stack for zone tree edits.

    Trees are immutable, so each entry is just a reference to a previous
    tree value. Pushing a tree equal to the present is ignored; pushing
    anything else clears the redo stack.

    Example:
        >>> history = ZoneHistory(new_tree())
        >>> history.push(split(history.present, "root", "vertical", 2))
        >>> history.undo().is_leaf
        True
    """

    def __init__(self, initial: Zone, max_history: int = DEFAULT_MAX_HISTORY) -> None:
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self._present = initial
        self._past: list[Zone] = []
        self._future: list[Zone] = []
        self.max_history = max_history

    @property
    def present(self) -> Zone:
        return self._present

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def undo_depth(self) -> int:
        return len(self._past)

    @property
    def redo_depth(self) -> int:
        return len(self._future)

    def push(self, tree: Zone) -> None:
        """Record ``tree`` as the new present."""
        if tree == self._present:
            return
        self._past.append(self._present)
        if len(self._past) > self.max_history:
            dropped = len(self._past) - self.max_history
            del self._past[:dropped]
            logger.debug(f"History full, dropped {dropped} oldest snapshot(s)")
        self._future.clear()
        self._present = tree

    def undo(self) -> Zone | None:
        """Step back one edit; returns the restored tree or None."""
        if not self._past:
            return None
        self._future.append(self._present)
        self._present = self._past.pop()
        return self._present

    def redo(self) -> Zone | None:
        """Step forward one edit; returns the restored tree or None."""
        if not self._future:
            return None
        self._past.append(self._present)
        self._present = self._future.pop()
        return self._present

    def clear(self) -> None:
        """Forget all snapshots, keeping the present tree."""
        self._past.clear()
        self._future.clear()
