"""Structural paths: the split choices leading from the root to a zone.

Paths are the identity seed of every panel segment. They are kept as
structured values and only turned into strings when an identifier is
built, so every consumer formats them the same way.
"""

from __future__ import annotations

from dataclasses import dataclass

from ._zones import ZoneKind


@dataclass(frozen=True)
class PathStep:
    """One split choice: the split kind and the child index taken."""

    kind: ZoneKind
    index: int

    def __post_init__(self) -> None:
        if self.kind is ZoneKind.LEAF:
            raise ValueError("A path step must follow a horizontal or vertical split")
        if self.index < 0:
            raise ValueError("Path step index must be non-negative")

    @property
    def token(self) -> str:
        marker = "c" if self.kind is ZoneKind.VERTICAL else "r"
        return f"{marker}{self.index}-"


@dataclass(frozen=True)
class StructuralPath:
    """Ordered split choices from the root to a zone."""

    steps: tuple[PathStep, ...] = ()

    def child(self, kind: ZoneKind, index: int) -> StructuralPath:
        """Return the path of child ``index`` of a ``kind`` split at this path."""
        return StructuralPath(self.steps + (PathStep(kind, index),))

    @property
    def depth(self) -> int:
        return len(self.steps)

    @property
    def col_path(self) -> tuple[int, ...]:
        """Indices chosen at vertical splits, root first."""
        return tuple(s.index for s in self.steps if s.kind is ZoneKind.VERTICAL)

    @property
    def row_path(self) -> tuple[int, ...]:
        """Indices chosen at horizontal splits, root first."""
        return tuple(s.index for s in self.steps if s.kind is ZoneKind.HORIZONTAL)

    @property
    def token(self) -> str:
        """Node token, e.g. ``c0-r1-``; empty for the root."""
        return "".join(step.token for step in self.steps)

    def boundary_token(self, kind: ZoneKind, index: int) -> str:
        """Seed of the separator after child ``index`` of a split at this path.

        Example:
            >>> StructuralPath().child(ZoneKind.VERTICAL, 0).boundary_token(
            ...     ZoneKind.HORIZONTAL, 1)
            'c0-h1'
        """
        marker = "v" if kind is ZoneKind.VERTICAL else "h"
        return f"{self.token}{marker}{index}"

    def back_panel_id(self) -> str:
        cols = "_".join(str(i) for i in self.col_path)
        rows = "_".join(str(i) for i in self.row_path)
        return f"panel-back-c{cols}-r{rows}"

    def __str__(self) -> str:
        return self.token or "<root>"
