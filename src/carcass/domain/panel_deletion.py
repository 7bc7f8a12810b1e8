"""Panel deletions and the automatic hiding rules.

Deleting a panel only filters it out of rendering and pricing; the
segment geometry of every other panel stays exactly the same.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .value_objects import PanelKind, PanelSegment, ZoneKind
from .zone import Zone

logger = logging.getLogger(__name__)


class PanelDeletionStore:
    """Set of panel ids removed by the user.

    Ids are opaque. Ids that no longer match a segment (after a tree shape
    edit) are kept until ``prune`` is called with the current segment ids.
    """

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: set[str] = set(ids)

    def __contains__(self, panel_id: object) -> bool:
        return panel_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self):
        return iter(sorted(self._ids))

    @property
    def ids(self) -> frozenset[str]:
        """Snapshot of the deleted ids."""
        return frozenset(self._ids)

    def is_deleted(self, panel_id: str) -> bool:
        return panel_id in self._ids

    def delete(self, panel_id: str) -> None:
        self._ids.add(panel_id)

    def restore(self, panel_id: str) -> None:
        self._ids.discard(panel_id)

    def toggle(self, panel_id: str) -> bool:
        """Flip the deletion of one panel.

        Returns:
            True if the panel is now deleted.
        """
        if panel_id in self._ids:
            self._ids.remove(panel_id)
            return False
        self._ids.add(panel_id)
        return True

    def bulk_delete(self, panel_ids: Iterable[str]) -> None:
        self._ids.update(panel_ids)

    def bulk_restore(self, panel_ids: Iterable[str]) -> None:
        self._ids.difference_update(panel_ids)

    def clear(self) -> None:
        self._ids.clear()

    def prune(self, valid_ids: Iterable[str]) -> frozenset[str]:
        """Forget deletions that match no current panel.

        Args:
            valid_ids: Ids of the segments of the current tree.

        Returns:
            The ids that were dropped.
        """
        stale = frozenset(self._ids.difference(valid_ids))
        if stale:
            self._ids.difference_update(stale)
            logger.debug(f"Pruned {len(stale)} stale panel deletion(s)")
        return stale


def drawer_stack_zone_ids(tree: Zone) -> frozenset[str]:
    """Horizontal splits whose children are all drawer leaves.

    Stacked drawer fronts need no shelf between them, so the separators of
    these splits are hidden without being deleted.
    """
    return frozenset(
        zone.id
        for zone in tree.walk()
        if zone.kind is ZoneKind.HORIZONTAL
        and len(zone.children) >= 2
        and all(child.is_leaf and child.content.is_drawer for child in zone.children)
    )


def auto_hidden_panel_ids(tree: Zone, segments: Sequence[PanelSegment]) -> frozenset[str]:
    """Ids of segments hidden by rule rather than by the user.

    Covers the separators of drawer stacks and the back behind open-space
    leaves.
    """
    stacks = drawer_stack_zone_ids(tree)
    open_leaves = {zone.id for zone in tree.leaves() if zone.is_open_space}
    return frozenset(
        segment.id
        for segment in segments
        if (segment.kind is PanelKind.SEPARATOR and segment.zone_id in stacks)
        or (segment.kind is PanelKind.BACK and segment.zone_id in open_leaves)
    )


@dataclass(frozen=True)
class PanelVisibility:
    """Segments split into visible and hidden ones.

    Attributes:
        visible: Segments to draw and price, in segment order.
        deleted: Ids deleted by the user that match a segment.
        auto_hidden: Ids hidden by rule.
    """

    visible: tuple[PanelSegment, ...]
    deleted: frozenset[str]
    auto_hidden: frozenset[str]

    def is_visible(self, panel_id: str) -> bool:
        return panel_id not in self.deleted and panel_id not in self.auto_hidden

    @property
    def hidden(self) -> frozenset[str]:
        return self.deleted | self.auto_hidden


def resolve_visibility(
    segments: Sequence[PanelSegment],
    deletions: PanelDeletionStore | Iterable[str],
    tree: Zone,
) -> PanelVisibility:
    """Decide which segments are drawn and priced.

    Args:
        segments: Output of the panel segmenter for ``tree``.
        deletions: User deletions; unknown ids are ignored.
        tree: Tree the segments were computed from.

    Returns:
        The visibility of every segment.
    """
    deleted_ids = deletions.ids if isinstance(deletions, PanelDeletionStore) else frozenset(deletions)
    auto_hidden = auto_hidden_panel_ids(tree, segments)
    known = {segment.id for segment in segments}
    deleted = frozenset(deleted_ids & known)
    visible = tuple(
        segment
        for segment in segments
        if segment.id not in deleted and segment.id not in auto_hidden
    )
    return PanelVisibility(visible=visible, deleted=deleted, auto_hidden=auto_hidden)


def hidden_separator_seeds(
    segments: Sequence[PanelSegment], visibility: PanelVisibility
) -> frozenset[str]:
    """Seeds of separators whose every segment is hidden."""
    by_seed: dict[str, list[str]] = {}
    for segment in segments:
        if segment.kind is PanelKind.SEPARATOR:
            by_seed.setdefault(segment.seed, []).append(segment.id)
    return frozenset(
        seed
        for seed, ids in by_seed.items()
        if not any(visibility.is_visible(panel_id) for panel_id in ids)
    )
