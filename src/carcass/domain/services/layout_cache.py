"""Memoized panel segmentation.

Zone trees and envelopes are immutable and hashable, so the pair is a
complete cache key: any edit produces a new tree value and therefore a
new key.
"""

from __future__ import annotations

import logging
from collections import OrderedDict

from ..panel_segmenter import PanelSegmenter
from ..value_objects import Envelope, PanelSegment
from ..zone import Zone

__all__ = ["LayoutCache"]

logger = logging.getLogger(__name__)


class LayoutCache:
    """Least-recently-used cache of segment lists.

    Attributes:
        maxsize: Number of (tree, envelope) entries kept.
        hits: Lookups served from the cache.
        misses: Lookups that ran the segmenter.
    """

    def __init__(self, maxsize: int = 32) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[tuple[Zone, Envelope], tuple[PanelSegment, ...]] = (
            OrderedDict()
        )

    def __len__(self) -> int:
        return len(self._entries)

    def segment(self, tree: Zone, envelope: Envelope) -> tuple[PanelSegment, ...]:
        """Return the segments for ``tree`` in ``envelope``, computing once."""
        key = (tree, envelope)
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            self._entries.move_to_end(key)
            return cached

        self.misses += 1
        segments = tuple(PanelSegmenter(envelope).segment(tree))
        self._entries[key] = segments
        if len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
            logger.debug("Layout cache full, evicted least recently used entry")
        return segments

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
