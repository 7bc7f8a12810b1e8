"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from carcass.domain import Envelope, PanelSegment, PanelVisibility, Zone
from carcass.domain.services import PriceQuote


@dataclass
class ConfigurationOutput:
    """Everything derived from one saved configuration.

    Attributes:
        tree: The normalized zone tree.
        envelope: The envelope, None when the dimensions are invalid.
        segments: Every panel segment, hidden ones included.
        visibility: Visible, deleted and auto-hidden segments.
        quote: Price quote, None when pricing was not requested.
        descriptor: Compact descriptor of the tree.
        corrections: Repairs made while loading the tree.
        stale_panel_ids: Deleted ids that match no segment; dropped on save.
        errors: Blocking problems; the other fields are empty when set.
    """

    tree: Zone
    envelope: Envelope | None = None
    segments: tuple[PanelSegment, ...] = ()
    visibility: PanelVisibility | None = None
    quote: PriceQuote | None = None
    descriptor: str = ""
    corrections: list[str] = field(default_factory=list)
    stale_panel_ids: frozenset[str] = frozenset()
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the output is valid (no errors)."""
        return len(self.errors) == 0

    @property
    def visible_segments(self) -> tuple[PanelSegment, ...]:
        if self.visibility is None:
            return ()
        return self.visibility.visible
