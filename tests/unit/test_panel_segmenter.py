"""Unit tests for the panel segmenter.

These tests verify:
- A single leaf produces one side, cap and back panel each
- Separators cut the top and bottom per column
- Separators break at the midpoint of the gaps they cross
- Segment ids depend only on the tree shape, not on ratios or dimensions
"""

import pytest

from carcass.domain import (
    DimensionError,
    Envelope,
    PanelKind,
    PanelSegment,
    PanelSegmenter,
    SeparatorOrientation,
    Zone,
    ZoneKind,
    move_divider,
    new_tree,
    segment_panels,
    set_ratios,
    split,
)


def _by_id(tree: Zone, envelope: Envelope) -> dict:
    return {segment.id: segment for segment in segment_panels(tree, envelope)}


class TestSingleLeaf:
    """Tests for the segments of a tree with no splits."""

    def test_segment_ids(self, envelope: Envelope) -> None:
        ids = [s.id for s in PanelSegmenter(envelope).segment(new_tree())]
        assert ids == [
            "panel-left-0",
            "panel-right-0",
            "panel-top-0",
            "panel-bottom-0",
            "panel-back-c-r",
        ]

    def test_sides_run_full_height(self, envelope: Envelope) -> None:
        segments = _by_id(new_tree(), envelope)
        left, right = segments["panel-left-0"], segments["panel-right-0"]
        assert left.position == (0.0, 0.0, 0.0)
        assert left.size == (19.0, 730.0, 381.0)
        assert right.x == 1181.0
        assert right.height == 730.0

    def test_caps_sit_between_sides(self, envelope: Envelope) -> None:
        segments = _by_id(new_tree(), envelope)
        top, bottom = segments["panel-top-0"], segments["panel-bottom-0"]
        assert (top.x, top.y, top.width, top.height) == (19.0, 711.0, 1162.0, 19.0)
        assert (bottom.x, bottom.y) == (19.0, 0.0)

    def test_back_covers_whole_carcass(self, envelope: Envelope) -> None:
        back = _by_id(new_tree(), envelope)["panel-back-c-r"]
        assert back.kind is PanelKind.BACK
        assert back.zone_id == "root"
        assert (back.x, back.y, back.width, back.height) == (0.0, 0.0, 1200.0, 730.0)
        assert (back.z, back.depth) == (381.0, 19.0)

    def test_back_thickness_override(self) -> None:
        envelope = Envelope(
            dimensions=Envelope.of(1200, 730, 400).dimensions, back_thickness=8
        )
        segments = _by_id(new_tree(), envelope)
        assert segments["panel-back-c-r"].depth == 8.0
        assert segments["panel-left-0"].depth == 392.0

    def test_socle_raises_the_carcass(self) -> None:
        envelope = Envelope.of(1200, 830, 400, socle_height=100)
        segments = _by_id(new_tree(), envelope)
        assert segments["panel-left-0"].y == 100.0
        assert segments["panel-left-0"].height == 730.0
        assert segments["panel-bottom-0"].y == 100.0
        assert segments["panel-back-c-r"].y == 100.0


class TestColumns:
    """Tests for vertical separators."""

    def test_top_and_bottom_split_per_column(
        self, two_columns: Zone, envelope: Envelope
    ) -> None:
        segments = _by_id(two_columns, envelope)
        assert segments["panel-top-0"].width == 571.5
        assert segments["panel-top-1"].x == 609.5
        assert "panel-bottom-1" in segments
        assert "panel-left-1" not in segments

    def test_separator_runs_to_outer_faces(
        self, two_columns: Zone, envelope: Envelope
    ) -> None:
        separator = _by_id(two_columns, envelope)["separator-v-v0-0"]
        assert separator.kind is PanelKind.SEPARATOR
        assert separator.orientation is SeparatorOrientation.VERTICAL
        assert separator.zone_id == "root"
        assert (separator.x, separator.y) == (590.5, 0.0)
        assert (separator.width, separator.height) == (19.0, 730.0)

    def test_back_per_cell(self, two_columns: Zone, envelope: Envelope) -> None:
        segments = _by_id(two_columns, envelope)
        left_back, right_back = segments["panel-back-c0-r"], segments["panel-back-c1-r"]
        assert (left_back.x, left_back.width) == (0.0, 590.5)
        assert (right_back.x, right_back.width) == (609.5, 590.5)


class TestNestedSplits:
    """Tests for separators crossing nested splits."""

    def test_side_breaks_at_shelf_midpoint(
        self, sideboard: Zone, envelope: Envelope
    ) -> None:
        segments = _by_id(sideboard, envelope)
        upper, lower = segments["panel-right-0"], segments["panel-right-1"]
        assert (upper.y, upper.height) == (365.0, 365.0)
        assert (lower.y, lower.height) == (0.0, 365.0)
        assert "panel-left-1" not in segments

    def test_separator_breaks_where_shelves_meet_it(
        self, sideboard: Zone, envelope: Envelope
    ) -> None:
        segments = _by_id(sideboard, envelope)
        upper, lower = segments["separator-v-v0-0"], segments["separator-v-v0-1"]
        assert (upper.y, upper.y + upper.height) == (365.0, 730.0)
        assert (lower.y, lower.y + lower.height) == (0.0, 365.0)

    def test_horizontal_separator_spans_its_split(
        self, sideboard: Zone, envelope: Envelope
    ) -> None:
        shelf = _by_id(sideboard, envelope)["separator-h-c1-h0-0"]
        assert shelf.orientation is SeparatorOrientation.HORIZONTAL
        assert shelf.zone_id == "root-1"
        assert (shelf.x, shelf.y, shelf.width, shelf.height) == (609.5, 355.5, 571.5, 19.0)

    def test_backs_named_by_column_and_row_path(
        self, sideboard: Zone, envelope: Envelope
    ) -> None:
        backs = [s.id for s in segment_panels(sideboard, envelope) if s.kind is PanelKind.BACK]
        assert backs == ["panel-back-c0-r", "panel-back-c1-r0", "panel-back-c1-r1"]

    def test_segment_order(self, sideboard: Zone, envelope: Envelope) -> None:
        kinds = [s.kind for s in segment_panels(sideboard, envelope)]
        order = [
            PanelKind.LEFT,
            PanelKind.RIGHT,
            PanelKind.TOP,
            PanelKind.BOTTOM,
            PanelKind.BACK,
            PanelKind.SEPARATOR,
        ]
        assert kinds == sorted(kinds, key=order.index)


class TestIdentityStability:
    """Ids must survive edits that do not change the tree shape."""

    def test_ids_stable_across_ratio_changes(
        self, sideboard: Zone, envelope: Envelope
    ) -> None:
        moved = move_divider(sideboard, "root", 0, 15)
        before = [s.id for s in segment_panels(sideboard, envelope)]
        after = [s.id for s in segment_panels(moved, envelope)]
        assert before == after

    def test_ids_stable_across_dimension_changes(self, sideboard: Zone) -> None:
        small = [s.id for s in segment_panels(sideboard, Envelope.of(800, 600, 350))]
        large = [s.id for s in segment_panels(sideboard, Envelope.of(2400, 2000, 600))]
        assert small == large

    def test_near_equal_shelves_stay_distinct_at_any_height(self) -> None:
        tree = split(new_tree(), "root", ZoneKind.VERTICAL, 2)
        tree = split(tree, "root-0", ZoneKind.HORIZONTAL, 2)
        tree = split(tree, "root-1", ZoneKind.HORIZONTAL, 2)
        tree = set_ratios(tree, "root-1", [50.02, 49.98])

        low = [s.id for s in segment_panels(tree, Envelope.of(1200, 300, 400))]
        tall = [s.id for s in segment_panels(tree, Envelope.of(1200, 730, 400))]
        assert low == tall
        assert [i for i in tall if i.startswith("separator-v-v0-")] == [
            "separator-v-v0-0",
            "separator-v-v0-1",
            "separator-v-v0-2",
        ]

    def test_aligned_shelves_share_a_breakpoint(self) -> None:
        tree = split(new_tree(), "root", ZoneKind.VERTICAL, 2)
        tree = split(tree, "root-0", ZoneKind.HORIZONTAL, 2)
        tree = split(tree, "root-1", ZoneKind.HORIZONTAL, 4)
        tree = split(tree, "root-0-0", ZoneKind.HORIZONTAL, 2)

        for height in (300, 731, 2100):
            ids = [s.id for s in segment_panels(tree, Envelope.of(1200, height, 400))]
            assert [i for i in ids if i.startswith("separator-v-v0-")] == [
                "separator-v-v0-0",
                "separator-v-v0-1",
                "separator-v-v0-2",
                "separator-v-v0-3",
            ]

    def test_ids_are_unique(self) -> None:
        tree = split(new_tree(), "root", ZoneKind.VERTICAL, 3)
        tree = split(tree, "root-0", ZoneKind.HORIZONTAL, 3)
        tree = split(tree, "root-2", ZoneKind.HORIZONTAL, 2)
        ids = [s.id for s in segment_panels(tree, Envelope.of(1800, 2000, 600))]
        assert len(ids) == len(set(ids))


class TestDimensionErrors:
    """Tests for envelopes that cannot hold the tree."""

    def test_envelope_too_small(self) -> None:
        with pytest.raises(DimensionError):
            Envelope.of(30, 730, 400)

    def test_tree_too_wide_for_envelope(self) -> None:
        tree = split(new_tree(), "root", ZoneKind.VERTICAL, 10)
        with pytest.raises(DimensionError):
            segment_panels(tree, Envelope.of(200, 730, 400))


class TestSegmentArea:
    """Tests for the priced face area of a segment."""

    def test_short_separator_measured_along_its_length(self) -> None:
        segment = PanelSegment(
            id="separator-v-v0-1",
            kind=PanelKind.SEPARATOR,
            x=590.5,
            y=300.0,
            z=0.0,
            width=19.0,
            height=10.0,
            depth=381.0,
            orientation=SeparatorOrientation.VERTICAL,
        )
        assert segment.face_area == 10.0 * 381.0

    def test_side_uses_its_largest_face(self, envelope: Envelope) -> None:
        side = _by_id(new_tree(), envelope)["panel-left-0"]
        assert side.face_area == pytest.approx(730 * 381)
