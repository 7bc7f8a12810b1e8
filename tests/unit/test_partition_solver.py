"""Unit tests for the partition solver and separator resolver."""

import pytest

from carcass.domain import (
    DimensionError,
    SeparatorOrientation,
    Zone,
    ZoneKind,
    new_tree,
    resolve_separators,
    set_ratios,
    solve_partition,
    split,
    split_extents,
)
from carcass.domain.value_objects import Rect

CONTENT = Rect(19, 19, 1162, 692)


def _solve(tree: Zone):
    return solve_partition(tree, CONTENT.width, CONTENT.height, 19, origin=(19, 19))


class TestSplitExtents:
    """Tests for split_extents."""

    def test_thickness_reserved_between_children(self) -> None:
        spans = split_extents(1200, [30, 70], 19)
        assert spans[0] == (0.0, pytest.approx(354.3))
        assert spans[1][0] == pytest.approx(373.3)
        assert spans[1][1] == pytest.approx(826.7)

    def test_single_child_takes_whole_span(self) -> None:
        assert split_extents(500, [100], 19) == [(0.0, 500.0)]

    def test_no_room_for_children(self) -> None:
        with pytest.raises(DimensionError, match="cannot hold 3 children"):
            split_extents(38, [33, 33, 34], 19)


class TestSolvePartition:
    """Tests for solve_partition."""

    def test_single_leaf_fills_content(self) -> None:
        (cell,) = _solve(new_tree())
        assert cell.zone_id == "root"
        assert (cell.x, cell.y) == (600.0, 365.0)
        assert (cell.width, cell.height) == (1162.0, 692.0)

    def test_columns_left_to_right(self, two_columns: Zone) -> None:
        left, right = _solve(two_columns)
        assert (left.left, left.right) == (19.0, 590.5)
        assert (right.left, right.right) == (609.5, 1181.0)
        assert left.height == right.height == 692.0

    def test_rows_top_down(self) -> None:
        tree = split(new_tree(), "root", ZoneKind.HORIZONTAL, 2)
        top, bottom = _solve(tree)
        assert (top.bottom, top.top) == (374.5, 711.0)
        assert (bottom.bottom, bottom.top) == (19.0, 355.5)

    def test_cells_follow_ratios(self, two_columns: Zone) -> None:
        tree = set_ratios(two_columns, "root", [25, 75])
        left, right = _solve(tree)
        assert left.width == pytest.approx(1143 * 0.25)
        assert right.width == pytest.approx(1143 * 0.75)

    def test_cells_carry_paths(self, sideboard: Zone) -> None:
        cells = {cell.zone_id: cell for cell in _solve(sideboard)}
        assert list(cells) == ["root-0", "root-1-0", "root-1-1"]
        assert cells["root-1-1"].col_path == (1,)
        assert cells["root-1-1"].row_path == (1,)

    def test_cells_tile_without_overlap(self, sideboard: Zone) -> None:
        """Cell areas plus separator areas cover the content exactly."""
        cells = _solve(sideboard)
        separators = resolve_separators(sideboard, CONTENT, 19)
        covered = sum(c.area for c in cells) + sum(
            s.rect.width * s.rect.height for s in separators
        )
        assert covered == pytest.approx(CONTENT.width * CONTENT.height)

    def test_empty_content_rejected(self) -> None:
        with pytest.raises(DimensionError):
            solve_partition(new_tree(), 0, 692, 19)

    def test_too_many_columns_rejected(self) -> None:
        tree = split(new_tree(), "root", ZoneKind.VERTICAL, 40)
        with pytest.raises(DimensionError):
            solve_partition(tree, 500, 692, 19)


class TestResolveSeparators:
    """Tests for resolve_separators."""

    def test_leaf_has_no_separator(self) -> None:
        assert resolve_separators(new_tree(), CONTENT, 19) == []

    def test_vertical_separator_between_columns(self, two_columns: Zone) -> None:
        (separator,) = resolve_separators(two_columns, CONTENT, 19)
        assert separator.seed == "v0"
        assert separator.zone_id == "root"
        assert separator.orientation is SeparatorOrientation.VERTICAL
        assert separator.rect == Rect(590.5, 19, 19, 692)

    def test_nested_separators_in_document_order(self, sideboard: Zone) -> None:
        separators = resolve_separators(sideboard, CONTENT, 19)
        assert [s.seed for s in separators] == ["v0", "c1-h0"]

        shelf = separators[1]
        assert shelf.orientation is SeparatorOrientation.HORIZONTAL
        assert shelf.zone_id == "root-1"
        assert shelf.rect == Rect(609.5, 355.5, 571.5, 19)
