"""Unit tests for configuration adapter functions.

These tests verify:
- schema_to_tree builds a valid tree and reports every repair it makes
- zone_to_schema writes splitRatio for two children and splitRatios otherwise
- Envelope, material rate and pricing parameter conversion
- domain_to_config produces a document that loads back to the same tree
"""

from typing import Any

import pytest

from carcass.application.config import (
    ComponentColorSchema,
    MaterialSelectionSchema,
    ZoneSchema,
    config_to_envelope,
    config_to_material_rates,
    config_to_tree,
    domain_to_config,
    load_config_from_dict,
    load_pricing_from_dict,
    pricing_to_parameters,
    resolve_socle_height,
    schema_to_tree,
    zone_to_schema,
)
from carcass.domain import (
    Envelope,
    HandleType,
    SocleKind,
    Zone,
    ZoneColor,
    ZoneContent,
    ZoneKind,
    new_tree,
    set_zone_color,
    split,
)
from carcass.domain.services import PricingParameters


def _zone(data: dict[str, Any]) -> ZoneSchema:
    return ZoneSchema.model_validate(data)


class TestSchemaToTree:
    """Tests for schema_to_tree and config_to_tree."""

    def test_converts_saved_tree(self, config_data: dict[str, Any], sideboard: Zone) -> None:
        conversion = config_to_tree(load_config_from_dict(config_data))
        assert not conversion.was_corrected
        assert [z.id for z in conversion.tree.walk()] == [z.id for z in sideboard.walk()]
        assert conversion.tree.split_ratios == (50.0, 50.0)
        assert conversion.tree.find("root-0").content is ZoneContent.SHELF
        assert conversion.tree.find("root-1-1").content is ZoneContent.DRAWER

    def test_split_ratio_for_two_children(self) -> None:
        tree = schema_to_tree(
            _zone(
                {
                    "id": "root",
                    "type": "vertical",
                    "splitRatio": 30,
                    "children": [{"id": "root-0"}, {"id": "root-1"}],
                }
            )
        ).tree
        assert tree.split_ratios == (30.0, 70.0)

    def test_missing_ratios_default_silently(self) -> None:
        conversion = schema_to_tree(
            _zone(
                {
                    "id": "root",
                    "type": "horizontal",
                    "children": [{"id": "root-0"}, {"id": "root-1"}, {"id": "root-2"}],
                }
            )
        )
        assert conversion.tree.split_ratios == (33.0, 33.0, 34.0)
        assert not conversion.was_corrected

    def test_mismatched_ratios_corrected(self) -> None:
        conversion = schema_to_tree(
            _zone(
                {
                    "id": "root",
                    "type": "vertical",
                    "splitRatios": [20, 30, 50],
                    "children": [{"id": "root-0"}, {"id": "root-1"}],
                }
            )
        )
        assert conversion.tree.split_ratios == (50.0, 50.0)
        assert conversion.corrections == (
            "root: 3 ratio(s) for 2 children, using equal shares",
        )

    def test_unknown_content_becomes_empty(self) -> None:
        conversion = schema_to_tree(_zone({"id": "root", "content": "wine_rack"}))
        assert conversion.tree.content is ZoneContent.EMPTY
        assert conversion.corrections == ("root: unknown content 'wine_rack', using 'empty'",)

    def test_non_door_door_content_removed(self) -> None:
        conversion = schema_to_tree(_zone({"id": "root", "doorContent": "drawer"}))
        assert conversion.tree.door_content is None
        assert "is not a door" in conversion.corrections[0]

    def test_empty_door_content_is_no_door(self) -> None:
        conversion = schema_to_tree(_zone({"id": "root", "doorContent": "empty"}))
        assert conversion.tree.door_content is None
        assert not conversion.was_corrected

    def test_unknown_handle_dropped(self) -> None:
        conversion = schema_to_tree(_zone({"id": "root", "handleType": "gold_knob"}))
        assert conversion.tree.handle_type is None
        assert conversion.corrections == ("root: unknown handle type 'gold_knob', using 'none'",)

    def test_leaf_with_children_drops_them(self) -> None:
        conversion = schema_to_tree(
            _zone({"id": "root", "type": "leaf", "children": [{"id": "root-0"}]})
        )
        assert conversion.tree.is_leaf
        assert "children dropped" in conversion.corrections[0]

    def test_split_without_children_becomes_leaf(self) -> None:
        conversion = schema_to_tree(_zone({"id": "root", "type": "vertical"}))
        assert conversion.tree.is_leaf
        assert "made a leaf" in conversion.corrections[0]

    def test_zone_options(self) -> None:
        tree = schema_to_tree(
            _zone(
                {
                    "id": "root",
                    "content": "glass_shelf",
                    "handleType": "horizontal_bar",
                    "hasLight": True,
                    "isOpenSpace": True,
                    "glassShelfCount": 2,
                    "glassShelfPositions": [30, 60],
                    "zoneColor": {"colorId": 7, "hex": "#aabbcc"},
                }
            )
        ).tree
        assert tree.handle_type is HandleType.HORIZONTAL_BAR
        assert tree.has_light and tree.is_open_space
        assert not tree.has_cable_hole
        assert tree.glass_shelf_positions == (30.0, 60.0)
        assert tree.zone_color == ZoneColor(color_id=7, hex="#aabbcc")


class TestZoneToSchema:
    """Tests for zone_to_schema."""

    def test_two_children_write_split_ratio(self, sideboard: Zone) -> None:
        schema = zone_to_schema(sideboard)
        assert schema.split_ratio == 50.0
        assert schema.split_ratios is None
        assert schema.children[1].children[0].content == "drawer"

    def test_wider_splits_write_split_ratios(self) -> None:
        schema = zone_to_schema(split(new_tree(), "root", ZoneKind.VERTICAL, 3))
        assert schema.split_ratio is None
        assert schema.split_ratios == [33.0, 33.0, 34.0]

    def test_false_flags_omitted(self) -> None:
        schema = zone_to_schema(new_tree())
        assert schema.has_light is None
        assert schema.children is None

    def test_tree_survives_round_trip(self, sideboard: Zone) -> None:
        tree = set_zone_color(sideboard, "root-0", ZoneColor(hex="#123456"))
        assert schema_to_tree(zone_to_schema(tree)).tree == tree


class TestEnvelope:
    """Tests for config_to_envelope and socle heights."""

    def test_default_socle_heights(self) -> None:
        assert resolve_socle_height(SocleKind.NONE, None) == 0.0
        assert resolve_socle_height(SocleKind.METAL, None) == 100.0
        assert resolve_socle_height(SocleKind.WOOD, 80) == 80

    def test_envelope_from_config(self, config_data: dict[str, Any]) -> None:
        config_data.update(socle="wood", socleHeight=120, backThickness=8)
        envelope = config_to_envelope(load_config_from_dict(config_data))
        assert (envelope.width, envelope.height, envelope.depth) == (1200, 730, 400)
        assert envelope.socle_height == 120
        assert envelope.effective_back_thickness == 8


class TestMaterialRates:
    """Tests for config_to_material_rates."""

    def test_single_colour_price(self) -> None:
        rates = config_to_material_rates(MaterialSelectionSchema(price_per_m2=40.0))
        assert rates.structure == 40.0
        assert rates.back_rate == 40.0

    def test_price_from_sample_prices(self) -> None:
        rates = config_to_material_rates(MaterialSelectionSchema(color_id=3), {3: 55.0})
        assert rates.structure == 55.0

    def test_no_price_known(self) -> None:
        assert config_to_material_rates(MaterialSelectionSchema(color_id=3)) is None

    def test_multi_colour_components(self) -> None:
        selection = MaterialSelectionSchema(
            price_per_m2=40.0,
            use_multi_color=True,
            component_colors={
                "back": ComponentColorSchema(price_per_m2=12.0),
                "doors": ComponentColorSchema(color_id=9),
            },
        )
        rates = config_to_material_rates(selection, {9: 90.0})
        assert rates.structure == 40.0
        assert rates.back_rate == 12.0
        assert rates.door_rate == 90.0
        assert rates.drawer_rate == 40.0

    def test_multi_colour_structure_component(self) -> None:
        selection = MaterialSelectionSchema(
            use_multi_color=True,
            component_colors={"structure": ComponentColorSchema(price_per_m2=70.0)},
        )
        assert config_to_material_rates(selection).structure == 70.0


class TestPricingToParameters:
    """Tests for pricing_to_parameters."""

    def test_empty_document_gives_defaults(self) -> None:
        assert pricing_to_parameters(load_pricing_from_dict({})) == PricingParameters()

    def test_overrides_merge_over_defaults(self) -> None:
        params = pricing_to_parameters(
            load_pricing_from_dict(
                {
                    "casing": {"full": {"coefficient": 1.5}},
                    "bases": {"wood": {"price_per_m3": 700, "height": 60}},
                    "doors": {"double": {"hinge_count": 4}},
                    "handles": {"knob": {"price_per_unit": 3.5}},
                    "drawers": {"push": {"base_price": 50}},
                    "volume_price_per_m3": 900,
                }
            )
        )
        defaults = PricingParameters()
        assert params.casing_coefficient == 1.5
        assert params.socle.wood_price_per_m3 == 700
        assert params.socle.wood_height == 60
        assert params.doors["double"].hinge_count == 4
        assert params.doors["double"].coefficient == defaults.doors["double"].coefficient
        assert params.handles == {HandleType.KNOB: 3.5}
        assert params.drawers["push"].base_price == 50
        assert params.drawers["standard"] == defaults.drawers["standard"]
        assert params.volume_price_per_m3 == 900
        assert params.hinge_price == defaults.hinge_price


class TestDomainToConfig:
    """Tests for domain_to_config."""

    def test_round_trip(self, sideboard: Zone, envelope: Envelope) -> None:
        config = domain_to_config(sideboard, envelope, ["panel-top-1", "panel-left-0"])
        assert config.deleted_panel_ids == ["panel-left-0", "panel-top-1"]
        assert config.socle_height is None
        assert config_to_tree(config).tree == sideboard
        assert config_to_envelope(config) == envelope

    def test_non_default_socle_height_written(self, sideboard: Zone) -> None:
        envelope = Envelope.of(1200, 830, 400, socle_height=150)
        config = domain_to_config(sideboard, envelope, socle=SocleKind.METAL)
        assert config.socle_height == 150
        assert config_to_envelope(config).socle_height == 150

    @pytest.mark.parametrize("socle", [SocleKind.METAL, SocleKind.WOOD])
    def test_default_socle_height_omitted(self, sideboard: Zone, socle: SocleKind) -> None:
        envelope = Envelope.of(1200, 830, 400, socle_height=100)
        assert domain_to_config(sideboard, envelope, socle=socle).socle_height is None
