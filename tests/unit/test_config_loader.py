"""Unit tests for configuration and pricing document loading."""

import json
from pathlib import Path
from typing import Any

import pytest

from carcass.application.config import (
    ConfigError,
    ConfigurationSchema,
    PricingParametersSchema,
    dump_config,
    load_config,
    load_config_from_dict,
    load_pricing,
    load_pricing_from_dict,
    save_config,
)
from carcass.domain import GlobalDoorType, SocleKind, ZoneKind


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_valid_file(self, config_file: Path) -> None:
        config = load_config(config_file)
        assert isinstance(config, ConfigurationSchema)
        assert config.dimensions.width == 1200
        assert config.zone_tree.type is ZoneKind.VERTICAL
        assert config.zone_tree.children[1].children[0].content == "drawer"
        assert config.material_selection.price_per_m2 == 40.0

    def test_defaults(self) -> None:
        config = load_config_from_dict({"dimensions": {"width": 600, "height": 800, "depth": 300}})
        assert config.zone_tree.id == "root"
        assert config.thickness == 19
        assert config.socle is SocleKind.NONE
        assert config.door_type is GlobalDoorType.NONE
        assert config.deleted_panel_ids == []

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"
        assert "not found" in str(exc_info.value)

    def test_invalid_json_reports_position(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{\n  "dimensions": {,\n}', encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 2
        assert error.path == path

    def test_unknown_field_rejected(self, config_data: dict[str, Any]) -> None:
        config_data["colour"] = "red"
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(config_data)
        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == "colour"

    def test_nested_error_path(self, config_data: dict[str, Any]) -> None:
        config_data["zoneTree"]["children"][0]["glassShelfCount"] = 9
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(config_data)
        assert exc_info.value.details[0]["path"] == "zoneTree.children[0].glassShelfCount"

    def test_non_positive_dimension_rejected(self, config_data: dict[str, Any]) -> None:
        config_data["dimensions"]["depth"] = 0
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(config_data)
        assert "dimensions.depth" in str(exc_info.value)

    def test_root_id_required(self, config_data: dict[str, Any]) -> None:
        config_data["zoneTree"]["id"] = "top"
        with pytest.raises(ConfigError, match="root id must be 'root'"):
            load_config_from_dict(config_data)

    def test_shelf_positions_are_percentages(self, config_data: dict[str, Any]) -> None:
        config_data["zoneTree"]["children"][0]["glassShelfPositions"] = [50, 140]
        with pytest.raises(ConfigError, match="between 0 and 100"):
            load_config_from_dict(config_data)

    def test_deleted_ids_deduplicated(self, config_data: dict[str, Any]) -> None:
        config_data["deletedPanelIds"] = ["panel-top-0", "panel-left-0", "panel-top-0"]
        config = load_config_from_dict(config_data)
        assert config.deleted_panel_ids == ["panel-top-0", "panel-left-0"]

    def test_snake_case_keys_accepted(self) -> None:
        config = load_config_from_dict(
            {
                "dimensions": {"width": 600, "height": 800, "depth": 300},
                "zone_tree": {"id": "root", "content": "dressing", "has_light": True},
                "door_type": "double",
            }
        )
        assert config.zone_tree.has_light is True
        assert config.door_type is GlobalDoorType.DOUBLE


class TestDumpConfig:
    """Tests for dump_config and save_config."""

    def test_camel_case_without_nulls(self, config_data: dict[str, Any]) -> None:
        data = dump_config(load_config_from_dict(config_data))
        assert "zoneTree" in data
        assert "splitRatio" in data["zoneTree"]
        assert "splitRatios" not in data["zoneTree"]
        assert "hasLight" not in data["zoneTree"]["children"][0]
        assert "socleHeight" not in data

    def test_dump_then_load_is_stable(self, config_data: dict[str, Any]) -> None:
        config = load_config_from_dict(config_data)
        assert load_config_from_dict(dump_config(config)) == config

    def test_extra_material_keys_preserved(self, config_data: dict[str, Any]) -> None:
        config_data["materialSelection"]["swatch"] = "oak-natural"
        data = dump_config(load_config_from_dict(config_data))
        assert data["materialSelection"]["swatch"] == "oak-natural"

    def test_save_config(self, tmp_path: Path, config_data: dict[str, Any]) -> None:
        path = tmp_path / "saved.json"
        save_config(load_config_from_dict(config_data), path)
        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["dimensions"] == {"width": 1200.0, "height": 730.0, "depth": 400.0}


class TestLoadPricing:
    """Tests for pricing documents."""

    def test_none_returns_defaults(self) -> None:
        pricing = load_pricing(None)
        assert isinstance(pricing, PricingParametersSchema)
        assert pricing.doors == {}

    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "pricing.json"
        path.write_text(
            json.dumps({"hinges": {"standard": {"price_per_unit": 7}}}), encoding="utf-8"
        )
        assert load_pricing(path).hinges.standard.price_per_unit == 7

    def test_unknown_door_key_rejected(self) -> None:
        with pytest.raises(ConfigError, match="Unknown door rate key"):
            load_pricing_from_dict({"doors": {"sliding": {"coefficient": 0.1}}})

    def test_door_content_key_accepted(self) -> None:
        pricing = load_pricing_from_dict({"doors": {"mirror_door": {"hinge_count": 3}}})
        assert pricing.doors["mirror_door"].hinge_count == 3

    def test_unknown_drawer_key_rejected(self) -> None:
        with pytest.raises(ConfigError, match="Unknown drawer rate key"):
            load_pricing_from_dict({"drawers": {"deep": {"base_price": 50}}})

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_pricing_from_dict({"cables": {"pass_cable": {"fixed_price": -1}}})
        assert exc_info.value.details[0]["path"] == "cables.pass_cable.fixed_price"
