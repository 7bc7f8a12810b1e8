"""Unit tests for configuration validation."""

from typing import Any

from carcass.application.config import (
    ValidationResult,
    load_config_from_dict,
    validate_config,
)
from carcass.application.config.validator import (
    CORRECTION_SUGGESTION,
    check_envelope,
    check_glass_shelves,
)


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_empty_result_is_valid(self) -> None:
        result = ValidationResult()
        assert result.is_valid
        assert not result.has_warnings
        assert result.exit_code == 0

    def test_exit_codes(self) -> None:
        assert ValidationResult().add_warning("a", "careful").exit_code == 2
        assert ValidationResult().add_error("a", "broken").add_warning("b", "x").exit_code == 1

    def test_merge(self) -> None:
        result = ValidationResult().add_warning("a", "one")
        result.merge(ValidationResult().add_error("b", "two"))
        assert len(result.errors) == 1
        assert len(result.warnings) == 1


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid_configuration(self, config_data: dict[str, Any]) -> None:
        result = validate_config(load_config_from_dict(config_data))
        assert result.is_valid
        assert result.warnings == []
        assert result.exit_code == 0

    def test_envelope_too_narrow(self, config_data: dict[str, Any]) -> None:
        config_data["dimensions"]["width"] = 30
        result = validate_config(load_config_from_dict(config_data))
        assert not result.is_valid
        assert result.errors[0].path == "dimensions"
        assert "side panels" in result.errors[0].message

    def test_socle_taller_than_carcass(self, config_data: dict[str, Any]) -> None:
        config_data.update(socle="metal", socleHeight=720)
        result = check_envelope(load_config_from_dict(config_data))
        assert result.exit_code == 1

    def test_tree_does_not_fit(self, config_data: dict[str, Any]) -> None:
        config_data["dimensions"]["width"] = 45
        result = validate_config(load_config_from_dict(config_data))
        assert result.errors[0].path == "zoneTree"

    def test_corrections_are_warnings(self, config_data: dict[str, Any]) -> None:
        config_data["zoneTree"]["children"][0]["content"] = "wine_rack"
        result = validate_config(load_config_from_dict(config_data))
        assert result.is_valid
        assert result.exit_code == 2
        assert result.warnings[0].path == "zoneTree"
        assert result.warnings[0].suggestion == CORRECTION_SUGGESTION

    def test_stale_deleted_ids_are_warnings(self, config_data: dict[str, Any]) -> None:
        config_data["deletedPanelIds"] = ["panel-top-0", "separator-v-v3-0"]
        result = validate_config(load_config_from_dict(config_data))
        assert [w.path for w in result.warnings] == ["deletedPanelIds"]
        assert "separator-v-v3-0" in result.warnings[0].message


class TestCheckGlassShelves:
    """Tests for check_glass_shelves."""

    def test_positions_on_other_content(self, config_data: dict[str, Any]) -> None:
        config_data["zoneTree"]["children"][0]["glassShelfPositions"] = [50]
        result = check_glass_shelves(load_config_from_dict(config_data))
        assert "glass shelf positions on 'shelf' content" in result.warnings[0].message

    def test_position_count_mismatch(self, config_data: dict[str, Any]) -> None:
        config_data["zoneTree"]["children"][0].update(
            content="glass_shelf", glassShelfCount=3, glassShelfPositions=[25, 75]
        )
        result = check_glass_shelves(load_config_from_dict(config_data))
        assert "2 shelf position(s) for 3 glass shelf(s)" in result.warnings[0].message

    def test_matching_positions(self, config_data: dict[str, Any]) -> None:
        config_data["zoneTree"]["children"][0].update(
            content="glass_shelf", glassShelfCount=2, glassShelfPositions=[25, 75]
        )
        assert not check_glass_shelves(load_config_from_dict(config_data)).has_warnings
