"""Unit tests for the CLI commands other than validate."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from carcass.application import ResolveConfigurationCommand
from carcass.application.config import load_config
from carcass.cli.main import app


runner = CliRunner()


def _write(tmp_path: Path, data: dict[str, Any], name: str = "config.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestSegmentsCommand:
    """Tests for `carcass segments`."""

    def test_table(self, config_file: Path) -> None:
        result = runner.invoke(app, ["segments", str(config_file)])
        assert result.exit_code == 0
        assert "PANEL SEGMENTS" in result.output
        assert "auto-hidden" in result.output
        assert "13 segment(s)" in result.output

    def test_json(self, config_file: Path) -> None:
        result = runner.invoke(app, ["segments", str(config_file), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 13
        assert data[0]["id"] == "panel-left-0"

    def test_visible_only(self, config_file: Path) -> None:
        result = runner.invoke(
            app, ["segments", str(config_file), "-f", "json", "--visible-only"]
        )
        assert result.exit_code == 0
        ids = [segment["id"] for segment in json.loads(result.output)]
        assert len(ids) == 12
        assert "separator-h-c1-h0-0" not in ids

    def test_unknown_format(self, config_file: Path) -> None:
        result = runner.invoke(app, ["segments", str(config_file), "--format", "xml"])
        assert result.exit_code == 1
        assert "Unknown format: xml" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["segments", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_unresolvable_dimensions(
        self, tmp_path: Path, config_data: dict[str, Any]
    ) -> None:
        config_data["dimensions"]["width"] = 30
        result = runner.invoke(app, ["segments", str(_write(tmp_path, config_data))])
        assert result.exit_code == 1
        assert "leaves no room" in result.output

    def test_corrections_reported(
        self, tmp_path: Path, config_data: dict[str, Any]
    ) -> None:
        config_data["zoneTree"]["children"][0]["content"] = "wine_rack"
        result = runner.invoke(app, ["segments", str(_write(tmp_path, config_data))])
        assert result.exit_code == 0
        assert "Warning: corrected root-0: unknown content 'wine_rack'" in result.output


class TestPriceCommand:
    """Tests for `carcass price`."""

    def test_table(self, config_file: Path) -> None:
        result = runner.invoke(app, ["price", str(config_file)])
        assert result.exit_code == 0
        assert "PRICE ESTIMATE" in result.output
        assert "TOTAL" in result.output

    def test_json(self, config_file: Path) -> None:
        result = runner.invoke(app, ["price", str(config_file), "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["total"] > 0
        assert set(data["subtotals"]) == {
            "casing",
            "back",
            "socle",
            "equipment",
            "separators",
            "doors",
        }

    def test_pricing_file(self, tmp_path: Path, config_file: Path) -> None:
        base = json.loads(
            runner.invoke(app, ["price", str(config_file), "-f", "json"]).output
        )
        pricing = _write(tmp_path, {"bases": {"none": {"fixed_price": 100}}}, "pricing.json")
        result = runner.invoke(
            app, ["price", str(config_file), "-f", "json", "--pricing", str(pricing)]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["total"] == base["total"] + 100

    def test_missing_quote_fails(
        self, monkeypatch: pytest.MonkeyPatch, config_file: Path
    ) -> None:
        execute = ResolveConfigurationCommand.execute

        def without_quote(self, *args, **kwargs):
            return replace(execute(self, *args, **kwargs), quote=None)

        monkeypatch.setattr(ResolveConfigurationCommand, "execute", without_quote)
        result = runner.invoke(app, ["price", str(config_file)])
        assert result.exit_code == 1
        assert "could not be priced" in result.output

    def test_invalid_pricing_file(self, tmp_path: Path, config_file: Path) -> None:
        pricing = _write(tmp_path, {"doors": {"sliding": {}}}, "pricing.json")
        result = runner.invoke(app, ["price", str(config_file), "--pricing", str(pricing)])
        assert result.exit_code == 1
        assert "Errors:" in result.output


class TestDescribeCommand:
    """Tests for `carcass describe`."""

    def test_descriptor(self, config_file: Path) -> None:
        result = runner.invoke(app, ["describe", str(config_file)])
        assert result.exit_code == 0
        assert result.output.strip() == "V[50,50](,HI[50,50](T,T))"


class TestExportCommand:
    """Tests for `carcass export`."""

    def test_all_formats(self, tmp_path: Path, config_file: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(app, ["export", str(config_file), "-o", str(out)])
        assert result.exit_code == 0
        for extension in ("json", "svg", "dxf", "stl"):
            assert (out / f"sideboard.{extension}").exists()
        assert "svg: " in result.output

    def test_selected_formats_and_name(self, tmp_path: Path, config_file: Path) -> None:
        result = runner.invoke(
            app,
            [
                "export",
                str(config_file),
                "--formats",
                "JSON, svg",
                "--output-dir",
                str(tmp_path),
                "--project-name",
                "kitchen",
            ],
        )
        assert result.exit_code == 0
        assert (tmp_path / "kitchen.json").exists()
        assert (tmp_path / "kitchen.svg").exists()
        assert not (tmp_path / "kitchen.dxf").exists()

    def test_unknown_format(self, tmp_path: Path, config_file: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app, ["export", str(config_file), "--formats", "svg,obj", "-o", str(out)]
        )
        assert result.exit_code == 1
        assert "Unknown formats: obj" in result.output
        assert "Available formats: dxf, json, stl, svg" in result.output
        assert not out.exists()


class TestInitCommand:
    """Tests for `carcass init`."""

    def test_creates_grid(self, tmp_path: Path) -> None:
        path = tmp_path / "wardrobe.json"
        result = runner.invoke(
            app,
            [
                "init",
                str(path),
                "--width", "1800",
                "--height", "2000",
                "--depth", "600",
                "--columns", "3",
                "--rows", "2",
                "--socle", "metal",
            ],
        )
        assert result.exit_code == 0
        assert f"Created {path} (6 zone(s))" in result.output

        config = load_config(path)
        assert len(config.zone_tree.children) == 3
        assert config.zone_tree.children[2].children[1].id == "root-2-1"
        assert config.socle.value == "metal"
        assert config.socle_height is None

    def test_created_file_resolves(self, tmp_path: Path) -> None:
        path = tmp_path / "box.json"
        runner.invoke(
            app, ["init", str(path), "-w", "600", "--height", "800", "-d", "300"]
        )
        result = runner.invoke(app, ["describe", str(path)])
        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_existing_file_kept(self, tmp_path: Path, config_file: Path) -> None:
        before = config_file.read_text(encoding="utf-8")
        result = runner.invoke(
            app,
            ["init", str(config_file), "-w", "600", "--height", "800", "-d", "300"],
        )
        assert result.exit_code == 1
        assert "use --force" in result.output
        assert config_file.read_text(encoding="utf-8") == before

    def test_force_overwrites(self, config_file: Path) -> None:
        result = runner.invoke(
            app,
            [
                "init",
                str(config_file),
                "-w", "600",
                "--height", "800",
                "-d", "300",
                "--force",
            ],
        )
        assert result.exit_code == 0
        assert load_config(config_file).dimensions.width == 600

    def test_too_small(self, tmp_path: Path) -> None:
        path = tmp_path / "tiny.json"
        result = runner.invoke(
            app, ["init", str(path), "-w", "30", "--height", "800", "-d", "300"]
        )
        assert result.exit_code == 1
        assert "side panels" in result.output
        assert not path.exists()
