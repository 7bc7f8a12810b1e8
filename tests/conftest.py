"""Pytest configuration and shared fixtures for carcass tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from carcass.domain import Envelope, Zone, ZoneContent, ZoneKind, new_tree, set_content, split


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def envelope() -> Envelope:
    """A 1200 x 730 x 400 sideboard with 19mm boards and no socle."""
    return Envelope.of(1200, 730, 400)


@pytest.fixture
def two_columns() -> Zone:
    """Root split into two equal columns."""
    return split(new_tree(), "root", ZoneKind.VERTICAL, 2)


@pytest.fixture
def sideboard() -> Zone:
    """Two columns; the right one is a stack of two drawers."""
    tree = split(new_tree(), "root", ZoneKind.VERTICAL, 2)
    tree = split(tree, "root-1", ZoneKind.HORIZONTAL, 2)
    tree = set_content(tree, "root-1-0", ZoneContent.DRAWER)
    return set_content(tree, "root-1-1", ZoneContent.DRAWER)


# =============================================================================
# Configuration fixtures
# =============================================================================


@pytest.fixture
def config_data() -> dict[str, Any]:
    """A saved configuration document as the configurator writes it."""
    return {
        "dimensions": {"width": 1200, "height": 730, "depth": 400},
        "zoneTree": {
            "id": "root",
            "type": "vertical",
            "splitRatio": 50,
            "children": [
                {"id": "root-0", "content": "shelf"},
                {
                    "id": "root-1",
                    "type": "horizontal",
                    "splitRatio": 50,
                    "children": [
                        {"id": "root-1-0", "content": "drawer"},
                        {"id": "root-1-1", "content": "drawer"},
                    ],
                },
            ],
        },
        "deletedPanelIds": [],
        "materialSelection": {"finish": "oak", "colorId": 3, "pricePerM2": 40.0},
        "thickness": 19,
        "socle": "none",
    }


@pytest.fixture
def config_file(tmp_path: Path, config_data: dict[str, Any]) -> Path:
    """The ``config_data`` document written to disk."""
    path = tmp_path / "sideboard.json"
    path.write_text(json.dumps(config_data), encoding="utf-8")
    return path
