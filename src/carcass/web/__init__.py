"""FastAPI REST API for carcass configurations.

This module provides a REST API for resolving saved configurations into
panel segments, pricing them, validating them and exporting them.

Usage:
    uvicorn carcass.web:app --reload
"""

from carcass.web.app import app, create_app

__all__ = ["app", "create_app"]
