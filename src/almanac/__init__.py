"""Almanac: calendar grid and multi-day event layout for arbitrary calendar systems."""

from __future__ import annotations

from .layout import RenderModel, ViewRequest, build_view

__all__ = ["RenderModel", "ViewRequest", "build_view"]
__version__ = "0.1.0"
