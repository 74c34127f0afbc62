"""Configuration models and helpers."""

from __future__ import annotations

from .settings import AppSettings, CacheSettings, RenderSettings, ServerSettings, StorageSettings, get_settings

__all__ = ["AppSettings", "CacheSettings", "RenderSettings", "ServerSettings", "StorageSettings", "get_settings"]
