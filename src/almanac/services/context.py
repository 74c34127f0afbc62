from __future__ import annotations

from dataclasses import dataclass, field

from ..config import AppSettings, get_settings
from ..data import RenderCache


@dataclass(slots=True)
class ServiceContext:
    """Settings and caches shared by the view services."""

    settings: AppSettings = field(default_factory=get_settings)
    cache: RenderCache = field(init=False)

    def __post_init__(self) -> None:
        self.cache = RenderCache(max_entries=self.settings.cache.max_entries)
