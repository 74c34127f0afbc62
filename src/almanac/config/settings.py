from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "Almanac"
APP_AUTHOR = "Almanac"


@dataclass(frozen=True)
class RenderSettings:
    default_hours_per_day: int
    default_event_color: str
    abbreviation_threshold: int


@dataclass(frozen=True)
class StorageSettings:
    data_dir: Path
    calendar_file: Path
    notes_file: Path


@dataclass(frozen=True)
class CacheSettings:
    max_entries: int


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int


@dataclass(frozen=True)
class AppSettings:
    render: RenderSettings
    storage: StorageSettings
    cache: CacheSettings
    server: ServerSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    render = RenderSettings(
        default_hours_per_day=_int_from_env("ALMANAC_HOURS_PER_DAY", 24),
        default_event_color=os.getenv("ALMANAC_EVENT_COLOR", "#4a86e8"),
        abbreviation_threshold=_int_from_env("ALMANAC_ABBREV_THRESHOLD", 5),
    )

    data_dir = Path(os.getenv("ALMANAC_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR))
    storage = StorageSettings(
        data_dir=data_dir,
        calendar_file=data_dir / os.getenv("ALMANAC_CALENDAR_FILE", "calendar.json"),
        notes_file=data_dir / os.getenv("ALMANAC_NOTES_FILE", "notes.json"),
    )

    cache = CacheSettings(max_entries=_int_from_env("ALMANAC_CACHE_MAX_ENTRIES", 64))

    server = ServerSettings(
        host=os.getenv("ALMANAC_HOST", "127.0.0.1"),
        port=_int_from_env("ALMANAC_PORT", 8765),
    )

    return AppSettings(render=render, storage=storage, cache=cache, server=server)
