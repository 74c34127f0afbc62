"""Document loading and render caching."""

from __future__ import annotations

from .cache import RenderCache
from .loader import DocumentError, calendar_from_record, dump_json, load_calendar, load_notes, notes_from_records

__all__ = [
    "DocumentError",
    "RenderCache",
    "calendar_from_record",
    "dump_json",
    "load_calendar",
    "load_notes",
    "notes_from_records",
]
