from __future__ import annotations

import hashlib
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple

from ...domain import DateComponents, DisplayMode, NoteSource

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, int, int, int]


def _date_token(date: Optional[DateComponents]) -> str:
    if date is None:
        return "-"
    return f"{date.year}.{date.month}.{date.day}"


def notes_signature(notes: Iterable[NoteSource]) -> str:
    digest = hashlib.sha1()
    for note in notes:
        # Notes are frozen dataclasses, so the repr covers every field.
        digest.update(repr(note).encode("utf-8"))
        digest.update(b"|")
    return digest.hexdigest()


@dataclass
class _Entry:
    signature: str
    model: Any


@dataclass
class RenderCache:
    """Render models keyed by view position, guarded by an input signature."""

    max_entries: int = 64
    entries: "OrderedDict[CacheKey, _Entry]" = field(default_factory=OrderedDict)

    @staticmethod
    def key_for(mode: DisplayMode, date: DateComponents) -> CacheKey:
        return (DisplayMode(mode).value, date.year, date.month, date.day)

    def signature(
        self,
        *,
        calendar: Any,
        notes: Iterable[NoteSource],
        today: Optional[DateComponents],
        selected: Optional[DateComponents],
    ) -> str:
        calendar_token = f"{getattr(calendar, 'id', '') or ''}:{id(calendar)}"
        return "/".join((calendar_token, notes_signature(notes), _date_token(today), _date_token(selected)))

    def get(self, key: CacheKey, signature: str) -> Optional[Any]:
        entry = self.entries.get(key)
        if entry is None:
            return None
        if entry.signature != signature:
            self.entries.pop(key, None)
            return None
        return entry.model

    def put(self, key: CacheKey, signature: str, model: Any) -> None:
        self.entries.pop(key, None)
        self.entries[key] = _Entry(signature=signature, model=model)
        while len(self.entries) > max(self.max_entries, 1):
            evicted, _ = self.entries.popitem(last=False)
            logger.debug("Evicted render cache entry %s", evicted)

    def invalidate_notes(self) -> None:
        self.entries.clear()

    def invalidate_calendar(self) -> None:
        self.entries.clear()

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)


__all__ = ["CacheKey", "RenderCache", "notes_signature"]
