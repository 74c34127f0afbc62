"""Domain models for calendar grids and notes."""

from __future__ import annotations

from .enums import DisplayMode, RepeatRule
from .models import (
    DateComponents,
    EventBlock,
    EventSegment,
    FestivalDescriptor,
    GridCell,
    InternalDate,
    NoteSource,
    Occurrence,
    Recurrence,
    RecurrenceDescriptor,
    WeekRow,
)

__all__ = [
    "DateComponents",
    "DisplayMode",
    "EventBlock",
    "EventSegment",
    "FestivalDescriptor",
    "GridCell",
    "InternalDate",
    "NoteSource",
    "Occurrence",
    "Recurrence",
    "RecurrenceDescriptor",
    "RepeatRule",
    "WeekRow",
]
