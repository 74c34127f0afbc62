from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .enums import RepeatRule

_DATE_TOKEN = re.compile(r"^(-?\d+)-(\d+)-(\d+)$")


def _parse_date(value: Any) -> "DateComponents":
    if isinstance(value, DateComponents):
        return value
    if isinstance(value, dict):
        return DateComponents.from_record(value)
    raise ValueError(f"Unsupported date value: {value!r}")


@dataclass(frozen=True, slots=True, order=True)
class DateComponents:
    """A date in display form: display year, 0-indexed month, 1-indexed day."""

    year: int
    month: int
    day: int

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "DateComponents":
        return cls(year=int(record["year"]), month=int(record.get("month") or 0), day=int(record.get("day") or 1))

    @classmethod
    def parse(cls, text: str) -> "DateComponents":
        """Parse ``"YEAR-MONTH-DAY"`` with a 0-indexed month, e.g. ``"1492-0-15"``."""

        match = _DATE_TOKEN.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid date '{text}'. Expected YEAR-MONTH-DAY with a 0-indexed month.")
        year, month, day = (int(part) for part in match.groups())
        return cls(year=year, month=month, day=day)

    def to_record(self) -> Dict[str, int]:
        return {"year": self.year, "month": self.month, "day": self.day}

    def to_internal(self, year_zero: int) -> "InternalDate":
        return InternalDate(year=self.year - year_zero, month=self.month, day_of_month=self.day - 1)

    def same_month(self, year: int, month: int) -> bool:
        return self.year == year and self.month == month


@dataclass(frozen=True, slots=True, order=True)
class InternalDate:
    """A date in the form calendar arithmetic expects: internal year, 0-indexed day."""

    year: int
    month: int
    day_of_month: int

    def to_display(self, year_zero: int) -> DateComponents:
        return DateComponents(year=self.year + year_zero, month=self.month, day=self.day_of_month + 1)


@dataclass(frozen=True, slots=True)
class FestivalDescriptor:
    name: str
    color: str = ""
    icon: str = ""
    counts_for_weekday: bool = True
    description: str = ""

    @property
    def is_intercalary(self) -> bool:
        return self.counts_for_weekday is False


@dataclass(frozen=True, slots=True)
class Recurrence:
    rule: RepeatRule = RepeatRule.NEVER
    interval: int = 1
    repeat_end_date: Optional[DateComponents] = None
    max_occurrences: int = 0

    @property
    def is_repeating(self) -> bool:
        return self.rule is not RepeatRule.NEVER

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> "Recurrence":
        if not record:
            return cls()
        end = record.get("repeat_end_date")
        return cls(
            rule=RepeatRule(record.get("rule") or RepeatRule.NEVER),
            interval=max(int(record.get("interval") or 1), 1),
            repeat_end_date=_parse_date(end) if end else None,
            max_occurrences=int(record.get("max_occurrences") or 0),
        )


@dataclass(frozen=True, slots=True)
class RecurrenceDescriptor:
    """Everything the recurrence predicate needs to decide whether a date matches."""

    start_date: DateComponents
    end_date: Optional[DateComponents]
    recurrence: Recurrence

    @property
    def rule(self) -> RepeatRule:
        return self.recurrence.rule


@dataclass(frozen=True, slots=True)
class NoteSource:
    id: str
    name: str
    start_date: DateComponents
    end_date: Optional[DateComponents] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    icon_type: Optional[str] = None
    recurrence: Recurrence = field(default_factory=Recurrence)
    all_day: bool = False
    start_hour: Optional[int] = None
    start_minute: int = 0
    end_hour: Optional[int] = None
    end_minute: int = 0

    @property
    def is_multi_day(self) -> bool:
        return self.end_date is not None and self.end_date != self.start_date

    @property
    def is_all_day(self) -> bool:
        return self.all_day or self.start_hour is None

    @property
    def priority(self) -> int:
        return -1 if self.is_all_day else int(self.start_hour or 0)

    def descriptor(self, *, single_day: bool = False) -> RecurrenceDescriptor:
        end = self.start_date if single_day else self.end_date
        return RecurrenceDescriptor(start_date=self.start_date, end_date=end, recurrence=self.recurrence)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "NoteSource":
        end = record.get("end_date")
        return cls(
            id=str(record["id"]),
            name=str(record.get("name") or ""),
            start_date=_parse_date(record["start_date"]),
            end_date=_parse_date(end) if end else None,
            color=record.get("color"),
            icon=record.get("icon"),
            icon_type=record.get("icon_type"),
            recurrence=Recurrence.from_record(record.get("recurrence")),
            all_day=bool(record.get("all_day", False)),
            start_hour=record.get("start_hour"),
            start_minute=int(record.get("start_minute") or 0),
            end_hour=record.get("end_hour"),
            end_minute=int(record.get("end_minute") or 0),
        )


@dataclass(slots=True)
class EventBlock:
    note_id: str
    name: str
    color: str
    icon: Optional[str]
    year: int
    month: int
    day: int
    start_hour: int
    hour_span: int
    start_time: str
    end_time: Optional[str]
    all_day: bool
    is_multi_day: bool = False


@dataclass(slots=True)
class GridCell:
    day: int = 0
    year: int = 0
    month: int = 0
    is_today: bool = False
    is_selected: bool = False
    is_from_other_month: bool = False
    is_from_other_week: bool = False
    is_festival: bool = False
    is_intercalary: bool = False
    is_rest_day: bool = False
    is_empty: bool = False
    festival_name: Optional[str] = None
    festival_color: str = ""
    festival_icon: str = ""
    weekday_index: Optional[int] = None
    notes: List[NoteSource] = field(default_factory=list)
    blocks: List[EventBlock] = field(default_factory=list)

    @classmethod
    def placeholder(cls) -> "GridCell":
        return cls(is_empty=True)

    @property
    def date(self) -> DateComponents:
        return DateComponents(self.year, self.month, self.day)

    def with_festival(self, festival: Optional[FestivalDescriptor]) -> "GridCell":
        if festival is None:
            return self
        return replace(
            self,
            is_festival=True,
            festival_name=festival.name,
            festival_color=festival.color or "",
            festival_icon=festival.icon or "",
        )


@dataclass(slots=True)
class EventSegment:
    occurrence_id: str
    note_id: str
    name: str
    color: str
    icon: Optional[str]
    week_index: int
    lane: int
    left_percent: float
    width_percent: float
    is_continuation: bool = False
    is_segment: bool = False


@dataclass(slots=True)
class WeekRow:
    cells: List[GridCell] = field(default_factory=list)
    is_intercalary_row: bool = False
    segments: List[EventSegment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cells)


@dataclass(frozen=True, slots=True)
class Occurrence:
    note: NoteSource
    start: DateComponents
    end: DateComponents
    start_day: int
    end_day: int
    priority: int
    is_continuation: bool = False
