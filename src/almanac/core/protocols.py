from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from ..domain import DateComponents, FestivalDescriptor, InternalDate, RecurrenceDescriptor


class CalendarContractError(ValueError):
    """Raised when a calendar object cannot support any sane layout."""


@runtime_checkable
class MonthLike(Protocol):
    name: str
    abbreviation: Optional[str]
    starting_weekday: Optional[int]
    weekdays: Sequence[Any]


@runtime_checkable
class CalendarDef(Protocol):
    """Calendar arithmetic consumed by the layout engine.

    Day counts and festival lookups take *internal* years and 0-indexed days;
    the date utilities take display dates.
    """

    months: Sequence[MonthLike]
    weekdays: Sequence[Any]
    year_zero: int
    hours_per_day: int

    @property
    def days_in_week(self) -> int: ...

    @property
    def is_monthless(self) -> bool: ...

    def get_days_in_month(self, month: int, internal_year: int) -> int: ...

    def get_days_in_year(self, internal_year: int) -> int: ...

    def find_festival_day(self, date: InternalDate) -> Optional[FestivalDescriptor]: ...

    def weekday_of(self, date: DateComponents) -> int: ...

    def add_days(self, date: DateComponents, days: int) -> DateComponents: ...

    def days_between(self, start: DateComponents, end: DateComponents) -> int: ...


@runtime_checkable
class RecurrencePredicate(Protocol):
    def matches(self, descriptor: RecurrenceDescriptor, date: DateComponents) -> bool: ...


_REQUIRED_METHODS = (
    "get_days_in_month",
    "get_days_in_year",
    "find_festival_day",
    "weekday_of",
    "add_days",
    "days_between",
)


def ensure_calendar(calendar: Any) -> CalendarDef:
    """Reject objects that do not implement the calendar contract."""

    if calendar is None:
        raise CalendarContractError("A calendar definition is required.")
    missing = [name for name in _REQUIRED_METHODS if not callable(getattr(calendar, name, None))]
    for attribute in ("months", "weekdays", "year_zero"):
        if not hasattr(calendar, attribute):
            missing.append(attribute)
    if missing:
        raise CalendarContractError(f"Calendar object is missing: {', '.join(missing)}")
    if calendar.days_in_week <= 0:
        raise CalendarContractError(f"days_in_week must be positive, got {calendar.days_in_week}")
    return calendar


__all__ = [
    "CalendarContractError",
    "CalendarDef",
    "MonthLike",
    "RecurrencePredicate",
    "ensure_calendar",
]
