from __future__ import annotations

from typing import Optional

import pytest

from almanac.core import CalendarDefinition, FestivalDef, LeapYearRule, MonthDef, RecurrenceMatcher, WeekdayDef
from almanac.domain import DateComponents, NoteSource, Recurrence, RepeatRule

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

GREGORIAN_MONTHS = (
    ("January", 31, None),
    ("February", 28, 29),
    ("March", 31, None),
    ("April", 30, None),
    ("May", 31, None),
    ("June", 30, None),
    ("July", 31, None),
    ("August", 31, None),
    ("September", 30, None),
    ("October", 31, None),
    ("November", 30, None),
    ("December", 31, None),
)


def _weekdays() -> tuple[WeekdayDef, ...]:
    return tuple(
        WeekdayDef(name=name, abbreviation=name[:3], is_rest_day=name in {"Sunday", "Saturday"})
        for name in WEEKDAY_NAMES
    )


@pytest.fixture
def gregorian() -> CalendarDefinition:
    """Proleptic Gregorian calendar; 1 January 2025 is a Wednesday (index 3)."""

    return CalendarDefinition(
        name="Gregorian",
        id="gregorian",
        months=tuple(
            MonthDef(name=name, days=days, abbreviation=name[:3], leap_days=leap_days)
            for name, days, leap_days in GREGORIAN_MONTHS
        ),
        weekdays=_weekdays(),
        first_weekday=6,
        leap_year=LeapYearRule(rule="gregorian"),
    )


@pytest.fixture
def reckoning() -> CalendarDefinition:
    """Three months, 92 days a year, with an intercalary Midwinter on day 30 of the first month.

    Every year starts on weekday 0 because 91 counting days make exactly 13 weeks.
    """

    return CalendarDefinition(
        name="Reckoning",
        id="reckoning",
        months=(
            MonthDef(name="Deepwinter", days=31),
            MonthDef(name="The Claw of Winter", days=30),
            MonthDef(name="Thaw", days=31),
        ),
        weekdays=_weekdays(),
        festivals=(
            FestivalDef(name="Midwinter", month=0, day=30, counts_for_weekday=False, color="#ffffff"),
            FestivalDef(name="Greengrass", month=2, day=1),
        ),
    )


@pytest.fixture
def sparse() -> CalendarDefinition:
    """A calendar whose middle month has no days."""

    return CalendarDefinition(
        name="Sparse",
        months=(MonthDef(name="Alpha", days=10), MonthDef(name="Void", days=0), MonthDef(name="Gamma", days=10)),
        weekdays=_weekdays(),
    )


@pytest.fixture
def monthless() -> CalendarDefinition:
    """Twenty day-of-year days in five-day weeks."""

    return CalendarDefinition(
        name="Monthless",
        months=(),
        weekdays=tuple(WeekdayDef(name=f"Day {index + 1}") for index in range(5)),
        days_per_year=20,
    )


@pytest.fixture
def matcher(gregorian: CalendarDefinition) -> RecurrenceMatcher:
    return RecurrenceMatcher(gregorian)


@pytest.fixture
def make_note():
    def factory(
        note_id: str,
        start: DateComponents,
        end: Optional[DateComponents] = None,
        *,
        name: Optional[str] = None,
        rule: RepeatRule = RepeatRule.NEVER,
        interval: int = 1,
        repeat_end: Optional[DateComponents] = None,
        max_occurrences: int = 0,
        all_day: bool = False,
        start_hour: Optional[int] = None,
        start_minute: int = 0,
        end_hour: Optional[int] = None,
        end_minute: int = 0,
        color: Optional[str] = None,
    ) -> NoteSource:
        return NoteSource(
            id=note_id,
            name=name or note_id,
            start_date=start,
            end_date=end,
            color=color,
            recurrence=Recurrence(
                rule=rule, interval=interval, repeat_end_date=repeat_end, max_occurrences=max_occurrences
            ),
            all_day=all_day,
            start_hour=start_hour,
            start_minute=start_minute,
            end_hour=end_hour,
            end_minute=end_minute,
        )

    return factory
