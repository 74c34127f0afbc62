from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from ..core.protocols import CalendarDef, RecurrencePredicate, ensure_calendar
from ..domain import DateComponents, FestivalDescriptor, GridCell, NoteSource, WeekRow
from .occurrences import notes_for_day

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MonthGrid:
    year: int
    month: int
    month_name: str
    days_in_month: int
    days_in_week: int
    weekday_offset: int
    weeks: List[WeekRow] = field(default_factory=list)
    intercalary_row: Optional[WeekRow] = None
    spillover_row: Optional[WeekRow] = None
    weekdays: List[Any] = field(default_factory=list)
    is_monthless: bool = False
    week_number: Optional[int] = None
    total_weeks: Optional[int] = None

    @property
    def rows(self) -> List[WeekRow]:
        """Regular rows, then the intercalary row, then its spillover row."""

        rows = list(self.weeks)
        if self.intercalary_row is not None:
            rows.append(self.intercalary_row)
        if self.spillover_row is not None:
            rows.append(self.spillover_row)
        return rows


@dataclass(slots=True)
class WeekGrid:
    start: DateComponents
    days: List[GridCell]
    days_in_week: int
    week_number: int
    hours_per_day: int
    month_name: str = ""
    weekdays: List[Any] = field(default_factory=list)


@dataclass(slots=True)
class YearMonth:
    month: int
    year: int
    name: str
    abbreviation: str
    full_abbreviation: str
    has_no_days: bool


@dataclass(slots=True)
class YearCell:
    year: int
    is_current: bool
    months: List[YearMonth] = field(default_factory=list)


@dataclass(slots=True)
class YearGrid:
    year: int
    start_year: int
    end_year: int
    rows: List[List[YearCell]] = field(default_factory=list)


# Navigation helpers -----------------------------------------------------------
def _month_count(calendar: CalendarDef) -> int:
    return len(calendar.months) or 1


def _previous_month(calendar: CalendarDef, year: int, month: int) -> Tuple[int, int]:
    if month <= 0:
        return year - 1, _month_count(calendar) - 1
    return year, month - 1


def _next_month(calendar: CalendarDef, year: int, month: int) -> Tuple[int, int]:
    if month >= _month_count(calendar) - 1:
        return year + 1, 0
    return year, month + 1


def _days_in(calendar: CalendarDef, year: int, month: int) -> int:
    return calendar.get_days_in_month(month, year - calendar.year_zero)


def _walk(calendar: CalendarDef, year: int, month: int, day: int, step: int) -> Iterator[DateComponents]:
    """Yield consecutive display dates from ``day`` onwards, crossing month boundaries.

    A day outside the month's range starts the walk in the adjacent month.
    Runs of zero-day months are skipped; the walk ends after one full cycle
    of them.
    """

    total = _month_count(calendar)
    days = _days_in(calendar, year, month)
    while True:
        if 1 <= day <= days:
            yield DateComponents(year, month, day)
            day += step
            continue
        attempts = 0
        while True:
            year, month = _next_month(calendar, year, month) if step > 0 else _previous_month(calendar, year, month)
            days = _days_in(calendar, year, month)
            if days > 0:
                break
            attempts += 1
            if attempts >= total:
                logger.debug("No month with days found after %s attempts from %s/%s", attempts, year, month)
                return
        day = 1 if step > 0 else days


def _scan_limit(calendar: CalendarDef, year: int) -> int:
    days_in_week = calendar.days_in_week
    return max(calendar.get_days_in_year(year - calendar.year_zero), days_in_week) + days_in_week


def _festival(calendar: CalendarDef, date: DateComponents) -> Optional[FestivalDescriptor]:
    return calendar.find_festival_day(date.to_internal(calendar.year_zero))


def _is_intercalary(festival: Optional[FestivalDescriptor]) -> bool:
    return festival is not None and festival.counts_for_weekday is False


def _regular_days(calendar: CalendarDef, walker: Iterator[DateComponents], count: int, limit: int) -> List[DateComponents]:
    collected: List[DateComponents] = []
    if count <= 0:
        return collected
    for date in islice(walker, limit):
        if _is_intercalary(_festival(calendar, date)):
            continue
        collected.append(date)
        if len(collected) == count:
            break
    return collected


def _weekdays_for(calendar: CalendarDef, month: int) -> Sequence[Any]:
    if 0 <= month < len(calendar.months):
        month_weekdays = calendar.months[month].weekdays
        if month_weekdays:
            return month_weekdays
    return calendar.weekdays


def _is_rest_day(weekdays: Sequence[Any], column: int) -> bool:
    if column >= len(weekdays):
        return False
    return bool(getattr(weekdays[column], "is_rest_day", False))


def _month_name(calendar: CalendarDef, month: int) -> str:
    if 0 <= month < len(calendar.months):
        return calendar.months[month].name or ""
    return ""


def _spill_cell(date: DateComponents, today: Optional[DateComponents], **flags: bool) -> GridCell:
    return GridCell(day=date.day, year=date.year, month=date.month, is_today=date == today, **flags)


# Month view ------------------------------------------------------------------
def build_month_grid(
    calendar: CalendarDef,
    viewed_date: DateComponents,
    *,
    today: Optional[DateComponents] = None,
    selected: Optional[DateComponents] = None,
    notes: Sequence[NoteSource] = (),
    matcher: Optional[RecurrencePredicate] = None,
) -> Optional[MonthGrid]:
    """Lay out one month as weekday rows plus a trailing intercalary row.

    Returns ``None`` when the month has no metadata.
    """

    calendar = ensure_calendar(calendar)
    if calendar.is_monthless:
        return build_monthless_week_grid(
            calendar, viewed_date, today=today, selected=selected, notes=notes, matcher=matcher
        )

    year, month = viewed_date.year, viewed_date.month
    if not 0 <= month < len(calendar.months):
        logger.debug("No month metadata for index %s", month)
        return None
    month_def = calendar.months[month]
    days_in_week = calendar.days_in_week
    days_in_month = _days_in(calendar, year, month)
    if month_def.starting_weekday is not None:
        offset = month_def.starting_weekday % days_in_week
    else:
        offset = calendar.weekday_of(DateComponents(year, month, 1)) % days_in_week
    weekdays = _weekdays_for(calendar, month)
    limit = _scan_limit(calendar, year)

    backfill = _regular_days(calendar, _walk(calendar, year, month, 0, -1), offset, limit)
    current: List[GridCell] = [_spill_cell(date, today, is_from_other_month=True) for date in reversed(backfill)]

    weeks: List[WeekRow] = []
    intercalary: List[GridCell] = []
    for day in range(1, days_in_month + 1):
        date = DateComponents(year, month, day)
        festival = _festival(calendar, date)
        cell = GridCell(
            day=day,
            year=year,
            month=month,
            is_today=date == today,
            is_selected=date == selected,
            notes=notes_for_day(notes, date, matcher),
        ).with_festival(festival)
        if _is_intercalary(festival):
            cell.is_intercalary = True
            intercalary.append(cell)
            continue
        column = len(current)
        cell.weekday_index = column
        cell.is_rest_day = _is_rest_day(weekdays, column)
        current.append(cell)
        if len(current) == days_in_week:
            weeks.append(WeekRow(cells=current))
            current = []

    last_regular_length = len(current)
    if current:
        weeks.append(WeekRow(cells=current))

    intercalary_row = WeekRow(cells=intercalary, is_intercalary_row=True) if intercalary else None
    spillover_row: Optional[WeekRow] = None
    last_regular = weeks[-1] if weeks else None
    if intercalary or (last_regular is not None and len(last_regular) < days_in_week):
        start_position = last_regular_length if intercalary else len(last_regular)
        forward = _regular_days(
            calendar, _walk(calendar, year, month, days_in_month + 1, 1), days_in_week - start_position, limit
        )
        spill = [_spill_cell(date, today, is_from_other_month=True) for date in forward]
        if intercalary:
            spillover_row = WeekRow(cells=[GridCell.placeholder() for _ in range(start_position)] + spill)
        else:
            last_regular.cells.extend(spill)

    return MonthGrid(
        year=year,
        month=month,
        month_name=month_def.name or "",
        days_in_month=days_in_month,
        days_in_week=days_in_week,
        weekday_offset=offset,
        weeks=weeks,
        intercalary_row=intercalary_row,
        spillover_row=spillover_row,
        weekdays=list(weekdays),
    )


def build_monthless_week_grid(
    calendar: CalendarDef,
    viewed_date: DateComponents,
    *,
    today: Optional[DateComponents] = None,
    selected: Optional[DateComponents] = None,
    notes: Sequence[NoteSource] = (),
    matcher: Optional[RecurrencePredicate] = None,
) -> MonthGrid:
    """Three week rows centred on the viewed week of a day-of-year calendar."""

    calendar = ensure_calendar(calendar)
    year = viewed_date.year
    viewed_day = viewed_date.day or 1
    days_in_week = calendar.days_in_week
    year_zero = calendar.year_zero
    days_in_year = calendar.get_days_in_year(year - year_zero)
    week_number = (viewed_day - 1) // days_in_week

    weeks: List[WeekRow] = []
    for week_offset in (-1, 0, 1):
        week_start = (week_number + week_offset) * days_in_week + 1
        cells: List[GridCell] = []
        for column in range(days_in_week):
            day_number = week_start + column
            day_year = year
            year_days = calendar.get_days_in_year(day_year - year_zero)
            if day_number > year_days:
                day_number -= year_days
                day_year += 1
            elif day_number < 1:
                day_number += calendar.get_days_in_year(day_year - year_zero - 1)
                day_year -= 1
            date = DateComponents(day_year, 0, day_number)
            festival = _festival(calendar, date)
            cell = GridCell(
                day=day_number,
                year=day_year,
                month=0,
                is_today=date == today,
                is_selected=date == selected,
                is_from_other_week=week_offset != 0,
                is_intercalary=_is_intercalary(festival),
                is_rest_day=_is_rest_day(calendar.weekdays, column),
                weekday_index=column,
                notes=notes_for_day(notes, date, matcher),
            ).with_festival(festival)
            cells.append(cell)
        weeks.append(WeekRow(cells=cells))

    return MonthGrid(
        year=year,
        month=0,
        month_name="",
        days_in_month=days_in_year,
        days_in_week=days_in_week,
        weekday_offset=0,
        weeks=weeks,
        weekdays=list(calendar.weekdays),
        is_monthless=True,
        week_number=week_number + 1,
        total_weeks=math.ceil(days_in_year / days_in_week),
    )


# Week view -------------------------------------------------------------------
def build_week_grid(
    calendar: CalendarDef,
    viewed_date: DateComponents,
    *,
    today: Optional[DateComponents] = None,
    selected: Optional[DateComponents] = None,
    notes: Sequence[NoteSource] = (),
    matcher: Optional[RecurrencePredicate] = None,
) -> Optional[WeekGrid]:
    calendar = ensure_calendar(calendar)
    if not 0 <= viewed_date.month < _month_count(calendar):
        logger.debug("No month metadata for index %s", viewed_date.month)
        return None
    days_in_week = calendar.days_in_week
    current_weekday = calendar.weekday_of(viewed_date) % days_in_week
    start = calendar.add_days(viewed_date, -current_weekday)
    limit = _scan_limit(calendar, start.year)

    walker = _walk(calendar, start.year, start.month, start.day, 1)
    dates = _regular_days(calendar, walker, days_in_week, limit)
    if not dates:
        return None

    days: List[GridCell] = []
    for column, date in enumerate(dates):
        festival = _festival(calendar, date)
        cell = GridCell(
            day=date.day,
            year=date.year,
            month=date.month,
            is_today=date == today,
            is_selected=date == selected,
            is_rest_day=_is_rest_day(_weekdays_for(calendar, date.month), column),
            weekday_index=column,
            notes=notes_for_day(notes, date, matcher),
        ).with_festival(festival)
        days.append(cell)

    day_of_year = viewed_date.day + sum(_days_in(calendar, viewed_date.year, index) for index in range(viewed_date.month))
    first = dates[0]
    return WeekGrid(
        start=first,
        days=days,
        days_in_week=days_in_week,
        week_number=math.ceil(day_of_year / days_in_week),
        hours_per_day=calendar.hours_per_day,
        month_name=_month_name(calendar, viewed_date.month),
        weekdays=list(_weekdays_for(calendar, first.month)),
    )


# Year view -------------------------------------------------------------------
def abbreviate_month_name(name: str, threshold: int = 5) -> Tuple[str, bool]:
    """Initials of each word when ``name`` is longer than ``threshold`` characters."""

    if not name or len(name) <= threshold:
        return name or "", False
    return "".join(word[0].upper() for word in name.split(" ") if word), True


def build_year_grid(calendar: CalendarDef, viewed_year: int, *, abbreviation_threshold: int = 5) -> YearGrid:
    calendar = ensure_calendar(calendar)
    start_year = viewed_year - 4
    rows: List[List[YearCell]] = []
    for row in range(3):
        cells: List[YearCell] = []
        for column in range(3):
            display_year = start_year + row * 3 + column
            months: List[YearMonth] = []
            for index, month_def in enumerate(calendar.months):
                full_abbreviation = month_def.abbreviation or month_def.name or ""
                abbreviation, _ = abbreviate_month_name(full_abbreviation, abbreviation_threshold)
                months.append(
                    YearMonth(
                        month=index,
                        year=display_year,
                        name=month_def.name or "",
                        abbreviation=abbreviation,
                        full_abbreviation=full_abbreviation,
                        has_no_days=_days_in(calendar, display_year, index) == 0,
                    )
                )
            cells.append(YearCell(year=display_year, is_current=display_year == viewed_year, months=months))
        rows.append(cells)
    return YearGrid(year=viewed_year, start_year=start_year, end_year=start_year + 8, rows=rows)


__all__ = [
    "MonthGrid",
    "WeekGrid",
    "YearCell",
    "YearGrid",
    "YearMonth",
    "abbreviate_month_name",
    "build_month_grid",
    "build_monthless_week_grid",
    "build_week_grid",
    "build_year_grid",
]
