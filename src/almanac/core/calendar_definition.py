from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..domain import DateComponents, FestivalDescriptor, InternalDate
from .leap_year import LeapYearRule
from .protocols import CalendarContractError


@dataclass(frozen=True, slots=True)
class WeekdayDef:
    name: str
    abbreviation: Optional[str] = None
    is_rest_day: bool = False


@dataclass(frozen=True, slots=True)
class MonthDef:
    name: str
    days: int
    abbreviation: Optional[str] = None
    leap_days: Optional[int] = None
    starting_weekday: Optional[int] = None
    weekdays: Tuple[WeekdayDef, ...] = ()


@dataclass(frozen=True, slots=True)
class FestivalDef:
    """A named festival. ``month`` is 0-indexed, ``day`` and ``day_of_year`` are 1-indexed."""

    name: str
    month: Optional[int] = None
    day: Optional[int] = None
    day_of_year: Optional[int] = None
    duration: int = 1
    leap_duration: Optional[int] = None
    leap_year_only: bool = False
    counts_for_weekday: bool = True
    color: str = ""
    icon: str = ""
    description: str = ""

    def duration_for(self, is_leap: bool) -> int:
        if is_leap and self.leap_duration is not None:
            return self.leap_duration
        return self.duration

    def descriptor(self) -> FestivalDescriptor:
        return FestivalDescriptor(
            name=self.name,
            color=self.color,
            icon=self.icon,
            counts_for_weekday=self.counts_for_weekday,
            description=self.description,
        )


@dataclass(slots=True)
class CalendarDefinition:
    """Reference calendar: months, weekdays, festivals and leap rules.

    Epoch day 0 is the first day of internal year 0. Each instance memoizes
    year origins as ``(epoch_day, non_counting_days_before)`` pairs. The memo
    belongs to this calendar object and is never shared between calendars.
    """

    name: str
    months: Tuple[MonthDef, ...]
    weekdays: Tuple[WeekdayDef, ...]
    festivals: Tuple[FestivalDef, ...] = ()
    id: str = ""
    year_zero: int = 0
    first_weekday: int = 0
    days_per_year: int = 365
    hours_per_day: int = 24
    leap_year: LeapYearRule = field(default_factory=LeapYearRule)
    _forward_origins: List[Tuple[int, int]] = field(
        default_factory=lambda: [(0, 0)], init=False, repr=False, compare=False
    )
    _backward_origins: List[Tuple[int, int]] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.get_days_in_year(0) <= 0 and self.get_days_in_year(1) <= 0:
            raise CalendarContractError(f"Calendar {self.name!r} has no days in a year.")

    # Structure -----------------------------------------------------------
    @property
    def days_in_week(self) -> int:
        return len(self.weekdays) or 7

    @property
    def is_monthless(self) -> bool:
        if not self.months:
            return True
        return len(self.months) == 1 and not self.months[0].name

    def weekdays_for_month(self, month: int) -> Sequence[WeekdayDef]:
        if 0 <= month < len(self.months) and self.months[month].weekdays:
            return self.months[month].weekdays
        return self.weekdays

    def is_leap_year(self, internal_year: int) -> bool:
        return self.leap_year.is_leap_year(internal_year + self.year_zero)

    def get_days_in_month(self, month: int, internal_year: int) -> int:
        if self.is_monthless:
            return self.get_days_in_year(internal_year) if month == 0 else 0
        if not 0 <= month < len(self.months):
            return 0
        month_def = self.months[month]
        if month_def.leap_days is not None and self.is_leap_year(internal_year):
            return month_def.leap_days
        return month_def.days

    def get_days_in_year(self, internal_year: int) -> int:
        is_leap = self.is_leap_year(internal_year)
        if not self.months:
            return self.days_per_year + 1 if is_leap else self.days_per_year
        total = 0
        for month_def in self.months:
            if is_leap and month_def.leap_days is not None:
                total += month_def.leap_days
            else:
                total += month_def.days
        return total

    # Festivals -----------------------------------------------------------
    def _day_of_year(self, date: InternalDate) -> int:
        if self.is_monthless:
            return date.day_of_month
        return sum(self.get_days_in_month(index, date.year) for index in range(date.month)) + date.day_of_month

    def _festival_start(self, festival: FestivalDef, internal_year: int) -> Optional[int]:
        if festival.day_of_year is not None:
            return festival.day_of_year
        if festival.month is not None and festival.day is not None:
            return self._day_of_year(InternalDate(internal_year, festival.month, festival.day - 1)) + 1
        return None

    def find_festival_day(self, date: InternalDate) -> Optional[FestivalDescriptor]:
        if not self.festivals:
            return None
        is_leap = self.is_leap_year(date.year)
        current = self._day_of_year(date) + 1
        for festival in self.festivals:
            if festival.leap_year_only and not is_leap:
                continue
            start = self._festival_start(festival, date.year)
            if start is None:
                continue
            if start <= current < start + festival.duration_for(is_leap):
                return festival.descriptor()
        return None

    def _non_counting_before(self, date: InternalDate) -> int:
        is_leap = self.is_leap_year(date.year)
        current = self._day_of_year(date) + 1
        count = 0
        for festival in self.festivals:
            if festival.counts_for_weekday or (festival.leap_year_only and not is_leap):
                continue
            start = self._festival_start(festival, date.year)
            if start is None:
                continue
            end = start + festival.duration_for(is_leap)
            if end <= current:
                count += festival.duration_for(is_leap)
            elif start < current:
                count += current - start
        return count

    def _non_counting_in_year(self, internal_year: int) -> int:
        is_leap = self.is_leap_year(internal_year)
        return sum(
            festival.duration_for(is_leap)
            for festival in self.festivals
            if not festival.counts_for_weekday and (is_leap or not festival.leap_year_only)
        )

    # Epoch arithmetic ----------------------------------------------------
    def _year_origin(self, internal_year: int) -> Tuple[int, int]:
        if internal_year >= 0:
            forward = self._forward_origins
            while len(forward) <= internal_year:
                year = len(forward) - 1
                days, skipped = forward[-1]
                forward.append((days + self.get_days_in_year(year), skipped + self._non_counting_in_year(year)))
            return forward[internal_year]
        backward = self._backward_origins
        while len(backward) < -internal_year:
            year = -(len(backward) + 1)
            days, skipped = backward[-1] if backward else (0, 0)
            backward.append((days - self.get_days_in_year(year), skipped - self._non_counting_in_year(year)))
        return backward[-internal_year - 1]

    def epoch_day(self, date: DateComponents) -> int:
        internal = date.to_internal(self.year_zero)
        return self._year_origin(internal.year)[0] + self._day_of_year(internal)

    def from_epoch_day(self, epoch_day: int) -> DateComponents:
        year = epoch_day // max(self.get_days_in_year(0), 1)
        while self._year_origin(year)[0] > epoch_day:
            year -= 1
        while self._year_origin(year + 1)[0] <= epoch_day:
            year += 1
        remainder = epoch_day - self._year_origin(year)[0]
        if self.is_monthless:
            return InternalDate(year, 0, remainder).to_display(self.year_zero)
        month = 0
        while month < len(self.months) - 1 and remainder >= self.get_days_in_month(month, year):
            remainder -= self.get_days_in_month(month, year)
            month += 1
        return InternalDate(year, month, remainder).to_display(self.year_zero)

    def add_days(self, date: DateComponents, days: int) -> DateComponents:
        return self.from_epoch_day(self.epoch_day(date) + days)

    def days_between(self, start: DateComponents, end: DateComponents) -> int:
        return self.epoch_day(end) - self.epoch_day(start)

    def weekday_of(self, date: DateComponents) -> int:
        internal = date.to_internal(self.year_zero)
        days_in_week = self.days_in_week
        if not self.is_monthless and 0 <= internal.month < len(self.months):
            starting = self.months[internal.month].starting_weekday
            if starting is not None:
                skipped = sum(
                    1
                    for offset in range(internal.day_of_month)
                    if self._is_intercalary(InternalDate(internal.year, internal.month, offset))
                )
                return (starting + internal.day_of_month - skipped) % days_in_week
        origin_days, origin_skipped = self._year_origin(internal.year)
        counting = origin_days + self._day_of_year(internal) - origin_skipped - self._non_counting_before(internal)
        return (counting + self.first_weekday) % days_in_week

    def _is_intercalary(self, date: InternalDate) -> bool:
        festival = self.find_festival_day(date)
        return festival is not None and festival.is_intercalary


__all__ = ["CalendarDefinition", "FestivalDef", "MonthDef", "WeekdayDef"]
