from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..domain import DateComponents, RecurrenceDescriptor, RepeatRule
from .protocols import CalendarDef

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecurrenceMatcher:
    """Decides whether a note occurs on a date.

    Multi-day descriptors also match every day inside an occurrence's span;
    single-day-shaped descriptors only match occurrence start dates.
    """

    calendar: CalendarDef

    def matches(self, descriptor: RecurrenceDescriptor, date: DateComponents) -> bool:
        start = descriptor.start_date
        recurrence = descriptor.recurrence
        if not recurrence.is_repeating:
            return date == start
        if date < start:
            return False
        if recurrence.repeat_end_date is not None and date > recurrence.repeat_end_date:
            return False

        end = descriptor.end_date
        duration = self.calendar.days_between(start, end) if end is not None and end != start else 0
        if duration > 0 and date <= end:
            return True
        if self._is_start(descriptor, date):
            return True
        for offset in range(1, duration + 1):
            candidate = self.calendar.add_days(date, -offset)
            if candidate < start:
                break
            if recurrence.repeat_end_date is not None and candidate > recurrence.repeat_end_date:
                continue
            if self._is_start(descriptor, candidate):
                return True
        return False

    def _is_start(self, descriptor: RecurrenceDescriptor, date: DateComponents) -> bool:
        ordinal = self._occurrence_ordinal(descriptor, date)
        if ordinal is None:
            return False
        max_occurrences = descriptor.recurrence.max_occurrences
        if max_occurrences > 0 and ordinal > max_occurrences:
            return False
        return True

    def _occurrence_ordinal(self, descriptor: RecurrenceDescriptor, date: DateComponents) -> Optional[int]:
        """Return the 1-based occurrence number if ``date`` starts an occurrence."""

        start = descriptor.start_date
        interval = max(descriptor.recurrence.interval, 1)
        rule = descriptor.rule
        if rule is RepeatRule.DAILY:
            elapsed = self.calendar.days_between(start, date)
            if elapsed < 0 or elapsed % interval:
                return None
            return elapsed // interval + 1
        if rule is RepeatRule.WEEKLY:
            elapsed = self.calendar.days_between(start, date)
            if elapsed < 0 or self.calendar.weekday_of(start) != self.calendar.weekday_of(date):
                return None
            weeks = elapsed // self.calendar.days_in_week
            if weeks % interval:
                return None
            return weeks // interval + 1
        if rule is RepeatRule.MONTHLY:
            months_per_year = len(self.calendar.months) or 1
            elapsed = (date.year - start.year) * months_per_year + (date.month - start.month)
            if elapsed < 0 or elapsed % interval or date.day != self._clamped_day(start, date):
                return None
            return elapsed // interval + 1
        if rule is RepeatRule.YEARLY:
            elapsed = date.year - start.year
            if elapsed < 0 or elapsed % interval or date.month != start.month:
                return None
            if date.day != self._clamped_day(start, date):
                return None
            return elapsed // interval + 1
        logger.debug("Unsupported recurrence rule %s", rule)
        return None

    def _clamped_day(self, start: DateComponents, target: DateComponents) -> int:
        last_day = self.calendar.get_days_in_month(target.month, target.year - self.calendar.year_zero)
        return min(start.day, last_day)


__all__ = ["RecurrenceMatcher"]
