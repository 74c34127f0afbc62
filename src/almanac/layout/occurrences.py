from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..core.protocols import CalendarDef, RecurrencePredicate
from ..domain import DateComponents, NoteSource, Occurrence

logger = logging.getLogger(__name__)


def notes_for_day(
    notes: Iterable[NoteSource],
    date: DateComponents,
    matcher: Optional[RecurrencePredicate],
) -> List[NoteSource]:
    """Single-day notes occurring on ``date``, sorted by name.

    Multi-day notes are left out; they are drawn as event bars instead.
    """

    if matcher is None:
        return []
    matched = [note for note in notes if not note.is_multi_day and matcher.matches(note.descriptor(), date)]
    return sorted(matched, key=lambda note: note.name.casefold())


def notes_for_month(notes: Iterable[NoteSource], year: int, month: int) -> List[NoteSource]:
    collected: List[NoteSource] = []
    for note in notes:
        start = note.start_date
        if not note.recurrence.is_repeating:
            if start.same_month(year, month):
                collected.append(note)
            continue
        if (start.year, start.month) > (year, month):
            continue
        repeat_end = note.recurrence.repeat_end_date
        if repeat_end is not None and (repeat_end.year, repeat_end.month) < (year, month):
            continue
        collected.append(note)
    return collected


def _clipped_end_day(end: DateComponents, year: int, month: int, days_in_month: int) -> int:
    return end.day if end.same_month(year, month) else days_in_month


def find_occurrences(
    notes: Sequence[NoteSource],
    year: int,
    month: int,
    *,
    calendar: CalendarDef,
    matcher: Optional[RecurrencePredicate],
) -> List[Occurrence]:
    """Multi-day note occurrences overlapping the visible month.

    Recurring notes are expanded by asking ``matcher`` for occurrence start
    dates: the last ``duration`` days of the previous month (continuations)
    and every day of the visible month. Occurrences longer than a month that
    started earlier than that tail window are not found.
    """

    days_in_month = calendar.get_days_in_month(month, year - calendar.year_zero)
    occurrences: List[Occurrence] = []

    for note in notes:
        if not note.is_multi_day:
            continue
        start, end = note.start_date, note.end_date
        priority = note.priority

        if note.recurrence.is_repeating:
            if matcher is None:
                continue
            duration = calendar.days_between(start, end)
            if duration < 0:
                logger.debug("Dropped recurring note %s ending before it starts", note.id)
                continue
            descriptor = note.descriptor(single_day=True)

            if month == 0:
                prev_year, prev_month = year - 1, (len(calendar.months) or 1) - 1
            else:
                prev_year, prev_month = year, month - 1
            prev_days = calendar.get_days_in_month(prev_month, prev_year - calendar.year_zero)
            for day in range(max(1, prev_days - duration), prev_days + 1):
                candidate = DateComponents(prev_year, prev_month, day)
                if not matcher.matches(descriptor, candidate):
                    continue
                occurrence_end = calendar.add_days(candidate, duration)
                if (occurrence_end.year, occurrence_end.month) < (year, month):
                    continue
                occurrences.append(
                    Occurrence(
                        note=note,
                        start=candidate,
                        end=occurrence_end,
                        start_day=1,
                        end_day=_clipped_end_day(occurrence_end, year, month, days_in_month),
                        priority=priority,
                        is_continuation=True,
                    )
                )

            for day in range(1, days_in_month + 1):
                candidate = DateComponents(year, month, day)
                if not matcher.matches(descriptor, candidate):
                    continue
                occurrence_end = calendar.add_days(candidate, duration)
                occurrences.append(
                    Occurrence(
                        note=note,
                        start=candidate,
                        end=occurrence_end,
                        start_day=day,
                        end_day=_clipped_end_day(occurrence_end, year, month, days_in_month),
                        priority=priority,
                        is_continuation=False,
                    )
                )
            continue

        if (start.year, start.month) > (year, month) or (end.year, end.month) < (year, month):
            continue
        is_continuation = (start.year, start.month) < (year, month)
        occurrences.append(
            Occurrence(
                note=note,
                start=start,
                end=end,
                start_day=1 if is_continuation else start.day,
                end_day=_clipped_end_day(end, year, month, days_in_month),
                priority=priority,
                is_continuation=is_continuation,
            )
        )

    kept = [occurrence for occurrence in occurrences if occurrence.end_day >= occurrence.start_day]
    if len(kept) != len(occurrences):
        logger.debug("Dropped %s inverted occurrences for %s/%s", len(occurrences) - len(kept), year, month)
    return kept


__all__ = ["find_occurrences", "notes_for_day", "notes_for_month"]
