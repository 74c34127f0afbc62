from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.protocols import CalendarContractError, RecurrencePredicate
from ..domain import DateComponents, EventBlock, EventSegment, GridCell, NoteSource, Occurrence

DEFAULT_EVENT_COLOR = "#4a86e8"


def _overlaps(lane: Sequence[Tuple[int, int]], start: int, end: int) -> bool:
    return any(not (end < placed_start or start > placed_end) for placed_start, placed_end in lane)


def pack_lanes(
    occurrences: Iterable[Occurrence],
    *,
    weekday_offset: int,
    days_in_week: int,
    default_color: str = DEFAULT_EVENT_COLOR,
) -> List[EventSegment]:
    """Assign occurrences to lanes and slice them into per-week bars.

    Occurrences are placed in priority order into the lowest lane with no
    overlapping day-position interval. Day positions run across the whole
    grid: ``day - 1 + weekday_offset``.
    """

    if days_in_week <= 0:
        raise CalendarContractError(f"days_in_week must be positive, got {days_in_week}")

    lanes: List[List[Tuple[int, int]]] = []
    segments: List[EventSegment] = []
    for occurrence in sorted(occurrences, key=lambda item: item.priority):
        start = occurrence.start_day - 1 + weekday_offset
        end = occurrence.end_day - 1 + weekday_offset
        lane = next((index for index, placed in enumerate(lanes) if not _overlaps(placed, start, end)), len(lanes))
        if lane == len(lanes):
            lanes.append([])
        lanes[lane].append((start, end))

        note = occurrence.note
        color = note.color or default_color
        first_week = start // days_in_week
        last_week = end // days_in_week
        for week in range(first_week, last_week + 1):
            segment_start = max(start, week * days_in_week)
            segment_end = min(end, (week + 1) * days_in_week - 1)
            start_column = segment_start % days_in_week
            end_column = segment_end % days_in_week
            is_split = first_week != last_week
            segments.append(
                EventSegment(
                    occurrence_id=f"{note.id}-week-{week}" if is_split else note.id,
                    note_id=note.id,
                    name=note.name,
                    color=color,
                    icon=note.icon,
                    week_index=week,
                    lane=lane,
                    left_percent=start_column / days_in_week * 100,
                    width_percent=(end_column - start_column + 1) / days_in_week * 100,
                    is_continuation=occurrence.is_continuation and week == first_week,
                    is_segment=is_split,
                )
            )
    return segments


def _format_time(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def _within(date: DateComponents, start: DateComponents, end: DateComponents) -> bool:
    return start <= date <= end


def create_event_blocks(
    notes: Iterable[NoteSource],
    days: Sequence[GridCell],
    *,
    hours_per_day: int,
    matcher: Optional[RecurrencePredicate] = None,
    default_color: str = DEFAULT_EVENT_COLOR,
) -> List[EventBlock]:
    """Hour-positioned blocks for the week/day views.

    A multi-day note gets one block for every visible day it touches, each
    with the same hour span.
    """

    blocks: List[EventBlock] = []
    for note in notes:
        all_day = note.all_day
        color = note.color or default_color
        start_hour = 0 if all_day else (note.start_hour or 0)
        start_time = "All Day" if all_day else _format_time(start_hour, note.start_minute)

        if not note.is_multi_day:
            if all_day:
                hour_span = hours_per_day
            elif note.end_hour is not None:
                hour_span = max(note.end_hour - start_hour, 1)
            else:
                hour_span = 1
            end_time = None if all_day or note.end_hour is None else _format_time(note.end_hour, note.end_minute)
            multi_day = False
        else:
            end_hour = hours_per_day if all_day else (note.end_hour if note.end_hour is not None else start_hour)
            hour_span = hours_per_day if all_day else max(end_hour - start_hour, 1)
            end_time = None if all_day else _format_time(end_hour, note.end_minute)
            multi_day = True

        for cell in days:
            if cell.is_empty:
                continue
            date = cell.date
            if multi_day and not note.recurrence.is_repeating:
                touches = _within(date, note.start_date, note.end_date)
            elif matcher is not None:
                touches = matcher.matches(note.descriptor(), date)
            else:
                touches = date == note.start_date
            if not touches:
                continue
            blocks.append(
                EventBlock(
                    note_id=note.id,
                    name=note.name,
                    color=color,
                    icon=note.icon,
                    year=date.year,
                    month=date.month,
                    day=date.day,
                    start_hour=start_hour,
                    hour_span=hour_span,
                    start_time=start_time,
                    end_time=end_time,
                    all_day=all_day,
                    is_multi_day=multi_day,
                )
            )
    return blocks


__all__ = ["DEFAULT_EVENT_COLOR", "create_event_blocks", "pack_lanes"]
