from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..core.protocols import CalendarDef, RecurrencePredicate, ensure_calendar
from ..domain import DateComponents, DisplayMode, NoteSource
from .grid import MonthGrid, WeekGrid, YearGrid, build_month_grid, build_week_grid, build_year_grid
from .lanes import DEFAULT_EVENT_COLOR, create_event_blocks, pack_lanes
from .occurrences import find_occurrences, notes_for_month

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewRequest:
    """Everything one render pass reads. The caller owns every field's lifecycle."""

    calendar: CalendarDef
    viewed_date: DateComponents
    mode: DisplayMode = DisplayMode.MONTH
    notes: Tuple[NoteSource, ...] = ()
    matcher: Optional[RecurrencePredicate] = None
    today: Optional[DateComponents] = None
    selected: Optional[DateComponents] = None
    selected_moon: Optional[str] = None
    hours_per_day: Optional[int] = None
    event_color: str = DEFAULT_EVENT_COLOR
    abbreviation_threshold: int = 5


@dataclass(slots=True)
class RenderModel:
    mode: DisplayMode
    viewed_date: DateComponents
    month: Optional[MonthGrid] = None
    week: Optional[WeekGrid] = None
    year: Optional[YearGrid] = None
    selected_moon: Optional[str] = None
    is_today: bool = False
    notes: List[NoteSource] = field(default_factory=list)


def _assemble_month(request: ViewRequest, calendar: CalendarDef) -> Optional[MonthGrid]:
    grid = build_month_grid(
        calendar,
        request.viewed_date,
        today=request.today,
        selected=request.selected,
        notes=request.notes,
        matcher=request.matcher,
    )
    if grid is None or grid.is_monthless:
        return grid
    occurrences = find_occurrences(
        request.notes, grid.year, grid.month, calendar=calendar, matcher=request.matcher
    )
    segments = pack_lanes(
        occurrences,
        weekday_offset=grid.weekday_offset,
        days_in_week=grid.days_in_week,
        default_color=request.event_color,
    )
    for segment in segments:
        if segment.week_index < len(grid.weeks):
            grid.weeks[segment.week_index].segments.append(segment)
        else:
            logger.debug("Segment %s falls past the last regular week", segment.occurrence_id)
    return grid


def _assemble_week(request: ViewRequest, calendar: CalendarDef) -> Optional[WeekGrid]:
    grid = build_week_grid(
        calendar,
        request.viewed_date,
        today=request.today,
        selected=request.selected,
        notes=request.notes,
        matcher=request.matcher,
    )
    if grid is None:
        return None
    if request.hours_per_day:
        grid.hours_per_day = request.hours_per_day
    blocks = create_event_blocks(
        request.notes,
        grid.days,
        hours_per_day=grid.hours_per_day,
        matcher=request.matcher,
        default_color=request.event_color,
    )
    for cell in grid.days:
        cell.blocks = [block for block in blocks if DateComponents(block.year, block.month, block.day) == cell.date]
    return grid


def build_view(request: ViewRequest) -> Optional[RenderModel]:
    """Build the render model for one display mode.

    Returns ``None`` when the viewed month has no metadata.
    """

    calendar = ensure_calendar(request.calendar)
    mode = DisplayMode(request.mode)
    model = RenderModel(
        mode=mode,
        viewed_date=request.viewed_date,
        selected_moon=request.selected_moon,
        is_today=(request.selected or request.viewed_date) == request.today,
    )

    if mode is DisplayMode.YEAR:
        model.year = build_year_grid(
            calendar, request.viewed_date.year, abbreviation_threshold=request.abbreviation_threshold
        )
        return model

    if mode is DisplayMode.WEEK and not calendar.is_monthless:
        model.week = _assemble_week(request, calendar)
        return model if model.week is not None else None

    model.month = _assemble_month(request, calendar)
    if model.month is None:
        return None
    if model.month.is_monthless:
        model.mode = DisplayMode.MONTHLESS_WEEK
    else:
        model.notes = notes_for_month(request.notes, model.month.year, model.month.month)
    return model


__all__ = ["RenderModel", "ViewRequest", "build_view"]
