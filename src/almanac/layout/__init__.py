from .assembler import RenderModel, ViewRequest, build_view
from .grid import (
    MonthGrid,
    WeekGrid,
    YearCell,
    YearGrid,
    YearMonth,
    abbreviate_month_name,
    build_month_grid,
    build_monthless_week_grid,
    build_week_grid,
    build_year_grid,
)
from .lanes import DEFAULT_EVENT_COLOR, create_event_blocks, pack_lanes
from .occurrences import find_occurrences, notes_for_day, notes_for_month

__all__ = [
    "DEFAULT_EVENT_COLOR",
    "MonthGrid",
    "RenderModel",
    "ViewRequest",
    "WeekGrid",
    "YearCell",
    "YearGrid",
    "YearMonth",
    "abbreviate_month_name",
    "build_month_grid",
    "build_monthless_week_grid",
    "build_view",
    "build_week_grid",
    "build_year_grid",
    "create_event_blocks",
    "find_occurrences",
    "notes_for_day",
    "notes_for_month",
    "pack_lanes",
]
