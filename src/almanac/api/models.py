from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..domain import DateComponents, EventBlock, EventSegment, GridCell, NoteSource, WeekRow
from ..layout import MonthGrid, RenderModel, WeekGrid, YearCell, YearGrid, YearMonth


def _date(value: Optional[DateComponents]) -> Optional[Dict[str, int]]:
    return value.to_record() if value is not None else None


def _weekday_names(weekdays: Sequence[Any]) -> List[str]:
    return [getattr(weekday, "name", None) or str(weekday) for weekday in weekdays]


class NotePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    start_date: Dict[str, int]
    end_date: Optional[Dict[str, int]] = Field(default=None)
    color: Optional[str] = Field(default=None)
    icon: Optional[str] = Field(default=None)
    icon_type: Optional[str] = Field(default=None)
    repeat: str = Field(default="never")
    all_day: bool = Field(default=False)

    @classmethod
    def from_domain(cls, note: NoteSource) -> "NotePayload":
        return cls(
            id=note.id,
            name=note.name,
            start_date=note.start_date.to_record(),
            end_date=_date(note.end_date),
            color=note.color,
            icon=note.icon,
            icon_type=note.icon_type,
            repeat=note.recurrence.rule.value,
            all_day=note.is_all_day,
        )


class BlockPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    note_id: str
    name: str
    color: str
    icon: Optional[str] = Field(default=None)
    start_hour: int
    hour_span: int
    start_time: str
    end_time: Optional[str] = Field(default=None)
    all_day: bool
    is_multi_day: bool

    @classmethod
    def from_domain(cls, block: EventBlock) -> "BlockPayload":
        return cls(
            note_id=block.note_id,
            name=block.name,
            color=block.color,
            icon=block.icon,
            start_hour=block.start_hour,
            hour_span=block.hour_span,
            start_time=block.start_time,
            end_time=block.end_time,
            all_day=block.all_day,
            is_multi_day=block.is_multi_day,
        )


class CellPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: int
    year: int
    month: int
    is_today: bool = Field(default=False)
    is_selected: bool = Field(default=False)
    is_from_other_month: bool = Field(default=False)
    is_from_other_week: bool = Field(default=False)
    is_festival: bool = Field(default=False)
    is_intercalary: bool = Field(default=False)
    is_rest_day: bool = Field(default=False)
    is_empty: bool = Field(default=False)
    festival_name: Optional[str] = Field(default=None)
    festival_color: str = Field(default="")
    festival_icon: str = Field(default="")
    weekday_index: Optional[int] = Field(default=None)
    notes: List[NotePayload] = Field(default_factory=list)
    blocks: List[BlockPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, cell: GridCell) -> "CellPayload":
        return cls(
            day=cell.day,
            year=cell.year,
            month=cell.month,
            is_today=cell.is_today,
            is_selected=cell.is_selected,
            is_from_other_month=cell.is_from_other_month,
            is_from_other_week=cell.is_from_other_week,
            is_festival=cell.is_festival,
            is_intercalary=cell.is_intercalary,
            is_rest_day=cell.is_rest_day,
            is_empty=cell.is_empty,
            festival_name=cell.festival_name,
            festival_color=cell.festival_color,
            festival_icon=cell.festival_icon,
            weekday_index=cell.weekday_index,
            notes=[NotePayload.from_domain(note) for note in cell.notes],
            blocks=[BlockPayload.from_domain(block) for block in cell.blocks],
        )


class SegmentPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    note_id: str
    name: str
    color: str
    icon: Optional[str] = Field(default=None)
    lane: int
    left: float
    width: float
    is_continuation: bool = Field(default=False)
    is_segment: bool = Field(default=False)

    @classmethod
    def from_domain(cls, segment: EventSegment) -> "SegmentPayload":
        return cls(
            id=segment.occurrence_id,
            note_id=segment.note_id,
            name=segment.name,
            color=segment.color,
            icon=segment.icon,
            lane=segment.lane,
            left=segment.left_percent,
            width=segment.width_percent,
            is_continuation=segment.is_continuation,
            is_segment=segment.is_segment,
        )


class RowPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cells: List[CellPayload]
    is_intercalary_row: bool = Field(default=False)
    segments: List[SegmentPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, row: WeekRow) -> "RowPayload":
        return cls(
            cells=[CellPayload.from_domain(cell) for cell in row.cells],
            is_intercalary_row=row.is_intercalary_row,
            segments=[SegmentPayload.from_domain(segment) for segment in row.segments],
        )


class MonthPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    year: int
    month: int
    month_name: str
    days_in_month: int
    days_in_week: int
    weekday_offset: int
    weekdays: List[str]
    rows: List[RowPayload]
    is_monthless: bool = Field(default=False)
    week_number: Optional[int] = Field(default=None)
    total_weeks: Optional[int] = Field(default=None)

    @classmethod
    def from_domain(cls, grid: MonthGrid) -> "MonthPayload":
        return cls(
            year=grid.year,
            month=grid.month,
            month_name=grid.month_name,
            days_in_month=grid.days_in_month,
            days_in_week=grid.days_in_week,
            weekday_offset=grid.weekday_offset,
            weekdays=_weekday_names(grid.weekdays),
            rows=[RowPayload.from_domain(row) for row in grid.rows],
            is_monthless=grid.is_monthless,
            week_number=grid.week_number,
            total_weeks=grid.total_weeks,
        )


class WeekPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start: Dict[str, int]
    days: List[CellPayload]
    days_in_week: int
    week_number: int
    hours_per_day: int
    month_name: str = Field(default="")
    weekdays: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, grid: WeekGrid) -> "WeekPayload":
        return cls(
            start=grid.start.to_record(),
            days=[CellPayload.from_domain(cell) for cell in grid.days],
            days_in_week=grid.days_in_week,
            week_number=grid.week_number,
            hours_per_day=grid.hours_per_day,
            month_name=grid.month_name,
            weekdays=_weekday_names(grid.weekdays),
        )


class YearMonthPayload(BaseModel):
    month: int
    year: int
    name: str
    abbreviation: str
    full_abbreviation: str
    has_no_days: bool

    @classmethod
    def from_domain(cls, month: YearMonth) -> "YearMonthPayload":
        return cls(
            month=month.month,
            year=month.year,
            name=month.name,
            abbreviation=month.abbreviation,
            full_abbreviation=month.full_abbreviation,
            has_no_days=month.has_no_days,
        )


class YearCellPayload(BaseModel):
    year: int
    is_current: bool
    months: List[YearMonthPayload]

    @classmethod
    def from_domain(cls, cell: YearCell) -> "YearCellPayload":
        return cls(
            year=cell.year,
            is_current=cell.is_current,
            months=[YearMonthPayload.from_domain(month) for month in cell.months],
        )


class YearPayload(BaseModel):
    year: int
    start_year: int
    end_year: int
    rows: List[List[YearCellPayload]]

    @classmethod
    def from_domain(cls, grid: YearGrid) -> "YearPayload":
        return cls(
            year=grid.year,
            start_year=grid.start_year,
            end_year=grid.end_year,
            rows=[[YearCellPayload.from_domain(cell) for cell in row] for row in grid.rows],
        )


class RenderPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mode: str
    viewed_date: Dict[str, int]
    is_today: bool = Field(default=False)
    selected_moon: Optional[str] = Field(default=None)
    month: Optional[MonthPayload] = Field(default=None)
    week: Optional[WeekPayload] = Field(default=None)
    year: Optional[YearPayload] = Field(default=None)
    notes: List[NotePayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, model: RenderModel) -> "RenderPayload":
        return cls(
            mode=model.mode.value,
            viewed_date=model.viewed_date.to_record(),
            is_today=model.is_today,
            selected_moon=model.selected_moon,
            month=MonthPayload.from_domain(model.month) if model.month else None,
            week=WeekPayload.from_domain(model.week) if model.week else None,
            year=YearPayload.from_domain(model.year) if model.year else None,
            notes=[NotePayload.from_domain(note) for note in model.notes],
        )
