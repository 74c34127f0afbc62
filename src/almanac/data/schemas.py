from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain import RepeatRule


class DateSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    year: int
    month: int = Field(default=0, ge=0)
    day: int = Field(default=1, ge=1)


class WeekdaySchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    abbreviation: Optional[str] = Field(default=None)
    is_rest_day: bool = Field(default=False, alias="isRestDay")


class MonthSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="")
    days: int = Field(ge=0)
    abbreviation: Optional[str] = Field(default=None)
    leap_days: Optional[int] = Field(default=None, ge=0, alias="leapDays")
    starting_weekday: Optional[int] = Field(default=None, ge=0, alias="startingWeekday")
    weekdays: List[WeekdaySchema] = Field(default_factory=list)


class FestivalSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    month: Optional[int] = Field(default=None, ge=0)
    day: Optional[int] = Field(default=None, ge=1)
    day_of_year: Optional[int] = Field(default=None, ge=1, alias="dayOfYear")
    duration: int = Field(default=1, ge=1)
    leap_duration: Optional[int] = Field(default=None, ge=0, alias="leapDuration")
    leap_year_only: bool = Field(default=False, alias="leapYearOnly")
    counts_for_weekday: bool = Field(default=True, alias="countsForDayOfWeek")
    color: str = Field(default="")
    icon: str = Field(default="")
    description: str = Field(default="")


class LeapYearSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rule: str = Field(default="none")
    interval: Optional[int] = Field(default=None)
    start: int = Field(default=0)
    pattern: Optional[str] = Field(default=None)

    @field_validator("rule")
    @classmethod
    def _known_rule(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in {"none", "simple", "gregorian", "custom"}:
            raise ValueError(f"Unknown leap year rule '{value}'.")
        return normalized


class CalendarSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="")
    name: str
    months: List[MonthSchema] = Field(default_factory=list)
    weekdays: List[WeekdaySchema] = Field(default_factory=list)
    festivals: List[FestivalSchema] = Field(default_factory=list)
    year_zero: int = Field(default=0, alias="yearZero")
    first_weekday: int = Field(default=0, ge=0, alias="firstWeekday")
    days_per_year: int = Field(default=365, ge=1, alias="daysPerYear")
    hours_per_day: int = Field(default=24, ge=1, alias="hoursPerDay")
    leap_year: LeapYearSchema = Field(default_factory=LeapYearSchema, alias="leapYear")


class RecurrenceSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rule: RepeatRule = Field(default=RepeatRule.NEVER)
    interval: int = Field(default=1, ge=1)
    repeat_end_date: Optional[DateSchema] = Field(default=None, alias="repeatEndDate")
    max_occurrences: int = Field(default=0, ge=0, alias="maxOccurrences")


class NoteSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = Field(default="")
    start_date: DateSchema = Field(alias="startDate")
    end_date: Optional[DateSchema] = Field(default=None, alias="endDate")
    color: Optional[str] = Field(default=None)
    icon: Optional[str] = Field(default=None)
    icon_type: Optional[str] = Field(default=None, alias="iconType")
    recurrence: RecurrenceSchema = Field(default_factory=RecurrenceSchema)
    all_day: bool = Field(default=False, alias="allDay")
    start_hour: Optional[int] = Field(default=None, ge=0, alias="startHour")
    start_minute: int = Field(default=0, ge=0, alias="startMinute")
    end_hour: Optional[int] = Field(default=None, ge=0, alias="endHour")
    end_minute: int = Field(default=0, ge=0, alias="endMinute")


__all__ = [
    "CalendarSchema",
    "DateSchema",
    "FestivalSchema",
    "LeapYearSchema",
    "MonthSchema",
    "NoteSchema",
    "RecurrenceSchema",
    "WeekdaySchema",
]
