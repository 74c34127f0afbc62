from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

import orjson
from pydantic import ValidationError

from ..core import CalendarDefinition, FestivalDef, LeapYearRule, MonthDef, WeekdayDef
from ..core.protocols import CalendarContractError
from ..domain import NoteSource
from .schemas import CalendarSchema, NoteSchema, WeekdaySchema

logger = logging.getLogger(__name__)


class DocumentError(ValueError):
    """Raised when a calendar or notes document cannot be loaded."""


def _read_json(path: Union[str, Path]) -> Any:
    source = Path(path)
    try:
        raw = source.read_bytes()
    except OSError as exc:
        raise DocumentError(f"Unable to read {source}: {exc}") from exc
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise DocumentError(f"{source} is not valid JSON: {exc}") from exc


def _weekdays(items: Iterable[WeekdaySchema]) -> tuple[WeekdayDef, ...]:
    return tuple(
        WeekdayDef(name=item.name, abbreviation=item.abbreviation, is_rest_day=item.is_rest_day) for item in items
    )


def calendar_from_record(record: Mapping[str, Any]) -> CalendarDefinition:
    try:
        schema = CalendarSchema.model_validate(record)
    except ValidationError as exc:
        raise DocumentError(f"Invalid calendar document: {exc}") from exc

    months = tuple(
        MonthDef(
            name=month.name,
            days=month.days,
            abbreviation=month.abbreviation,
            leap_days=month.leap_days,
            starting_weekday=month.starting_weekday,
            weekdays=_weekdays(month.weekdays),
        )
        for month in schema.months
    )
    festivals = tuple(
        FestivalDef(
            name=festival.name,
            month=festival.month,
            day=festival.day,
            day_of_year=festival.day_of_year,
            duration=festival.duration,
            leap_duration=festival.leap_duration,
            leap_year_only=festival.leap_year_only,
            counts_for_weekday=festival.counts_for_weekday,
            color=festival.color,
            icon=festival.icon,
            description=festival.description,
        )
        for festival in schema.festivals
    )
    leap = schema.leap_year
    try:
        calendar = CalendarDefinition(
            name=schema.name,
            id=schema.id,
            months=months,
            weekdays=_weekdays(schema.weekdays),
            festivals=festivals,
            year_zero=schema.year_zero,
            first_weekday=schema.first_weekday,
            days_per_year=schema.days_per_year,
            hours_per_day=schema.hours_per_day,
            leap_year=LeapYearRule(rule=leap.rule, interval=leap.interval, start=leap.start, pattern=leap.pattern),
        )
    except CalendarContractError as exc:
        raise DocumentError(str(exc)) from exc
    logger.debug("Loaded calendar %s with %s months", calendar.name, len(calendar.months))
    return calendar


def notes_from_records(records: Iterable[Mapping[str, Any]]) -> List[NoteSource]:
    notes: List[NoteSource] = []
    for index, record in enumerate(records):
        try:
            schema = NoteSchema.model_validate(record)
        except ValidationError as exc:
            raise DocumentError(f"Invalid note at index {index}: {exc}") from exc
        notes.append(NoteSource.from_record(schema.model_dump()))
    return notes


def load_calendar(path: Union[str, Path]) -> CalendarDefinition:
    payload = _read_json(path)
    if not isinstance(payload, dict):
        raise DocumentError(f"{path} must contain a JSON object.")
    return calendar_from_record(payload)


def load_notes(path: Union[str, Path]) -> List[NoteSource]:
    """Load notes from a JSON list or an object with a ``notes`` list."""

    payload: Any = _read_json(path)
    if isinstance(payload, dict):
        payload = payload.get("notes", [])
    if not isinstance(payload, list):
        raise DocumentError(f"{path} must contain a list of notes.")
    notes = notes_from_records(payload)
    logger.debug("Loaded %s notes from %s", len(notes), path)
    return notes


def dump_json(payload: Dict[str, Any]) -> bytes:
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


__all__ = [
    "DocumentError",
    "calendar_from_record",
    "dump_json",
    "load_calendar",
    "load_notes",
    "notes_from_records",
]
