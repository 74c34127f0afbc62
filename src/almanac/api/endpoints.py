from __future__ import annotations

from typing import Any, Dict, Optional

from ..domain import DateComponents, DisplayMode
from ..services import CalendarViewService
from .registry import register_api
from .serializers import serialize_note, serialize_render
from .state import api_state


def _require_view() -> CalendarViewService:
    if api_state.view is None:
        raise RuntimeError("No calendar is loaded. Call load_documents before rendering.")
    return api_state.view


def _parse_date(value: str) -> DateComponents:
    try:
        return DateComponents.parse(value)
    except ValueError as exc:
        raise ValueError(f"Invalid date: {value}") from exc


def _render(view: CalendarViewService, mode: DisplayMode, viewed: DateComponents) -> Dict[str, Any]:
    view.set_mode(mode)
    view.viewed = viewed
    model = view.render()
    if model is None:
        raise ValueError(f"Month {viewed.month} does not exist in calendar '{getattr(view.calendar, 'name', '')}'.")
    return serialize_render(model)


@register_api(
    "load_documents",
    description="Load a calendar document and optional notes document from disk.",
    category="calendar",
    tags=("load",),
)
def load_documents(
    calendar_path: Optional[str] = None,
    notes_path: Optional[str] = None,
    today: Optional[str] = None,
) -> Dict[str, Any]:
    view = api_state.load(calendar_path, notes_path, today=_parse_date(today) if today else None)
    return {
        "calendar": getattr(view.calendar, "name", ""),
        "months": len(view.calendar.months),
        "notes": len(view.notes),
    }


@register_api(
    "render_month",
    description="Render the month grid containing the given date, with multi-day event bars.",
    category="render",
    tags=("render", "month"),
)
def render_month(year: int, month: int, day: int = 1) -> Dict[str, Any]:
    view = _require_view()
    return _render(view, DisplayMode.MONTH, DateComponents(year, month, day))


@register_api(
    "render_week",
    description="Render the week containing the given date, with hour-positioned event blocks.",
    category="render",
    tags=("render", "week"),
)
def render_week(year: int, month: int, day: int) -> Dict[str, Any]:
    view = _require_view()
    return _render(view, DisplayMode.WEEK, DateComponents(year, month, day))


@register_api(
    "render_year",
    description="Render the nine-year overview centred on the given year.",
    category="render",
    tags=("render", "year"),
)
def render_year(year: int) -> Dict[str, Any]:
    view = _require_view()
    return _render(view, DisplayMode.YEAR, DateComponents(year, 0, 1))


@register_api(
    "notes_on_day",
    description="Return the single-day notes occurring on a date, sorted by name.",
    category="notes",
    tags=("read",),
)
def notes_on_day(year: int, month: int, day: int) -> Dict[str, Any]:
    view = _require_view()
    target = DateComponents(year, month, day)
    return {"date": target.to_record(), "notes": [serialize_note(note) for note in view.notes_on(target)]}


@register_api(
    "select_day",
    description="Toggle the selected day; selecting the selected day again clears it.",
    category="calendar",
    tags=("select",),
)
def select_day(year: int, month: int, day: int) -> Dict[str, Any]:
    view = _require_view()
    selected = view.select(DateComponents(year, month, day))
    return {"selected": selected.to_record() if selected else None}
