from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..core import RecurrenceMatcher
from ..core.protocols import CalendarDef, RecurrencePredicate, ensure_calendar
from ..domain import DateComponents, DisplayMode, NoteSource
from ..layout import RenderModel, ViewRequest, build_view, notes_for_day
from .context import ServiceContext

logger = logging.getLogger(__name__)

YEAR_VIEW_SPAN = 9


@dataclass(slots=True)
class CalendarViewService:
    """Caller-side state for one calendar view: what is shown and what is selected."""

    calendar: CalendarDef
    notes: List[NoteSource] = field(default_factory=list)
    today: Optional[DateComponents] = None
    context: ServiceContext = field(default_factory=ServiceContext)
    matcher: Optional[RecurrencePredicate] = None
    mode: DisplayMode = DisplayMode.MONTH
    viewed: Optional[DateComponents] = None
    selected: Optional[DateComponents] = None
    selected_moon: Optional[str] = None

    def __post_init__(self) -> None:
        self.calendar = ensure_calendar(self.calendar)
        if self.matcher is None:
            self.matcher = RecurrenceMatcher(self.calendar)
        if self.viewed is None:
            self.viewed = self.today or DateComponents(self.calendar.year_zero, 0, 1)

    @property
    def viewed_date(self) -> DateComponents:
        return self.viewed or DateComponents(self.calendar.year_zero, 0, 1)

    # Rendering -----------------------------------------------------------
    def render(self) -> Optional[RenderModel]:
        cache = self.context.cache
        key = cache.key_for(self.mode, self.viewed_date)
        signature = cache.signature(
            calendar=self.calendar, notes=self.notes, today=self.today, selected=self.selected
        )
        signature = f"{signature}/{self.selected_moon or '-'}"
        cached = cache.get(key, signature)
        if cached is not None:
            return cached

        render_settings = self.context.settings.render
        model = build_view(
            ViewRequest(
                calendar=self.calendar,
                viewed_date=self.viewed_date,
                mode=self.mode,
                notes=tuple(self.notes),
                matcher=self.matcher,
                today=self.today,
                selected=self.selected,
                selected_moon=self.selected_moon,
                hours_per_day=self.calendar.hours_per_day or render_settings.default_hours_per_day,
                event_color=render_settings.default_event_color,
                abbreviation_threshold=render_settings.abbreviation_threshold,
            )
        )
        if model is not None:
            cache.put(key, signature, model)
        return model

    def notes_on(self, date: DateComponents) -> List[NoteSource]:
        return notes_for_day(self.notes, date, self.matcher)

    # Navigation ----------------------------------------------------------
    def navigate(self, step: int) -> DateComponents:
        """Move the viewed date one page forwards (``step > 0``) or backwards."""

        direction = 1 if step > 0 else -1
        count = abs(step)
        current = self.viewed_date
        if self.mode is DisplayMode.YEAR:
            current = DateComponents(current.year + step * YEAR_VIEW_SPAN, current.month, current.day)
        elif self.mode is DisplayMode.WEEK or self.calendar.is_monthless:
            current = self.calendar.add_days(current, step * self.calendar.days_in_week)
        else:
            for _ in range(count):
                current = self._step_month(current.year, current.month, direction)
        self.viewed = current
        return current

    def _step_month(self, year: int, month: int, direction: int) -> DateComponents:
        total = len(self.calendar.months) or 1
        attempts = 0
        while True:
            month += direction
            if month >= total:
                month, year = 0, year + 1
            elif month < 0:
                month, year = total - 1, year - 1
            if self.calendar.get_days_in_month(month, year - self.calendar.year_zero) > 0 or attempts >= total:
                break
            attempts += 1
        return DateComponents(year, month, 1)

    def go_to_today(self) -> Optional[DateComponents]:
        if self.today is not None:
            self.viewed = self.today
        return self.viewed

    def open_month(self, year: int, month: int) -> DateComponents:
        """Switch to the month view of ``month``, skipping forwards over months with no days."""

        total = len(self.calendar.months) or 1
        attempts = 0
        while self.calendar.get_days_in_month(month, year - self.calendar.year_zero) == 0 and attempts < total:
            month += 1
            if month >= total:
                month, year = 0, year + 1
            attempts += 1
        self.mode = DisplayMode.MONTH
        self.viewed = DateComponents(year, month, 1)
        return self.viewed

    # State ---------------------------------------------------------------
    def set_mode(self, mode: DisplayMode) -> None:
        self.mode = DisplayMode(mode)

    def select(self, date: Optional[DateComponents]) -> Optional[DateComponents]:
        """Select ``date``; selecting the already selected date clears the selection."""

        self.selected = None if date is None or date == self.selected else date
        return self.selected

    def set_today(self, date: DateComponents) -> None:
        self.today = date

    def set_selected_moon(self, name: Optional[str]) -> None:
        self.selected_moon = name

    def replace_notes(self, notes: Iterable[NoteSource]) -> None:
        self.notes = list(notes)
        self.context.cache.invalidate_notes()
        logger.debug("Replaced notes (%s)", len(self.notes))

    def replace_calendar(self, calendar: CalendarDef) -> None:
        self.calendar = ensure_calendar(calendar)
        self.matcher = RecurrenceMatcher(self.calendar)
        self.context.cache.invalidate_calendar()
        logger.debug("Replaced calendar %s", getattr(self.calendar, "name", ""))
