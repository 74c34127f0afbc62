from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from ..core.protocols import CalendarDef
from ..data import load_calendar, load_notes
from ..domain import DateComponents, NoteSource
from ..services import CalendarViewService, ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    view: Optional[CalendarViewService] = None

    def use(
        self,
        calendar: CalendarDef,
        notes: Iterable[NoteSource] = (),
        *,
        today: Optional[DateComponents] = None,
    ) -> CalendarViewService:
        self.context.cache.clear()
        self.view = CalendarViewService(calendar=calendar, notes=list(notes), today=today, context=self.context)
        return self.view

    def load(
        self,
        calendar_path: Optional[Union[str, Path]] = None,
        notes_path: Optional[Union[str, Path]] = None,
        *,
        today: Optional[DateComponents] = None,
    ) -> CalendarViewService:
        """Load documents, defaulting to the files in the configured data directory."""

        storage = self.context.settings.storage
        calendar = load_calendar(calendar_path or storage.calendar_file)
        notes_file = Path(notes_path) if notes_path else storage.notes_file
        notes = load_notes(notes_file) if notes_path or notes_file.exists() else []
        logger.info("Loaded calendar %s with %s notes", calendar.name, len(notes))
        return self.use(calendar, notes, today=today)

    def reset(self) -> None:
        self.view = None
        self.context.cache.clear()


api_state = ApiState()
