"""Service layer for calendar views."""

from __future__ import annotations

from .calendar import CalendarViewService
from .context import ServiceContext

__all__ = ["CalendarViewService", "ServiceContext"]
