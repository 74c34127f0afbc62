"""Calendar arithmetic, leap rules and recurrence matching."""

from .calendar_definition import CalendarDefinition, FestivalDef, MonthDef, WeekdayDef
from .leap_year import LeapYearRule
from .protocols import CalendarContractError, CalendarDef, RecurrencePredicate, ensure_calendar
from .recurrence import RecurrenceMatcher

__all__ = [
    "CalendarContractError",
    "CalendarDef",
    "CalendarDefinition",
    "FestivalDef",
    "LeapYearRule",
    "MonthDef",
    "RecurrenceMatcher",
    "RecurrencePredicate",
    "WeekdayDef",
    "ensure_calendar",
]
