from __future__ import annotations

from enum import Enum


class DisplayMode(str, Enum):
    MONTH = "month"
    WEEK = "week"
    YEAR = "year"
    MONTHLESS_WEEK = "monthless-week"


class RepeatRule(str, Enum):
    NEVER = "never"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
