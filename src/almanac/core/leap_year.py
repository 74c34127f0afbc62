from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

GREGORIAN_PATTERN = "400,!100,4"


@dataclass(frozen=True, slots=True)
class LeapInterval:
    interval: int
    subtracts: bool
    offset: int

    def vote(self, year: int) -> int:
        if (year - self.offset) % self.interval == 0:
            return -1 if self.subtracts else 1
        return 0


@dataclass(frozen=True, slots=True)
class LeapYearRule:
    """Leap year configuration. ``rule`` is one of none, simple, gregorian, custom."""

    rule: str = "none"
    interval: Optional[int] = None
    start: int = 0
    pattern: Optional[str] = None

    def intervals(self) -> List[LeapInterval]:
        if self.rule == "simple":
            if not self.interval or self.interval <= 0:
                return []
            return [parse_interval(self.interval, self.start)]
        if self.rule == "gregorian":
            return parse_pattern(GREGORIAN_PATTERN, self.start)
        if self.rule == "custom":
            return parse_pattern(self.pattern or "", self.start)
        return []

    def is_leap_year(self, display_year: int) -> bool:
        return intersects_year(self.intervals(), display_year)


def parse_interval(raw: Union[str, int], offset: int = 0) -> LeapInterval:
    """Parse ``"4"``, ``"!100"`` or ``"+400"``.

    ``!`` turns the interval into a deny vote, ``+`` ignores the offset.
    """

    text = str(raw).strip()
    subtracts = "!" in text
    ignores_offset = "+" in text
    digits = text.replace("!", "").replace("+", "")
    try:
        interval = max(1, int(digits))
    except ValueError:
        interval = 1
    if interval == 1 or ignores_offset:
        normalized = 0
    else:
        normalized = (interval + offset) % interval
    return LeapInterval(interval=interval, subtracts=subtracts, offset=normalized)


def parse_pattern(pattern: str, offset: int = 0) -> List[LeapInterval]:
    if not pattern:
        return []
    return [parse_interval(part, offset) for part in (chunk.strip() for chunk in pattern.split(",")) if part]


def intersects_year(intervals: List[LeapInterval], year: int) -> bool:
    if not intervals:
        return False
    return sum(item.vote(year) for item in intervals) > 0


__all__ = [
    "GREGORIAN_PATTERN",
    "LeapInterval",
    "LeapYearRule",
    "intersects_year",
    "parse_interval",
    "parse_pattern",
]
