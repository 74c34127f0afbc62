from __future__ import annotations

import pytest

from almanac.core import CalendarContractError
from almanac.domain import DateComponents, DisplayMode, RepeatRule
from almanac.layout import ViewRequest, build_view


def _segments(model):
    return [(index, segment) for index, row in enumerate(model.month.weeks) for segment in row.segments]


def test_month_view_attaches_segments_to_their_week(gregorian, matcher, make_note):
    note = make_note("trip", DateComponents(2025, 0, 30), DateComponents(2025, 1, 2))

    model = build_view(
        ViewRequest(calendar=gregorian, viewed_date=DateComponents(2025, 0, 1), notes=(note,), matcher=matcher)
    )

    assert model.mode is DisplayMode.MONTH
    [(week, segment)] = _segments(model)
    assert week == 4
    assert segment.is_continuation is False
    assert segment.width_percent == pytest.approx(2 / 7 * 100)
    assert [item.id for item in model.notes] == ["trip"]


def test_month_view_marks_first_slice_of_continuation(gregorian, matcher, make_note):
    note = make_note("trip", DateComponents(2025, 0, 30), DateComponents(2025, 1, 2))

    model = build_view(
        ViewRequest(calendar=gregorian, viewed_date=DateComponents(2025, 1, 1), notes=(note,), matcher=matcher)
    )

    segments = _segments(model)
    assert [(week, segment.occurrence_id, segment.is_continuation) for week, segment in segments] == [
        (0, "trip-week-0", True),
        (1, "trip-week-1", False),
    ]


def test_recurring_continuation_is_not_duplicated(gregorian, matcher, make_note):
    note = make_note("new-year", DateComponents(2024, 11, 30), DateComponents(2025, 0, 2), rule=RepeatRule.YEARLY)

    model = build_view(
        ViewRequest(calendar=gregorian, viewed_date=DateComponents(2026, 0, 1), notes=(note,), matcher=matcher)
    )

    [(week, segment)] = _segments(model)
    assert week == 0
    assert segment.is_continuation is True
    assert segment.lane == 0
    assert segment.left_percent == pytest.approx(4 / 7 * 100)


def test_week_view_attaches_blocks_to_cells(gregorian, matcher, make_note):
    notes = (
        make_note("gym", DateComponents(2025, 0, 6), rule=RepeatRule.WEEKLY, start_hour=18, end_hour=19),
        make_note("holiday", DateComponents(2025, 0, 15), all_day=True),
    )

    model = build_view(
        ViewRequest(
            calendar=gregorian,
            viewed_date=DateComponents(2025, 0, 15),
            mode=DisplayMode.WEEK,
            notes=notes,
            matcher=matcher,
            hours_per_day=12,
        )
    )

    assert model.month is None
    week = model.week
    assert week.hours_per_day == 12
    assert {cell.day: [block.note_id for block in cell.blocks] for cell in week.days if cell.blocks} == {
        13: ["gym"],
        15: ["holiday"],
    }
    assert [note.id for note in week.days[3].notes] == ["holiday"]


def test_year_view_builds_only_the_year_grid(reckoning):
    model = build_view(ViewRequest(calendar=reckoning, viewed_date=DateComponents(10, 1, 5), mode=DisplayMode.YEAR))

    assert model.year.year == 10
    assert model.month is None and model.week is None


def test_monthless_calendar_renders_week_strip(monthless, make_note):
    note = make_note("span", DateComponents(0, 0, 6), DateComponents(0, 0, 8))

    model = build_view(ViewRequest(calendar=monthless, viewed_date=DateComponents(0, 0, 7), notes=(note,)))

    assert model.mode is DisplayMode.MONTHLESS_WEEK
    assert model.month.is_monthless
    assert _segments(model) == []


def test_week_mode_on_monthless_calendar_uses_week_strip(monthless):
    model = build_view(ViewRequest(calendar=monthless, viewed_date=DateComponents(0, 0, 7), mode=DisplayMode.WEEK))

    assert model.mode is DisplayMode.MONTHLESS_WEEK
    assert model.week is None


def test_missing_month_gives_no_model(gregorian):
    assert build_view(ViewRequest(calendar=gregorian, viewed_date=DateComponents(2025, 20, 1))) is None


def test_caller_state_is_passed_through(gregorian):
    today = DateComponents(2025, 0, 15)

    model = build_view(
        ViewRequest(calendar=gregorian, viewed_date=today, today=today, selected_moon="Selune")
    )

    assert model.selected_moon == "Selune"
    assert model.is_today is True


def test_build_view_is_repeatable(gregorian, matcher, make_note):
    notes = (
        make_note("trip", DateComponents(2025, 0, 30), DateComponents(2025, 1, 2)),
        make_note("standup", DateComponents(2025, 0, 6), DateComponents(2025, 0, 7), start_hour=9),
        make_note("lunch", DateComponents(2025, 0, 10)),
    )
    request = ViewRequest(calendar=gregorian, viewed_date=DateComponents(2025, 0, 1), notes=notes, matcher=matcher)

    assert build_view(request) == build_view(request)


def test_invalid_calendar_fails_fast():
    with pytest.raises(CalendarContractError):
        build_view(ViewRequest(calendar=None, viewed_date=DateComponents(0, 0, 1)))
