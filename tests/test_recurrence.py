from __future__ import annotations

from almanac.domain import DateComponents, RepeatRule


def _matches(matcher, note, *days):
    return [matcher.matches(note.descriptor(), date) for date in days]


def test_non_repeating_note_matches_only_its_start(matcher, make_note):
    note = make_note("once", DateComponents(2025, 0, 10))

    assert _matches(matcher, note, DateComponents(2025, 0, 10), DateComponents(2025, 0, 11)) == [True, False]


def test_daily_interval(matcher, make_note):
    note = make_note("pills", DateComponents(2025, 0, 1), rule=RepeatRule.DAILY, interval=3)

    assert _matches(
        matcher,
        note,
        DateComponents(2024, 11, 31),
        DateComponents(2025, 0, 4),
        DateComponents(2025, 0, 5),
        DateComponents(2025, 1, 3),
    ) == [False, True, False, True]


def test_weekly_requires_same_weekday_and_interval(matcher, make_note):
    weekly = make_note("yoga", DateComponents(2025, 0, 6), rule=RepeatRule.WEEKLY)
    fortnightly = make_note("review", DateComponents(2025, 0, 6), rule=RepeatRule.WEEKLY, interval=2)

    assert _matches(matcher, weekly, DateComponents(2025, 0, 13), DateComponents(2025, 0, 14)) == [True, False]
    assert _matches(matcher, fortnightly, DateComponents(2025, 0, 13), DateComponents(2025, 0, 20)) == [False, True]


def test_monthly_clamps_to_short_months(matcher, make_note):
    note = make_note("rent", DateComponents(2025, 0, 31), rule=RepeatRule.MONTHLY)

    assert _matches(
        matcher,
        note,
        DateComponents(2025, 1, 28),
        DateComponents(2025, 2, 31),
        DateComponents(2025, 2, 30),
    ) == [True, True, False]


def test_yearly_leap_day_falls_back_to_last_day(matcher, make_note):
    note = make_note("leapling", DateComponents(2024, 1, 29), rule=RepeatRule.YEARLY)

    assert _matches(matcher, note, DateComponents(2025, 1, 28), DateComponents(2028, 1, 29)) == [True, True]
    assert _matches(matcher, note, DateComponents(2028, 1, 28)) == [False]


def test_repeat_end_date_and_max_occurrences(matcher, make_note):
    until = make_note(
        "until", DateComponents(2025, 0, 1), rule=RepeatRule.DAILY, repeat_end=DateComponents(2025, 0, 10)
    )
    capped = make_note("capped", DateComponents(2025, 0, 1), rule=RepeatRule.DAILY, max_occurrences=3)

    assert _matches(matcher, until, DateComponents(2025, 0, 10), DateComponents(2025, 0, 11)) == [True, False]
    assert _matches(matcher, capped, DateComponents(2025, 0, 3), DateComponents(2025, 0, 4)) == [True, False]


def test_multi_day_descriptor_matches_days_inside_each_occurrence(matcher, make_note):
    note = make_note("camp", DateComponents(2025, 0, 6), DateComponents(2025, 0, 8), rule=RepeatRule.WEEKLY)

    assert _matches(
        matcher,
        note,
        DateComponents(2025, 0, 7),
        DateComponents(2025, 0, 14),
        DateComponents(2025, 0, 15),
        DateComponents(2025, 0, 16),
    ) == [True, True, True, False]


def test_single_day_descriptor_matches_only_occurrence_starts(matcher, make_note):
    note = make_note("camp", DateComponents(2025, 0, 6), DateComponents(2025, 0, 8), rule=RepeatRule.WEEKLY)
    descriptor = note.descriptor(single_day=True)

    assert matcher.matches(descriptor, DateComponents(2025, 0, 13)) is True
    assert matcher.matches(descriptor, DateComponents(2025, 0, 14)) is False
