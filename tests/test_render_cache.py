from __future__ import annotations

from almanac.data import RenderCache
from almanac.data.cache import notes_signature
from almanac.domain import DateComponents, DisplayMode
from almanac.services import CalendarViewService


def test_entries_are_returned_only_for_matching_signature():
    cache = RenderCache()
    key = cache.key_for(DisplayMode.MONTH, DateComponents(2025, 0, 1))

    cache.put(key, "sig-a", "model")

    assert cache.get(key, "sig-a") == "model"
    assert cache.get(key, "sig-b") is None
    assert len(cache) == 0


def test_oldest_entry_is_evicted_first():
    cache = RenderCache(max_entries=2)
    keys = [cache.key_for(DisplayMode.MONTH, DateComponents(2025, month, 1)) for month in range(3)]

    for key in keys:
        cache.put(key, "sig", key)

    assert cache.get(keys[0], "sig") is None
    assert [cache.get(key, "sig") for key in keys[1:]] == keys[1:]


def test_notes_signature_tracks_ids_and_dates(make_note):
    base = [make_note("a", DateComponents(2025, 0, 1))]
    moved = [make_note("a", DateComponents(2025, 0, 2))]

    assert notes_signature(base) == notes_signature(list(base))
    assert notes_signature(base) != notes_signature(moved)


def test_invalidation_drops_entries_and_tokens(gregorian, make_note):
    cache = RenderCache()
    notes = [make_note("a", DateComponents(2025, 0, 1))]
    signature = cache.signature(calendar=gregorian, notes=notes, today=None, selected=None)
    key = cache.key_for(DisplayMode.MONTH, DateComponents(2025, 0, 1))
    cache.put(key, signature, "model")

    cache.invalidate_notes()
    assert len(cache) == 0
    changed = cache.signature(
        calendar=gregorian, notes=[make_note("b", DateComponents(2025, 0, 1))], today=None, selected=None
    )
    assert changed != signature

    cache.put(key, changed, "model")
    cache.invalidate_calendar()
    assert cache.get(key, changed) is None


def test_service_reuses_render_until_inputs_change(gregorian, make_note):
    view = CalendarViewService(calendar=gregorian, today=DateComponents(2025, 0, 15))

    first = view.render()
    assert view.render() is first

    view.select(DateComponents(2025, 0, 20))
    selected = view.render()
    assert selected is not first
    assert view.render() is selected

    view.replace_notes([make_note("trip", DateComponents(2025, 0, 30), DateComponents(2025, 1, 2))])
    with_notes = view.render()
    assert with_notes is not selected
    assert [segment.note_id for row in with_notes.month.weeks for segment in row.segments] == ["trip"]


def test_editing_notes_in_place_changes_the_render(gregorian, make_note):
    view = CalendarViewService(calendar=gregorian, viewed=DateComponents(2025, 0, 1))
    empty = view.render()

    view.notes.append(make_note("trip", DateComponents(2025, 0, 6), DateComponents(2025, 0, 8)))
    updated = view.render()

    assert updated is not empty
    assert [segment.note_id for row in updated.month.weeks for segment in row.segments] == ["trip"]

    view.notes[0] = make_note("trip", DateComponents(2025, 0, 6), DateComponents(2025, 0, 8), color="#ff0000")
    recolored = view.render()
    assert [segment.color for row in recolored.month.weeks for segment in row.segments] == ["#ff0000"]


def test_notes_signature_tracks_display_fields(make_note):
    plain = [make_note("a", DateComponents(2025, 0, 1))]
    colored = [make_note("a", DateComponents(2025, 0, 1), color="#00ff00")]

    assert notes_signature(plain) != notes_signature(colored)
