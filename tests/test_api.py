from __future__ import annotations

import orjson
import pytest
from fastapi.testclient import TestClient

from almanac.api import api_state, call_api, get_api_functions
from almanac.domain import DateComponents
from almanac.services.http import app


@pytest.fixture
def loaded(gregorian, make_note):
    notes = [
        make_note("trip", DateComponents(2025, 0, 30), DateComponents(2025, 1, 2), color="#00aa00"),
        make_note("lunch", DateComponents(2025, 0, 10), start_hour=12, end_hour=13),
    ]
    api_state.use(gregorian, notes, today=DateComponents(2025, 0, 10))
    yield api_state
    api_state.reset()


@pytest.fixture
def client():
    return TestClient(app)


def test_registry_lists_render_functions():
    names = {func.name for func in get_api_functions()}

    assert {"render_month", "render_week", "render_year", "notes_on_day", "list_available_tools"} <= names


def test_list_available_tools_includes_parameter_schema():
    tools = {tool["name"]: tool for tool in call_api("list_available_tools")["tools"]}

    schema = tools["render_month"]["schema"]
    assert schema["required"] == ["year", "month"]
    assert schema["properties"]["day"] == {"type": "integer", "default": 1}
    assert tools["render_month"]["parameters"]["year"] == "int"


def test_render_month_serializes_rows_and_segments(loaded):
    result = call_api("render_month", year=2025, month=0)

    month = result["month"]
    assert result["mode"] == "month"
    assert month["month_name"] == "January"
    assert len(month["rows"]) == 5
    segment = month["rows"][4]["segments"][0]
    assert segment["id"] == "trip"
    assert segment["color"] == "#00aa00"
    today = [cell for row in month["rows"] for cell in row["cells"] if cell["is_today"]]
    assert [(cell["day"], [note["id"] for note in cell["notes"]]) for cell in today] == [(10, ["lunch"])]


def test_render_week_and_year(loaded):
    week = call_api("render_week", year=2025, month=0, day=10)["week"]
    assert [cell["day"] for cell in week["days"]] == [5, 6, 7, 8, 9, 10, 11]
    lunch = week["days"][5]["blocks"][0]
    assert (lunch["note_id"], lunch["start_time"], lunch["hour_span"]) == ("lunch", "12:00", 1)

    year = call_api("render_year", year=2025)["year"]
    assert year["start_year"] == 2021


def test_notes_on_day(loaded):
    assert [note["id"] for note in call_api("notes_on_day", year=2025, month=0, day=10)["notes"]] == ["lunch"]
    assert call_api("notes_on_day", year=2025, month=0, day=11)["notes"] == []


def test_unknown_month_is_a_value_error(loaded):
    with pytest.raises(ValueError):
        call_api("render_month", year=2025, month=14)


def test_render_without_calendar_fails():
    api_state.reset()

    with pytest.raises(RuntimeError):
        call_api("render_month", year=2025, month=0)


def test_http_lists_functions(client):
    response = client.get("/api/functions")

    assert response.status_code == 200
    assert "render_month" in {func["name"] for func in response.json()["functions"]}


def test_http_invokes_function(client, loaded):
    response = client.post("/api/functions/render_month", json={"arguments": {"year": 2025, "month": 1}})

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "render_month"
    first_row = body["result"]["month"]["rows"][0]
    assert first_row["segments"][0]["is_continuation"] is True


def test_http_error_statuses(client):
    api_state.reset()

    assert client.post("/api/functions/does_not_exist", json={}).status_code == 404
    assert client.post("/api/functions/render_month", json={"arguments": {"year": 2025, "month": 0}}).status_code == 400


def test_load_documents_from_disk(tmp_path, client):
    calendar_path = tmp_path / "calendar.json"
    calendar_path.write_bytes(
        orjson.dumps(
            {
                "name": "Tiny",
                "months": [{"name": "One", "days": 10}, {"name": "Two", "days": 10}],
                "weekdays": [{"name": "A"}, {"name": "B"}, {"name": "C"}, {"name": "D"}, {"name": "E"}],
            }
        )
    )
    notes_path = tmp_path / "notes.json"
    notes_path.write_bytes(orjson.dumps([{"id": "n", "name": "Note", "startDate": {"year": 0, "month": 0, "day": 2}}]))

    try:
        response = client.post(
            "/api/functions/load_documents",
            json={"arguments": {"calendar_path": str(calendar_path), "notes_path": str(notes_path), "today": "0-0-2"}},
        )
        assert response.status_code == 200
        assert response.json()["result"] == {"calendar": "Tiny", "months": 2, "notes": 1}

        month = call_api("render_month", year=0, month=0)["month"]
        assert month["days_in_week"] == 5
        assert month["weekdays"] == ["A", "B", "C", "D", "E"]
        assert call_api("select_day", year=0, month=0, day=3) == {"selected": {"year": 0, "month": 0, "day": 3}}
    finally:
        api_state.reset()


def test_load_documents_rejects_malformed_today(tmp_path):
    api_state.reset()
    calendar_path = tmp_path / "calendar.json"
    calendar_path.write_bytes(orjson.dumps({"name": "Tiny", "months": [{"name": "One", "days": 10}]}))

    with pytest.raises(ValueError, match="Invalid date: tomorrow"):
        call_api("load_documents", calendar_path=str(calendar_path), today="tomorrow")
    assert api_state.view is None
