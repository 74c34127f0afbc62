from __future__ import annotations

import orjson
import pytest

from almanac.cli import build_parser, main

CALENDAR = {
    "name": "Reckoning",
    "months": [
        {"name": "Deepwinter", "days": 31},
        {"name": "The Claw of Winter", "days": 30},
        {"name": "Thaw", "days": 31},
    ],
    "weekdays": [{"name": f"Day {index}", "isRestDay": index == 6} for index in range(7)],
    "festivals": [{"name": "Midwinter", "month": 0, "day": 30, "countsForDayOfWeek": False}],
}

NOTES = [
    {
        "id": "thaw-fair",
        "name": "Thaw Fair",
        "startDate": {"year": 1, "month": 0, "day": 27},
        "endDate": {"year": 1, "month": 1, "day": 3},
    }
]


@pytest.fixture
def documents(tmp_path):
    calendar_path = tmp_path / "calendar.json"
    notes_path = tmp_path / "notes.json"
    calendar_path.write_bytes(orjson.dumps(CALENDAR))
    notes_path.write_bytes(orjson.dumps(NOTES))
    return calendar_path, notes_path


def test_parser_reads_render_arguments():
    args = build_parser().parse_args(
        ["render", "--calendar", "cal.json", "--mode", "week", "--year", "3", "--month", "1", "--day", "9"]
    )

    assert args.command == "render"
    assert (args.calendar, args.mode, args.year, args.month, args.day) == ("cal.json", "week", 3, 1, 9)
    assert args.notes is None


def test_render_prints_month_json(documents, capsys):
    calendar_path, notes_path = documents

    exit_code = main(
        [
            "render",
            "--calendar",
            str(calendar_path),
            "--notes",
            str(notes_path),
            "--year",
            "1",
            "--month",
            "0",
            "--today",
            "1-0-5",
        ]
    )

    assert exit_code == 0
    output = orjson.loads(capsys.readouterr().out)
    month = output["month"]
    assert output["mode"] == "month"
    assert month["month_name"] == "Deepwinter"
    assert month["rows"][-1]["is_intercalary_row"] is False
    assert any(row["is_intercalary_row"] for row in month["rows"])
    segments = [segment for row in month["rows"] for segment in row["segments"]]
    assert [segment["id"] for segment in segments] == ["thaw-fair-week-3", "thaw-fair-week-4"]
    assert not any(segment["is_continuation"] for segment in segments)
    assert [note["id"] for note in output["notes"]] == ["thaw-fair"]


def test_render_year_view(documents, capsys):
    calendar_path, _ = documents

    assert main(["render", "--calendar", str(calendar_path), "--mode", "year", "--year", "10"]) == 0

    year = orjson.loads(capsys.readouterr().out)["year"]
    assert (year["start_year"], year["end_year"]) == (6, 14)
    assert [month["abbreviation"] for month in year["rows"][1][1]["months"]] == ["D", "TCOW", "Thaw"]


def test_invalid_date_argument_exits(documents):
    calendar_path, _ = documents

    with pytest.raises(SystemExit) as excinfo:
        main(["render", "--calendar", str(calendar_path), "--year", "1", "--today", "yesterday"])

    assert excinfo.value.code == 2


def test_missing_month_and_missing_file_return_error(documents, tmp_path):
    calendar_path, _ = documents

    assert main(["render", "--calendar", str(calendar_path), "--year", "1", "--month", "7"]) == 1
    assert main(["render", "--calendar", str(tmp_path / "absent.json"), "--year", "1"]) == 1
