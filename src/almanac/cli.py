from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .api.serializers import serialize_render
from .bootstrap import configure_logging
from .config import get_settings
from .data import DocumentError, dump_json, load_calendar, load_notes
from .domain import DateComponents, DisplayMode
from .services import CalendarViewService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Almanac calendar layout command line interface.")
    parser.add_argument("--log-level", default=None, help="Override ALMANAC_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render a calendar view as JSON.")
    render_parser.add_argument("--calendar", default=str(settings.storage.calendar_file), help="Calendar JSON document.")
    render_parser.add_argument("--notes", default=None, help="Notes JSON document.")
    render_parser.add_argument("--mode", choices=[mode.value for mode in DisplayMode], default=DisplayMode.MONTH.value)
    render_parser.add_argument("--year", type=int, required=True)
    render_parser.add_argument("--month", type=int, default=0, help="0-indexed month.")
    render_parser.add_argument("--day", type=int, default=1)
    render_parser.add_argument("--today", default=None, help="Current date as YEAR-MONTH-DAY (0-indexed month).")
    render_parser.add_argument("--selected", default=None, help="Selected date as YEAR-MONTH-DAY (0-indexed month).")

    api_parser = subparsers.add_parser("api", help="Start the FastAPI server exposing the render functions.")
    api_parser.add_argument("--host", default=settings.server.host)
    api_parser.add_argument("--port", type=int, default=settings.server.port)
    api_parser.add_argument("--calendar", default=None, help="Calendar JSON document to load at startup.")
    api_parser.add_argument("--notes", default=None, help="Notes JSON document to load at startup.")

    return parser


def _parse_date_arg(parser: argparse.ArgumentParser, value: Optional[str]) -> Optional[DateComponents]:
    if not value:
        return None
    try:
        return DateComponents.parse(value)
    except ValueError as exc:
        parser.error(str(exc))
    return None


def run_render(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    try:
        calendar = load_calendar(args.calendar)
        notes = load_notes(args.notes) if args.notes else []
    except DocumentError as exc:
        logger.error("%s", exc)
        return 1

    view = CalendarViewService(
        calendar=calendar,
        notes=notes,
        today=_parse_date_arg(parser, args.today),
        mode=DisplayMode(args.mode),
        viewed=DateComponents(args.year, args.month, args.day),
    )
    view.select(_parse_date_arg(parser, args.selected))
    model = view.render()
    if model is None:
        logger.error("Month %s does not exist in calendar %s", args.month, calendar.name)
        return 1
    print(dump_json(serialize_render(model)).decode("utf-8"))
    return 0


def run_api(args: argparse.Namespace) -> int:
    from .api import api_state
    from .services.http import run_local_server

    if args.calendar:
        try:
            api_state.load(args.calendar, args.notes)
        except DocumentError as exc:
            logger.error("%s", exc)
            return 1
    run_local_server(host=args.host, port=args.port)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)
    logger.info("Almanac CLI starting")

    if args.command == "render":
        return run_render(args, parser)
    if args.command == "api":
        return run_api(args)
    parser.print_help()  # pragma: no cover - argparse enforces choices
    return 2


if __name__ == "__main__":
    sys.exit(main())
