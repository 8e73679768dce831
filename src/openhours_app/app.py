from __future__ import annotations

from datetime import datetime
import logging
import os
from pathlib import Path
import sys

from openhours_app.core.builder import build_structured_hours
from openhours_app.core.formatter import format_osm_hours
from openhours_app.core.http import HttpClient
from openhours_app.core.nominatim import NominatimClient
from openhours_app.core.query import (
    day_name,
    format_entry,
    is_special,
    open_status,
    today,
    week_from_today,
)
from openhours_app.core.settings import SettingsStore, default_settings_path

USAGE = 'usage: openhours "<opening_hours>" | openhours --lookup "<business name>"'


def _configure_logging() -> Path | None:
    level_name = os.environ.get("LOGLEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)

    try:
        from platformdirs import user_cache_dir

        logs_dir = Path(user_cache_dir("openhours_app", "openhours_app")) / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)
    except Exception:  # noqa: BLE001
        logging.basicConfig(level=level)
        return None

    try:
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        log_path = logs_dir / f"openhours-{timestamp}.log"

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        file_handler.setFormatter(formatter)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)

        logging.basicConfig(level=level, handlers=[file_handler, stream_handler])
        logging.getLogger(__name__).info("Writing log to %s", log_path)
        return log_path
    except Exception:  # noqa: BLE001
        logging.basicConfig(level=level)
        return None


def render_report(osm: str, settings: SettingsStore, *, now: datetime | None = None) -> str:
    now = now or datetime.now()
    clock = now.date
    locale = settings.get_locale()
    formatted = format_osm_hours(osm)
    schedule = build_structured_hours(osm)

    lines = [formatted.formatted or osm]
    special = is_special(schedule)
    if special is not None:
        lines.append(f"special: {special}")
    else:
        current = today(clock)
        for entry in week_from_today(schedule, clock):
            marker = "*" if entry.day == current else " "
            lines.append(f"{marker} {day_name(entry.day, locale):<11} {format_entry(entry)}")

    status = open_status(schedule, now)
    if status.is_open is True:
        state = "open"
        if status.minutes_to_close is not None:
            state += f", closes in {status.minutes_to_close} min"
    elif status.is_open is False:
        state = "closed"
        if status.minutes_to_open is not None:
            state += f", opens in {status.minutes_to_open} min"
    else:
        state = "unknown"
    lines.append(f"now: {state}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE, file=sys.stderr)
        return 2

    _configure_logging()

    settings = SettingsStore(default_settings_path())

    if args[0] == "--lookup":
        if len(args) < 2:
            print(USAGE, file=sys.stderr)
            return 2
        http = HttpClient(user_agent=settings.get_nominatim_user_agent())
        try:
            client = NominatimClient(http, base_url=settings.get_nominatim_base_url())
            result = client.search_with_extras(" ".join(args[1:]))
        finally:
            http.close()
        if result.error:
            print(result.error, file=sys.stderr)
            return 1
        if not result.opening_hours_osm:
            print("No opening hours found.", file=sys.stderr)
            return 1
        osm = result.opening_hours_osm
    else:
        osm = " ".join(args)

    print(render_report(osm, settings))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
