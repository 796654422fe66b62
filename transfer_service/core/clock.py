"""Wall-clock helpers for the service's fixed business time zone.

Ledger timestamps are stored as naive datetimes holding local time in the
configured zone, so every window below is naive as well.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def now_in_zone(zone: ZoneInfo) -> datetime:
    return datetime.now(zone).replace(tzinfo=None)


def today_in_zone(zone: ZoneInfo) -> date:
    return now_in_zone(zone).date()


def day_window(day: date) -> tuple[datetime, datetime]:
    """Return the inclusive ``[00:00:00, 23:59:59.999999]`` window of ``day``."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def yesterday_window(zone: ZoneInfo, now: datetime | None = None) -> tuple[datetime, datetime]:
    current = now or now_in_zone(zone)
    return day_window(current.date() - timedelta(days=1))
