from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(tz_name: Optional[str] = None) -> datetime:
    """Current time in the school's time zone (host local time when unset).

    Note: Wrapped so tests can patch/mocked easier.
    """
    if tz_name:
        return datetime.now(ZoneInfo(tz_name))
    return datetime.now()


def today_local(tz_name: Optional[str] = None) -> date:
    return now_local(tz_name).date()
