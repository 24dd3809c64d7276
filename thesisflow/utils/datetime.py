"""Clock and timezone helpers.

Timestamps are stored as naive values in the app timezone and handed to the
rest of the code as aware datetimes.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from thesisflow.config import get_settings

FALLBACK_TIMEZONE: Final[str] = "Asia/Manila"
SCHEDULE_DISPLAY_FORMAT: Final[str] = "%b %d, %Y %I:%M %p"

# "UTC+8", "GMT-05:30", "utc+0530"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)([+-])(\d{1,2})(?::?(\d{2}))?$", re.IGNORECASE
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Timezone named by ``APP_TIMEZONE``, or Asia/Manila when unset or unknown."""

    name = (get_settings().app_timezone or "").strip()
    return _lookup_zone(name) or _parse_utc_offset(name) or ZoneInfo(FALLBACK_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach the app timezone to naive values and convert aware ones."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Form written to ``DateTime`` columns: local wall time, no ``tzinfo``."""

    local = ensure_app_timezone(value)
    return local.replace(tzinfo=None) if local is not None else None


def format_schedule_datetime(value: datetime | None) -> str | None:
    """``Mar 14, 2025 09:30 AM`` in the app timezone."""

    local = ensure_app_timezone(value)
    return local.strftime(SCHEDULE_DISPLAY_FORMAT) if local is not None else None


def _lookup_zone(name: str) -> tzinfo | None:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def _parse_utc_offset(name: str) -> tzinfo | None:
    match = _UTC_OFFSET.match(name)
    if match is None:
        return None
    sign, hours, minutes = match.groups()
    offset = timedelta(hours=int(hours), minutes=int(minutes or 0))
    return timezone(-offset if sign == "-" else offset)
