"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    format_schedule_datetime,
    get_app_timezone,
    now_in_app_timezone,
)

__all__ = [
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "format_schedule_datetime",
    "get_app_timezone",
    "now_in_app_timezone",
]
