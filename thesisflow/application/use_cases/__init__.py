"""Aggregate application use cases."""

from .notifications import (
    list_automation_options,
    list_user_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    send_automatic_notification,
)

__all__ = [
    "list_automation_options",
    "list_user_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "send_automatic_notification",
]
