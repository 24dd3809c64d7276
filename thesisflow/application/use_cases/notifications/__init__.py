"""Notification automation and delivery use cases."""

from .automation_options import list_automation_options
from .content import build_notification_content
from .context import resolve_context
from .dispatch import PUSH_NOT_CONFIGURED, dispatch_push, persist_notifications
from .list_notifications import READ_FILTERS, list_user_notifications
from .push import (
    PushPublicKey,
    get_push_public_key,
    register_push_subscription,
    remove_push_subscription,
)
from .read_state import mark_all_notifications_read, mark_notification_read
from .recipients import resolve_recipients
from .send_automatic import send_automatic_notification
from .templates import (
    INCLUDE_OPTIONS,
    NOTIFICATION_TYPES,
    TEMPLATE_REGISTRY,
    get_template,
    list_templates,
    resolve_includes,
)

__all__ = [
    "INCLUDE_OPTIONS",
    "NOTIFICATION_TYPES",
    "PUSH_NOT_CONFIGURED",
    "PushPublicKey",
    "READ_FILTERS",
    "TEMPLATE_REGISTRY",
    "build_notification_content",
    "dispatch_push",
    "get_push_public_key",
    "get_template",
    "list_automation_options",
    "list_templates",
    "list_user_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "persist_notifications",
    "register_push_subscription",
    "remove_push_subscription",
    "resolve_context",
    "resolve_includes",
    "resolve_recipients",
    "send_automatic_notification",
]
