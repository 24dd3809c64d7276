"""List a user's notifications."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from thesisflow.domain.entities import Notification, User
from thesisflow.domain.errors import NotFoundError, ValidationError
from thesisflow.infrastructure.repositories import NotificationRepository, UserRepository

from .access import ensure_owner_or_admin
from .templates import NOTIFICATION_TYPES

READ_FILTERS = ("all", "unread", "read")
MAX_LIMIT = 200


def list_user_notifications(
    session: Session,
    *,
    actor: User,
    user_id: int,
    read_filter: str = "all",
    notification_type: str | None = None,
    limit: int = 50,
) -> Sequence[Notification]:
    """Return the newest notifications of ``user_id`` first."""

    ensure_owner_or_admin(actor, user_id)
    if read_filter not in READ_FILTERS:
        raise ValidationError(f"invalid read filter. Allowed: {', '.join(READ_FILTERS)}")
    if notification_type is not None and notification_type not in NOTIFICATION_TYPES:
        raise ValidationError(
            f"invalid notification type. Allowed: {', '.join(NOTIFICATION_TYPES)}"
        )
    if UserRepository(session).get(user_id) is None:
        raise NotFoundError(f"user not found: {user_id}")

    return NotificationRepository(session).list_for_user(
        user_id,
        unread_only=read_filter == "unread",
        read_only=read_filter == "read",
        notification_type=notification_type,
        limit=max(1, min(limit, MAX_LIMIT)),
    )


__all__ = ["MAX_LIMIT", "READ_FILTERS", "list_user_notifications"]
