"""Mark notifications as read."""

from __future__ import annotations

from sqlalchemy.orm import Session

from thesisflow.domain.entities import Notification, User
from thesisflow.domain.errors import NotFoundError
from thesisflow.infrastructure.repositories import NotificationRepository, UserRepository

from .access import ensure_owner_or_admin


def mark_notification_read(
    session: Session, *, actor: User, notification_id: int
) -> Notification:
    """Set ``read_at`` once; an already read record is returned unchanged."""

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None or UserRepository(session).get(notification.user_id) is None:
        raise NotFoundError(f"notification not found: {notification_id}")
    ensure_owner_or_admin(actor, notification.user_id)

    if notification.is_read:
        return notification
    repository.mark_as_read(notification_id)
    refreshed = repository.get(notification_id)
    if refreshed is None:  # pragma: no cover - deleted concurrently
        raise NotFoundError(f"notification not found: {notification_id}")
    return refreshed


def mark_all_notifications_read(session: Session, *, actor: User, user_id: int) -> int:
    """Flip every unread record of ``user_id``; return how many changed."""

    ensure_owner_or_admin(actor, user_id)
    if UserRepository(session).get(user_id) is None:
        raise NotFoundError(f"user not found: {user_id}")
    return NotificationRepository(session).mark_all_as_read(user_id)


__all__ = ["mark_all_notifications_read", "mark_notification_read"]
