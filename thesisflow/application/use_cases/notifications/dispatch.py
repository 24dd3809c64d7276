"""Persist notifications for every recipient, then push them best-effort."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from thesisflow.config import get_settings
from thesisflow.domain.entities import (
    DispatchResult,
    Notification,
    NotificationContent,
    PersistResult,
    PushSubscription,
)
from thesisflow.infrastructure.push import PushFanout, PushOutcome, PushProvider
from thesisflow.infrastructure.repositories import (
    NotificationRepository,
    PushSubscriptionRepository,
)

logger = logging.getLogger(__name__)

PUSH_NOT_CONFIGURED = "push not configured"
SUBSCRIPTIONS_UNAVAILABLE = "push subscriptions unavailable"


def persist_notifications(
    session: Session,
    *,
    recipient_ids: Sequence[int],
    notification_type: str,
    content: NotificationContent,
    data: dict[str, Any],
    created_at: datetime,
) -> tuple[PersistResult, list[Notification]]:
    """Create one record per recipient; all of them or none are committed."""

    pending = [
        Notification(
            id=None,
            user_id=user_id,
            type=notification_type,
            title=content.title,
            body=content.body,
            data=dict(data),
            created_at=created_at,
            read_at=None,
        )
        for user_id in recipient_ids
    ]
    saved = NotificationRepository(session).create_many(pending)
    result = PersistResult(
        created_notification_ids=[notification.id for notification in saved],
        recipient_ids=[notification.user_id for notification in saved],
    )
    return result, saved


def build_push_payload(notification: Notification, *, click_url: str) -> dict[str, Any]:
    """Payload understood by the browser service worker."""

    return {
        "title": notification.title,
        "body": notification.body,
        "tag": f"thesis-notification-{notification.type}",
        "url": click_url,
        "data": {
            "notificationId": notification.id,
            "type": notification.type,
            "url": click_url,
        },
    }


def dispatch_push(
    session: Session,
    notifications: Sequence[Notification],
    *,
    provider: PushProvider | None,
) -> DispatchResult:
    """Push every persisted notification to its owner's subscriptions.

    Runs after the records are committed, so nothing here raises: store
    errors are logged and folded into the result. Gone subscriptions are
    deleted once the fan-out completes; other failures are only counted.
    """

    if provider is None:
        return DispatchResult(enabled=False, reason=PUSH_NOT_CONFIGURED)

    settings = get_settings()
    by_user = {notification.user_id: notification for notification in notifications}
    repository = PushSubscriptionRepository(session)
    try:
        subscriptions = repository.list_by_users(by_user)
    except Exception:  # noqa: BLE001
        session.rollback()
        logger.exception("Could not load push subscriptions for %s users", len(by_user))
        return DispatchResult(enabled=True, reason=SUBSCRIPTIONS_UNAVAILABLE)

    result = DispatchResult(enabled=True, total_subscriptions=len(subscriptions))
    if not subscriptions:
        return result

    def payload_for(subscription: PushSubscription) -> dict[str, Any]:
        return build_push_payload(
            by_user[subscription.user_id], click_url=settings.notification_click_url
        )

    fanout = PushFanout(provider, max_workers=settings.push_max_workers)
    for attempt in fanout.deliver(subscriptions, payload_for):
        if attempt.outcome is PushOutcome.SENT:
            result.sent += 1
        elif attempt.outcome is PushOutcome.GONE:
            if _prune(session, repository, attempt.subscription):
                result.removed += 1
            else:
                result.failed += 1
        else:
            result.failed += 1

    logger.info(
        "Push dispatch finished: %s sent, %s failed, %s removed of %s subscriptions",
        result.sent,
        result.failed,
        result.removed,
        result.total_subscriptions,
    )
    return result


def _prune(
    session: Session, repository: PushSubscriptionRepository, subscription: PushSubscription
) -> bool:
    try:
        repository.delete(subscription)
    except Exception:  # noqa: BLE001
        session.rollback()
        logger.exception(
            "Could not remove expired push subscription %s of user %s",
            subscription.id,
            subscription.user_id,
        )
        return False
    logger.info(
        "Removed expired push subscription %s of user %s",
        subscription.id,
        subscription.user_id,
    )
    return True


__all__ = [
    "PUSH_NOT_CONFIGURED",
    "SUBSCRIPTIONS_UNAVAILABLE",
    "build_push_payload",
    "dispatch_push",
    "persist_notifications",
]
