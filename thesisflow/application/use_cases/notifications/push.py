"""Push configuration and subscription management for the current user."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from thesisflow.config import Settings, get_settings
from thesisflow.domain.entities import DEFAULT_CONTENT_ENCODING, PushSubscription, User
from thesisflow.domain.errors import ValidationError
from thesisflow.infrastructure.repositories import PushSubscriptionRepository

from .dispatch import PUSH_NOT_CONFIGURED


@dataclass
class PushPublicKey:
    enabled: bool
    public_key: str | None
    reason: str | None = None


def get_push_public_key(settings: Settings | None = None) -> PushPublicKey:
    settings = settings or get_settings()
    if not settings.push_enabled:
        return PushPublicKey(enabled=False, public_key=None, reason=PUSH_NOT_CONFIGURED)
    return PushPublicKey(enabled=True, public_key=settings.vapid_public_key)


def register_push_subscription(
    session: Session,
    *,
    actor: User,
    endpoint: str,
    p256dh: str,
    auth: str,
    content_encoding: str | None = None,
) -> PushSubscription:
    """Store the browser endpoint for ``actor``; re-registration refreshes it."""

    endpoint = (endpoint or "").strip()
    if not endpoint.startswith("https://"):
        raise ValidationError("push endpoint must be an https URL")
    if not p256dh.strip() or not auth.strip():
        raise ValidationError("push subscription keys are required")
    subscription = PushSubscription(
        id=None,
        user_id=actor.id,
        endpoint=endpoint,
        p256dh=p256dh.strip(),
        auth=auth.strip(),
        content_encoding=(content_encoding or DEFAULT_CONTENT_ENCODING).strip(),
    )
    return PushSubscriptionRepository(session).upsert(subscription)


def remove_push_subscription(session: Session, *, actor: User, endpoint: str) -> int:
    """Delete ``actor``'s subscription for ``endpoint``; return rows removed."""

    return PushSubscriptionRepository(session).delete_by_endpoint(
        endpoint.strip(), user_id=actor.id
    )


__all__ = [
    "PushPublicKey",
    "get_push_public_key",
    "register_push_subscription",
    "remove_push_subscription",
]
