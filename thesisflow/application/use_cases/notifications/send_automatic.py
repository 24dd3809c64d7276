"""Use case for sending an automatic, template-driven notification."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from thesisflow.domain.entities import (
    AutomaticNotificationResult,
    ContextKey,
    IncludeField,
    NotificationContent,
    NotificationTemplate,
    ResolvedContext,
    TargetDescriptor,
    User,
)
from thesisflow.infrastructure.push import PushProvider
from thesisflow.utils import now_in_app_timezone

from .access import ensure_can_send
from .content import build_notification_content
from .context import resolve_context
from .dispatch import dispatch_push, persist_notifications
from .recipients import resolve_recipients
from .templates import get_template, resolve_includes, resolve_notification_type

logger = logging.getLogger(__name__)


def send_automatic_notification(
    session: Session,
    *,
    actor: User,
    template_id: str,
    target: TargetDescriptor,
    context_ids: Mapping[ContextKey | str, int | None] | None = None,
    include_fields: Iterable[IncludeField | str] | None = None,
    notification_type: str | None = None,
    push_provider: PushProvider | None = None,
    created_at: datetime | None = None,
) -> AutomaticNotificationResult:
    """Resolve, render, persist and push a notification.

    Validation, authorization and resolution errors are raised before any
    row is written. Push failures are only reported in the dispatch result.
    """

    ensure_can_send(actor, target)
    template = get_template(template_id)
    includes = resolve_includes(template, include_fields)
    record_type = resolve_notification_type(template, notification_type)

    context = resolve_context(session, template, target, context_ids)
    recipient_ids = resolve_recipients(session, target)
    content = build_notification_content(template, context, includes)

    data = build_notification_data(
        template=template,
        target=target,
        context=context,
        content=content,
        includes=includes,
        actor=actor,
    )
    persisted, notifications = persist_notifications(
        session,
        recipient_ids=recipient_ids,
        notification_type=record_type,
        content=content,
        data=data,
        created_at=created_at or now_in_app_timezone(),
    )
    logger.info(
        "Template %s created %s notifications for %s target (sent by user %s)",
        template.id,
        persisted.recipient_count,
        target.mode,
        actor.id,
    )

    dispatch = dispatch_push(session, notifications, provider=push_provider)
    return AutomaticNotificationResult(
        template=template.id,
        target_mode=target.mode,
        persisted=persisted,
        dispatch=dispatch,
        content=content,
        data=data,
    )


def build_notification_data(
    *,
    template: NotificationTemplate,
    target: TargetDescriptor,
    context: ResolvedContext,
    content: NotificationContent,
    includes: Iterable[IncludeField],
    actor: User,
) -> dict[str, Any]:
    """Snapshot stored in every record's ``data`` column."""

    data: dict[str, Any] = {
        "template": template.id,
        "target_mode": target.mode,
        "include_fields": [include.value for include in includes],
        "details": [{"label": d.label, "value": d.value} for d in content.details],
        "formal_subject": content.formal_subject,
        "formal_message": content.formal_message,
        "sent_by": actor.id,
    }
    for key, entity_id in context.entity_ids.items():
        data[key.value] = entity_id
    return data


__all__ = ["build_notification_data", "send_automatic_notification"]
