"""Endpoints for automatic notifications, inbox reads and Web Push setup."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from thesisflow.application.use_cases.notifications import (
    get_push_public_key,
    list_automation_options,
    list_user_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    register_push_subscription,
    remove_push_subscription,
    send_automatic_notification,
)
from thesisflow.application.use_cases.notifications.list_notifications import MAX_LIMIT
from thesisflow.domain.entities import Notification, User
from thesisflow.domain.errors import (
    EmptyRecipientSetError,
    ForbiddenError,
    NotFoundError,
    NotificationEngineError,
    ValidationError,
)
from thesisflow.infrastructure.database import get_db
from thesisflow.infrastructure.push import PushProvider
from thesisflow.interfaces.api.dependencies import get_current_active_user, get_push_provider
from thesisflow.interfaces.api.schemas import (
    AutomaticNotificationRequest,
    AutomaticNotificationResponse,
    AutomationOptionsRead,
    DispatchResultRead,
    MarkAllReadResponse,
    NotificationRead,
    PushPublicKeyRead,
    PushSubscriptionCreate,
    PushSubscriptionDelete,
    PushSubscriptionRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _http_error(exc: NotificationEngineError) -> HTTPException:
    if isinstance(exc, ForbiddenError):
        status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (ValidationError, EmptyRecipientSetError)):
        status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=status_code, detail=str(exc))


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        type=notification.type,
        title=notification.title,
        body=notification.body,
        data=notification.data or {},
        created_at=notification.created_at,
        read_at=notification.read_at,
    )


@router.post(
    "/automation",
    response_model=AutomaticNotificationResponse,
    status_code=status.HTTP_201_CREATED,
)
def send_automatic(
    payload: AutomaticNotificationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    push_provider: PushProvider | None = Depends(get_push_provider),
) -> AutomaticNotificationResponse:
    """Create one notification per resolved recipient and push it."""

    try:
        result = send_automatic_notification(
            db,
            actor=current_user,
            template_id=payload.template,
            target=payload.target.to_target(),
            context_ids=payload.context_ids,
            include_fields=payload.include_fields,
            notification_type=payload.type,
            push_provider=push_provider,
        )
    except NotificationEngineError as exc:
        raise _http_error(exc) from exc

    return AutomaticNotificationResponse(
        recipient_count=result.recipient_count,
        recipient_ids=result.persisted.recipient_ids,
        created_notification_ids=result.persisted.created_notification_ids,
        template=result.template,
        target_mode=result.target_mode,
        title=result.content.title if result.content else "",
        body=result.content.body if result.content else "",
        dispatch=DispatchResultRead.model_validate(result.dispatch),
    )


@router.get("/automation/options", response_model=AutomationOptionsRead)
def automation_options(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> AutomationOptionsRead:
    """Return templates, targets, include fields and selectable context."""

    try:
        options = list_automation_options(db, actor=current_user)
    except NotificationEngineError as exc:
        raise _http_error(exc) from exc
    return AutomationOptionsRead.model_validate(options)


@router.get("/user/{user_id}", response_model=list[NotificationRead])
def list_notifications(
    user_id: int,
    read: str = Query("all", description="all, unread or read"),
    type: str | None = Query(None, description="Restrict to one notification type"),
    limit: int = Query(50, ge=1, le=MAX_LIMIT),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications of a user."""

    try:
        notifications = list_user_notifications(
            db,
            actor=current_user,
            user_id=user_id,
            read_filter=read,
            notification_type=type,
            limit=limit,
        )
    except NotificationEngineError as exc:
        raise _http_error(exc) from exc
    return [_notification_to_schema(notification) for notification in notifications]


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Mark a single notification as read."""

    try:
        notification = mark_notification_read(
            db, actor=current_user, notification_id=notification_id
        )
    except NotificationEngineError as exc:
        raise _http_error(exc) from exc
    return _notification_to_schema(notification)


@router.post("/user/{user_id}/read-all", response_model=MarkAllReadResponse)
def mark_all_read(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkAllReadResponse:
    """Mark every unread notification of a user as read."""

    try:
        updated = mark_all_notifications_read(db, actor=current_user, user_id=user_id)
    except NotificationEngineError as exc:
        raise _http_error(exc) from exc
    return MarkAllReadResponse(updated_count=updated)


@router.get("/push/public-key", response_model=PushPublicKeyRead)
def push_public_key(
    current_user: User = Depends(get_current_active_user),
) -> PushPublicKeyRead:
    """Return the VAPID public key browsers need to subscribe."""

    return PushPublicKeyRead.model_validate(get_push_public_key())


@router.post(
    "/push/subscriptions",
    response_model=PushSubscriptionRead,
    status_code=status.HTTP_201_CREATED,
)
def subscribe(
    payload: PushSubscriptionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> PushSubscriptionRead:
    """Register the caller's browser push subscription."""

    try:
        subscription = register_push_subscription(
            db,
            actor=current_user,
            endpoint=payload.endpoint,
            p256dh=payload.keys.p256dh,
            auth=payload.keys.auth,
            content_encoding=payload.content_encoding,
        )
    except NotificationEngineError as exc:
        raise _http_error(exc) from exc
    return PushSubscriptionRead.model_validate(subscription)


@router.delete("/push/subscriptions", status_code=status.HTTP_204_NO_CONTENT)
def unsubscribe(
    payload: PushSubscriptionDelete,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> None:
    """Forget one of the caller's push subscriptions."""

    remove_push_subscription(db, actor=current_user, endpoint=payload.endpoint)
