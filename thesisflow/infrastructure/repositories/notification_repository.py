"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from thesisflow.domain.entities import Notification
from thesisflow.infrastructure.models import NotificationModel
from thesisflow.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        read_only: bool = False,
        notification_type: str | None = None,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.read_at.is_(None))
        elif read_only:
            query = query.filter(NotificationModel.read_at.is_not(None))
        if notification_type:
            query = query.filter(NotificationModel.type == notification_type)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create_many(self, notifications: Sequence[Notification]) -> list[Notification]:
        """Insert ``notifications`` in one transaction.

        Every row is flushed as it is added so database errors surface on the
        offending row; any failure rolls back the whole batch.
        """

        models: list[NotificationModel] = []
        try:
            for notification in notifications:
                model = self._to_model(notification)
                self.session.add(model)
                self.session.flush()
                models.append(model)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def mark_as_read(self, notification_id: int, *, read_at: datetime | None = None) -> int:
        """Set ``read_at`` on an unread notification; return the rows changed."""

        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.read_at.is_(None))
            .update(
                {NotificationModel.read_at: self._read_timestamp(read_at)},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, user_id: int, *, read_at: datetime | None = None) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read_at.is_(None))
            .update(
                {NotificationModel.read_at: self._read_timestamp(read_at)},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    @staticmethod
    def _read_timestamp(read_at: datetime | None) -> datetime | None:
        return ensure_app_naive_datetime(read_at or now_in_app_timezone())

    @staticmethod
    def _to_model(notification: Notification) -> NotificationModel:
        return NotificationModel(
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            body=notification.body,
            data=dict(notification.data or {}),
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
            read_at=ensure_app_naive_datetime(notification.read_at),
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            body=model.body,
            data=dict(model.data or {}),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["NotificationRepository"]
