"""Persistence helpers for Web Push subscriptions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from thesisflow.domain.entities import DEFAULT_CONTENT_ENCODING, PushSubscription
from thesisflow.infrastructure.models import PushSubscriptionModel
from thesisflow.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class PushSubscriptionRepository:
    """Store push endpoints; one row per endpoint."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_users(self, user_ids: Iterable[int]) -> Sequence[PushSubscription]:
        unique_ids = {int(user_id) for user_id in user_ids}
        if not unique_ids:
            return []
        query = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.user_id.in_(unique_ids))
            .order_by(PushSubscriptionModel.user_id.asc(), PushSubscriptionModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Create the subscription or refresh the row owning its endpoint."""

        now = ensure_app_naive_datetime(now_in_app_timezone())
        model = self._get_model_by_endpoint(subscription.endpoint)
        if model is None:
            model = PushSubscriptionModel(endpoint=subscription.endpoint, created_at=now)
        model.user_id = subscription.user_id
        model.p256dh = subscription.p256dh
        model.auth = subscription.auth
        model.content_encoding = subscription.content_encoding or DEFAULT_CONTENT_ENCODING
        model.updated_at = now
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, subscription: PushSubscription) -> int:
        return self.delete_by_endpoint(subscription.endpoint)

    def delete_by_endpoint(self, endpoint: str, *, user_id: int | None = None) -> int:
        query = self.session.query(PushSubscriptionModel).filter(
            PushSubscriptionModel.endpoint == endpoint
        )
        if user_id is not None:
            query = query.filter(PushSubscriptionModel.user_id == user_id)
        deleted = query.delete(synchronize_session=False)
        self.session.commit()
        return deleted

    def _get_model_by_endpoint(self, endpoint: str) -> PushSubscriptionModel | None:
        return (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.endpoint == endpoint)
            .first()
        )

    @staticmethod
    def _to_entity(model: PushSubscriptionModel) -> PushSubscription:
        return PushSubscription(
            id=model.id,
            user_id=model.user_id,
            endpoint=model.endpoint,
            p256dh=model.p256dh,
            auth=model.auth,
            content_encoding=model.content_encoding,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["PushSubscriptionRepository"]
