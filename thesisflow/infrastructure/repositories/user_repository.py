"""Read access to the user directory."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from thesisflow.domain.entities import USER_STATUS_ACTIVE, User
from thesisflow.infrastructure.models import UserModel


class UserRepository:
    """Query users and their activation status."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def list(self, *, limit: int | None = 500) -> Sequence[User]:
        query = self.session.query(UserModel).order_by(UserModel.name.asc(), UserModel.id.asc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_active_ids_by_role(self, role: str) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.role == role)
            .filter(UserModel.status == USER_STATUS_ACTIVE)
            .order_by(UserModel.id.asc())
        )
        return [user_id for (user_id,) in query.all()]

    def list_active_ids(self, user_ids: Iterable[int]) -> set[int]:
        """Return the subset of ``user_ids`` that exist and are active."""

        unique_ids = {int(user_id) for user_id in user_ids}
        if not unique_ids:
            return set()
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.id.in_(unique_ids))
            .filter(UserModel.status == USER_STATUS_ACTIVE)
        )
        return {user_id for (user_id,) in query.all()}

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            status=model.status,
        )


__all__ = ["UserRepository"]
