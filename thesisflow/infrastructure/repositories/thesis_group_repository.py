"""Read access to thesis groups."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from thesisflow.domain.entities import ThesisGroup
from thesisflow.infrastructure.models import ThesisGroupModel


class ThesisGroupRepository:
    """Fetch thesis groups together with their student member ids."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, group_id: int) -> ThesisGroup | None:
        model = self.session.get(ThesisGroupModel, group_id)
        return self._to_entity(model) if model else None

    def list(self, *, limit: int | None = 500) -> Sequence[ThesisGroup]:
        query = self.session.query(ThesisGroupModel).order_by(
            ThesisGroupModel.title.asc(), ThesisGroupModel.id.asc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: ThesisGroupModel) -> ThesisGroup:
        return ThesisGroup(
            id=model.id,
            title=model.title,
            program=model.program,
            term=model.term,
            adviser_id=model.adviser_id,
            student_member_ids=[member.student_id for member in model.members],
        )


__all__ = ["ThesisGroupRepository"]
