"""Read access to panel evaluations."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from thesisflow.domain.entities import Evaluation
from thesisflow.infrastructure.models import EvaluationModel


class EvaluationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, evaluation_id: int) -> Evaluation | None:
        model = self.session.get(EvaluationModel, evaluation_id)
        return self._to_entity(model) if model else None

    def list(self, *, limit: int | None = 500) -> Sequence[Evaluation]:
        query = self.session.query(EvaluationModel).order_by(EvaluationModel.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: EvaluationModel) -> Evaluation:
        return Evaluation(
            id=model.id,
            schedule_id=model.schedule_id,
            evaluator_id=model.evaluator_id,
            status=model.status,
        )


__all__ = ["EvaluationRepository"]
