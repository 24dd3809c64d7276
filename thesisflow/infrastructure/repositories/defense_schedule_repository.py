"""Read access to defense schedules."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from thesisflow.domain.entities import DefenseSchedule
from thesisflow.infrastructure.models import DefenseScheduleModel
from thesisflow.utils import ensure_app_timezone


class DefenseScheduleRepository:
    """Fetch defense schedules together with their panelist ids."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, schedule_id: int) -> DefenseSchedule | None:
        model = self.session.get(DefenseScheduleModel, schedule_id)
        return self._to_entity(model) if model else None

    def list(self, *, limit: int | None = 500) -> Sequence[DefenseSchedule]:
        query = self.session.query(DefenseScheduleModel).order_by(
            DefenseScheduleModel.scheduled_at.desc(), DefenseScheduleModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: DefenseScheduleModel) -> DefenseSchedule:
        return DefenseSchedule(
            id=model.id,
            group_id=model.group_id,
            scheduled_at=ensure_app_timezone(model.scheduled_at),
            room=model.room,
            status=model.status,
            created_by=model.created_by,
            panelist_ids=[panelist.staff_id for panelist in model.panelists],
        )


__all__ = ["DefenseScheduleRepository"]
