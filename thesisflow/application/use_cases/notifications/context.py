"""Resolve the entities a notification is about into renderable fields."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

from sqlalchemy.orm import Session

from thesisflow.domain.entities import (
    ContextKey,
    DefenseSchedule,
    Evaluation,
    GroupTarget,
    IncludeField,
    NotificationTemplate,
    ResolvedContext,
    ScheduleTarget,
    TargetDescriptor,
    ThesisGroup,
)
from thesisflow.domain.errors import NotFoundError, ValidationError
from thesisflow.infrastructure.repositories import (
    DefenseScheduleRepository,
    EvaluationRepository,
    ThesisGroupRepository,
    UserRepository,
)
from thesisflow.utils import format_schedule_datetime

EntityT = TypeVar("EntityT")

_CAMEL_CONTEXT_KEYS = {
    "evaluationId": ContextKey.EVALUATION_ID,
    "scheduleId": ContextKey.SCHEDULE_ID,
    "groupId": ContextKey.GROUP_ID,
}

_ENTITY_NAMES = {
    ContextKey.EVALUATION_ID: "evaluation",
    ContextKey.SCHEDULE_ID: "defense schedule",
    ContextKey.GROUP_ID: "thesis group",
}


def normalize_context_ids(
    context_ids: Mapping[ContextKey | str, int | None] | None,
) -> dict[ContextKey, int]:
    """Coerce raw keys into :class:`ContextKey` and drop empty ids.

    Keys may be spelled ``schedule_id`` or ``scheduleId``.
    """

    normalized: dict[ContextKey, int] = {}
    for raw_key, raw_value in (context_ids or {}).items():
        key = _CAMEL_CONTEXT_KEYS.get(raw_key) if isinstance(raw_key, str) else None
        if key is None:
            try:
                key = ContextKey(raw_key)
            except ValueError as exc:
                raise ValidationError(f"unknown context key: {raw_key}") from exc
        if raw_value is None:
            continue
        try:
            entity_id = int(raw_value)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"invalid id for context {key.value}: {raw_value}") from exc
        if normalized.setdefault(key, entity_id) != entity_id:
            raise ValidationError(f"conflicting ids for context {key.value}")
    return normalized


def ensure_required_context(
    template: NotificationTemplate, context_ids: Mapping[ContextKey, int]
) -> None:
    for key in ContextKey:
        if key in template.required_context and key not in context_ids:
            raise ValidationError(f"missing required context: {key.value}")


def resolve_context(
    session: Session,
    template: NotificationTemplate,
    target: TargetDescriptor,
    context_ids: Mapping[ContextKey | str, int | None] | None,
) -> ResolvedContext:
    """Fetch the context entities and flatten them into include-field values.

    Required context must be supplied and must exist. Optional context that
    cannot be found simply contributes no fields. Missing schedule and group
    ids are inferred from the target, then from the evaluation and schedule
    that were found.
    """

    explicit = normalize_context_ids(context_ids)
    ensure_required_context(template, explicit)

    ids = dict(explicit)
    if isinstance(target, ScheduleTarget):
        ids.setdefault(ContextKey.SCHEDULE_ID, target.schedule_id)
    elif isinstance(target, GroupTarget):
        ids.setdefault(ContextKey.GROUP_ID, target.group_id)

    def fetch(key: ContextKey, getter: Callable[[int], EntityT | None]) -> EntityT | None:
        entity_id = ids.get(key)
        if entity_id is None:
            return None
        entity = getter(entity_id)
        if entity is None and key in template.required_context:
            raise NotFoundError(f"{_ENTITY_NAMES[key]} not found: {entity_id}")
        return entity

    values: dict[IncludeField, str] = {}
    entity_ids: dict[ContextKey, int] = {}

    evaluation: Evaluation | None = fetch(
        ContextKey.EVALUATION_ID, EvaluationRepository(session).get
    )
    if evaluation is not None:
        entity_ids[ContextKey.EVALUATION_ID] = evaluation.id
        ids.setdefault(ContextKey.SCHEDULE_ID, evaluation.schedule_id)
        _put(values, IncludeField.EVALUATION_STATUS, _humanize(evaluation.status))
        evaluator = UserRepository(session).get(evaluation.evaluator_id)
        if evaluator is not None:
            _put(values, IncludeField.EVALUATOR_NAME, evaluator.name)

    schedule: DefenseSchedule | None = fetch(
        ContextKey.SCHEDULE_ID, DefenseScheduleRepository(session).get
    )
    if schedule is not None:
        entity_ids[ContextKey.SCHEDULE_ID] = schedule.id
        ids.setdefault(ContextKey.GROUP_ID, schedule.group_id)
        _put(values, IncludeField.SCHEDULE_DATETIME, format_schedule_datetime(schedule.scheduled_at))
        _put(values, IncludeField.SCHEDULE_ROOM, schedule.room)

    group: ThesisGroup | None = fetch(ContextKey.GROUP_ID, ThesisGroupRepository(session).get)
    if group is not None:
        entity_ids[ContextKey.GROUP_ID] = group.id
        _put(values, IncludeField.GROUP_TITLE, group.title)
        _put(values, IncludeField.PROGRAM, group.program)
        _put(values, IncludeField.TERM, group.term)
        _put(values, IncludeField.STUDENT_COUNT, str(len(group.student_member_ids)))

    return ResolvedContext(values=values, entity_ids=entity_ids)


def _put(values: dict[IncludeField, str], field: IncludeField, value: str | None) -> None:
    if value is None:
        return
    cleaned = value.strip()
    if cleaned:
        values[field] = cleaned


def _humanize(value: str | None) -> str | None:
    if not value:
        return None
    words = value.replace("_", " ").replace("-", " ").split()
    return " ".join(words).capitalize() if words else None


__all__ = ["ensure_required_context", "normalize_context_ids", "resolve_context"]
