"""Catalog used by clients to build an automatic notification request."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from thesisflow.domain.entities import TARGET_MODES, USER_ROLES, ContextKey, IncludeField, User
from thesisflow.infrastructure.repositories import (
    DefenseScheduleRepository,
    EvaluationRepository,
    ThesisGroupRepository,
    UserRepository,
)
from thesisflow.utils import format_schedule_datetime

from .access import ensure_can_configure
from .templates import INCLUDE_OPTIONS, NOTIFICATION_TYPES, list_templates


def list_automation_options(session: Session, *, actor: User) -> dict[str, Any]:
    ensure_can_configure(actor)

    users = UserRepository(session).list()
    active_users = [user for user in users if user.is_active]
    user_names = {user.id: user.name for user in users}
    groups = ThesisGroupRepository(session).list()
    group_titles = {group.id: group.title for group in groups}
    schedules = DefenseScheduleRepository(session).list()
    evaluations = EvaluationRepository(session).list()

    return {
        "templates": [
            {
                "value": template.id,
                "label": template.label,
                "description": template.description,
                "default_type": template.default_type,
                "required_context": [
                    key.value for key in ContextKey if key in template.required_context
                ],
                "allowed_includes": [
                    field.value for field in IncludeField if field in template.allowed_includes
                ],
                "default_includes": [
                    field.value for field in IncludeField if field in template.default_includes
                ],
            }
            for template in list_templates()
        ],
        "target_modes": [
            {"value": value, "label": label, "description": description}
            for value, label, description in TARGET_MODES
        ],
        "include_options": [
            {"value": field.value, "label": label, "description": description}
            for field, (label, description) in INCLUDE_OPTIONS.items()
        ],
        "notification_types": list(NOTIFICATION_TYPES),
        "context": {
            "roles": list(USER_ROLES),
            "users": [
                {"value": user.id, "label": user.name, "role": user.role}
                for user in active_users
            ],
            "groups": [
                {
                    "value": group.id,
                    "label": group.title,
                    "program": group.program,
                    "term": group.term,
                }
                for group in groups
            ],
            "schedules": [
                {
                    "value": schedule.id,
                    "label": _schedule_label(schedule.scheduled_at, schedule.room),
                    "scheduled_at": schedule.scheduled_at,
                    "room": schedule.room,
                    "group_id": schedule.group_id,
                    "group_title": group_titles.get(schedule.group_id),
                }
                for schedule in schedules
            ],
            "evaluations": [
                {
                    "value": evaluation.id,
                    "label": _evaluation_label(
                        evaluation.status, user_names.get(evaluation.evaluator_id)
                    ),
                    "status": evaluation.status,
                    "schedule_id": evaluation.schedule_id,
                    "evaluator_id": evaluation.evaluator_id,
                    "evaluator_name": user_names.get(evaluation.evaluator_id),
                }
                for evaluation in evaluations
            ],
        },
    }


def _schedule_label(scheduled_at, room: str | None) -> str:
    when = format_schedule_datetime(scheduled_at) or ""
    return f"{when} • {room}" if room else when


def _evaluation_label(status: str, evaluator_name: str | None) -> str:
    label = status.replace("_", " ").title()
    return f"{label} • {evaluator_name}" if evaluator_name else label


__all__ = ["list_automation_options"]
