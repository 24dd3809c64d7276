"""Catalog of automatic notification templates.

The catalog is built once at import time and never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType
from typing import Mapping

from thesisflow.domain.entities import ContextKey, IncludeField, NotificationTemplate
from thesisflow.domain.errors import NotFoundError, ValidationError

NOTIFICATION_TYPES: tuple[str, ...] = (
    "general",
    "evaluation_submitted",
    "evaluation_locked",
    "defense_schedule_updated",
)

INCLUDE_OPTIONS: Mapping[IncludeField, tuple[str, str]] = MappingProxyType(
    {
        IncludeField.GROUP_TITLE: ("Thesis group", "Title of the thesis group."),
        IncludeField.SCHEDULE_DATETIME: ("Schedule", "Date and time of the defense."),
        IncludeField.SCHEDULE_ROOM: ("Room", "Venue of the defense."),
        IncludeField.EVALUATOR_NAME: ("Evaluator", "Panelist who filed the evaluation."),
        IncludeField.EVALUATION_STATUS: ("Evaluation status", "Current evaluation status."),
        IncludeField.STUDENT_COUNT: ("Students", "Number of students in the group."),
        IncludeField.PROGRAM: ("Program", "Academic program of the group."),
        IncludeField.TERM: ("Term", "Academic term of the group."),
    }
)

_EVALUATION_INCLUDES = frozenset(
    {
        IncludeField.GROUP_TITLE,
        IncludeField.SCHEDULE_DATETIME,
        IncludeField.SCHEDULE_ROOM,
        IncludeField.EVALUATOR_NAME,
        IncludeField.EVALUATION_STATUS,
        IncludeField.PROGRAM,
        IncludeField.TERM,
    }
)

_TEMPLATES: tuple[NotificationTemplate, ...] = (
    NotificationTemplate(
        id="evaluation_submitted",
        label="Evaluation submitted",
        description="Announce that a panelist submitted an evaluation.",
        default_type="evaluation_submitted",
        required_context=frozenset({ContextKey.EVALUATION_ID}),
        allowed_includes=_EVALUATION_INCLUDES,
        default_includes=frozenset(
            {
                IncludeField.GROUP_TITLE,
                IncludeField.EVALUATOR_NAME,
                IncludeField.EVALUATION_STATUS,
            }
        ),
    ),
    NotificationTemplate(
        id="evaluation_locked",
        label="Evaluation finalized",
        description="Announce that an evaluation was locked and can no longer change.",
        default_type="evaluation_locked",
        required_context=frozenset({ContextKey.EVALUATION_ID}),
        allowed_includes=_EVALUATION_INCLUDES,
        default_includes=frozenset(
            {IncludeField.GROUP_TITLE, IncludeField.EVALUATION_STATUS}
        ),
    ),
    NotificationTemplate(
        id="defense_schedule_updated",
        label="Defense schedule updated",
        description="Share the latest date, time and room of a thesis defense.",
        default_type="defense_schedule_updated",
        required_context=frozenset({ContextKey.SCHEDULE_ID}),
        allowed_includes=frozenset(
            {
                IncludeField.GROUP_TITLE,
                IncludeField.SCHEDULE_DATETIME,
                IncludeField.SCHEDULE_ROOM,
                IncludeField.STUDENT_COUNT,
                IncludeField.PROGRAM,
                IncludeField.TERM,
            }
        ),
        default_includes=frozenset(
            {
                IncludeField.GROUP_TITLE,
                IncludeField.SCHEDULE_DATETIME,
                IncludeField.SCHEDULE_ROOM,
            }
        ),
    ),
    NotificationTemplate(
        id="general_update",
        label="General update",
        description="Free-form announcement with optional context details.",
        default_type="general",
        required_context=frozenset(),
        allowed_includes=frozenset(IncludeField),
        default_includes=frozenset(),
    ),
)

TEMPLATE_REGISTRY: Mapping[str, NotificationTemplate] = MappingProxyType(
    {template.id: template for template in _TEMPLATES}
)


def list_templates() -> list[NotificationTemplate]:
    """Return every template in catalog order."""

    return list(_TEMPLATES)


def get_template(template_id: str) -> NotificationTemplate:
    """Return the template identified by ``template_id`` or raise an error."""

    template = TEMPLATE_REGISTRY.get((template_id or "").strip())
    if template is None:
        raise NotFoundError(f"notification template not found: {template_id}")
    return template


def resolve_includes(
    template: NotificationTemplate,
    include_fields: Iterable[IncludeField | str] | None,
) -> tuple[IncludeField, ...]:
    """Validate the caller's include choice, defaulting to the template's.

    The result follows the canonical :class:`IncludeField` order.
    """

    if include_fields is None:
        chosen = set(template.default_includes)
    else:
        chosen = set()
        for raw in include_fields:
            try:
                include = IncludeField(raw)
            except ValueError as exc:
                raise ValidationError(f"unknown include field: {raw}") from exc
            if not template.allows(include):
                raise ValidationError("include field not allowed for template")
            chosen.add(include)
    return tuple(include for include in IncludeField if include in chosen)


def resolve_notification_type(
    template: NotificationTemplate, notification_type: str | None
) -> str:
    """Return the record type, honouring a valid caller override."""

    if notification_type is None or not notification_type.strip():
        return template.default_type
    normalized = notification_type.strip()
    if normalized not in NOTIFICATION_TYPES:
        raise ValidationError(
            f"invalid notification type. Allowed: {', '.join(NOTIFICATION_TYPES)}"
        )
    return normalized


__all__ = [
    "INCLUDE_OPTIONS",
    "NOTIFICATION_TYPES",
    "TEMPLATE_REGISTRY",
    "get_template",
    "list_templates",
    "resolve_includes",
    "resolve_notification_type",
]
