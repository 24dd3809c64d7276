"""Value objects describing automatic notification templates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ContextKey(str, Enum):
    """Domain entity a notification can be *about*."""

    EVALUATION_ID = "evaluation_id"
    SCHEDULE_ID = "schedule_id"
    GROUP_ID = "group_id"


class IncludeField(str, Enum):
    """Optional piece of context that can be rendered into a notification.

    Declaration order is the canonical order of the rendered details.
    """

    GROUP_TITLE = "group_title"
    SCHEDULE_DATETIME = "schedule_datetime"
    SCHEDULE_ROOM = "schedule_room"
    EVALUATOR_NAME = "evaluator_name"
    EVALUATION_STATUS = "evaluation_status"
    STUDENT_COUNT = "student_count"
    PROGRAM = "program"
    TERM = "term"


@dataclass(frozen=True)
class NotificationTemplate:
    """Immutable definition of an automatic notification."""

    id: str
    label: str
    description: str
    default_type: str
    required_context: frozenset[ContextKey]
    allowed_includes: frozenset[IncludeField]
    default_includes: frozenset[IncludeField]

    def allows(self, include: IncludeField) -> bool:
        return include in self.allowed_includes


__all__ = ["ContextKey", "IncludeField", "NotificationTemplate"]
