"""Recipient targeting rules for automatic notifications.

A target descriptor is exactly one of the dataclasses below; the ``mode``
class attribute discriminates them on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class UsersTarget:
    """Explicitly selected users."""

    mode: ClassVar[str] = "users"

    ids: frozenset[int]


@dataclass(frozen=True)
class RoleTarget:
    """Every active user holding ``role``."""

    mode: ClassVar[str] = "role"

    role: str


@dataclass(frozen=True)
class GroupTarget:
    """People attached to a thesis group."""

    mode: ClassVar[str] = "group"

    group_id: int
    include_adviser: bool = True
    include_students: bool = True


@dataclass(frozen=True)
class ScheduleTarget:
    """People attached to a defense schedule."""

    mode: ClassVar[str] = "schedule"

    schedule_id: int
    include_students: bool = True
    include_panelists: bool = True
    include_creator: bool = False


TargetDescriptor = Union[UsersTarget, RoleTarget, GroupTarget, ScheduleTarget]

TARGET_MODES: tuple[tuple[str, str, str], ...] = (
    ("users", "Specific users", "Send to hand-picked users."),
    ("role", "Role", "Send to every active user with a role."),
    ("group", "Thesis group", "Send to the adviser and/or students of a group."),
    (
        "schedule",
        "Defense schedule",
        "Send to the students, panelists and/or creator of a defense schedule.",
    ),
)


__all__ = [
    "UsersTarget",
    "RoleTarget",
    "GroupTarget",
    "ScheduleTarget",
    "TargetDescriptor",
    "TARGET_MODES",
]
