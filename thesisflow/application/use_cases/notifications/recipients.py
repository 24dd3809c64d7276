"""Resolve a target descriptor into the users that receive a notification."""

from __future__ import annotations

from sqlalchemy.orm import Session

from thesisflow.domain.entities import (
    USER_ROLES,
    GroupTarget,
    RoleTarget,
    ScheduleTarget,
    TargetDescriptor,
    ThesisGroup,
    UsersTarget,
)
from thesisflow.domain.errors import EmptyRecipientSetError, NotFoundError, ValidationError
from thesisflow.infrastructure.repositories import (
    DefenseScheduleRepository,
    ThesisGroupRepository,
    UserRepository,
)


def resolve_recipients(session: Session, target: TargetDescriptor) -> list[int]:
    """Return the sorted, deduplicated ids of active recipients.

    Disabled users and ids missing from the user directory are always
    excluded. An empty result raises :class:`EmptyRecipientSetError`.
    """

    users = UserRepository(session)

    if isinstance(target, UsersTarget):
        candidates = {int(user_id) for user_id in target.ids}
    elif isinstance(target, RoleTarget):
        role = target.role.strip().lower()
        if role not in USER_ROLES:
            raise ValidationError(f"unknown role: {target.role}")
        candidates = set(users.list_active_ids_by_role(role))
    elif isinstance(target, GroupTarget):
        group = ThesisGroupRepository(session).get(target.group_id)
        if group is None:
            raise NotFoundError(f"thesis group not found: {target.group_id}")
        candidates = _group_people(
            group,
            include_adviser=target.include_adviser,
            include_students=target.include_students,
        )
    elif isinstance(target, ScheduleTarget):
        candidates = _schedule_people(session, target)
    else:
        raise ValidationError(f"unsupported target: {target!r}")

    recipients = sorted(users.list_active_ids(candidates))
    if not recipients:
        raise EmptyRecipientSetError()
    return recipients


def _group_people(
    group: ThesisGroup, *, include_adviser: bool, include_students: bool
) -> set[int]:
    people: set[int] = set()
    if include_adviser and group.adviser_id is not None:
        people.add(group.adviser_id)
    if include_students:
        people.update(group.student_member_ids)
    return people


def _schedule_people(session: Session, target: ScheduleTarget) -> set[int]:
    schedule = DefenseScheduleRepository(session).get(target.schedule_id)
    if schedule is None:
        raise NotFoundError(f"defense schedule not found: {target.schedule_id}")

    people: set[int] = set()
    if target.include_students:
        group = ThesisGroupRepository(session).get(schedule.group_id)
        if group is not None:
            people.update(group.student_member_ids)
    if target.include_panelists:
        people.update(schedule.panelist_ids)
    if target.include_creator and schedule.created_by is not None:
        people.add(schedule.created_by)
    return people


__all__ = ["resolve_recipients"]
