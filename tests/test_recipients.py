"""Tests for turning target descriptors into recipient ids."""

from __future__ import annotations

import pytest

from thesisflow.application.use_cases.notifications.recipients import resolve_recipients
from thesisflow.domain.entities import GroupTarget, RoleTarget, ScheduleTarget, UsersTarget
from thesisflow.domain.errors import EmptyRecipientSetError, NotFoundError, ValidationError
from thesisflow.infrastructure.models import GroupMemberModel


def test_group_target_excludes_disabled_students(session, seed) -> None:
    recipients = resolve_recipients(session, GroupTarget(group_id=seed.group_id))

    assert recipients == sorted([seed.adviser_id, *seed.student_ids])
    assert seed.disabled_student_id not in recipients


def test_group_target_deduplicates_adviser_listed_as_member(session, seed) -> None:
    session.add(GroupMemberModel(group_id=seed.group_id, student_id=seed.adviser_id))
    session.commit()

    recipients = resolve_recipients(session, GroupTarget(group_id=seed.group_id))

    assert recipients == sorted([seed.adviser_id, *seed.student_ids])


def test_group_target_can_skip_the_adviser(session, seed) -> None:
    target = GroupTarget(group_id=seed.group_id, include_adviser=False)

    assert resolve_recipients(session, target) == sorted(seed.student_ids)


def test_unknown_group_raises_not_found(session, seed) -> None:
    with pytest.raises(NotFoundError):
        resolve_recipients(session, GroupTarget(group_id=999))


def test_schedule_target_defaults_to_students_and_panelists(session, seed) -> None:
    recipients = resolve_recipients(session, ScheduleTarget(schedule_id=seed.schedule_id))

    assert recipients == sorted([*seed.student_ids, seed.panelist_id])


def test_schedule_target_can_include_the_creator(session, seed) -> None:
    target = ScheduleTarget(
        schedule_id=seed.schedule_id,
        include_students=False,
        include_panelists=False,
        include_creator=True,
    )

    assert resolve_recipients(session, target) == [seed.staff_id]


def test_unknown_schedule_raises_not_found(session, seed) -> None:
    with pytest.raises(NotFoundError):
        resolve_recipients(session, ScheduleTarget(schedule_id=404))


def test_role_target_lists_active_users(session, seed) -> None:
    recipients = resolve_recipients(session, RoleTarget(role="student"))

    assert recipients == sorted([*seed.student_ids, seed.outsider_id])


def test_unknown_role_is_rejected(session, seed) -> None:
    with pytest.raises(ValidationError):
        resolve_recipients(session, RoleTarget(role="dean"))


def test_users_target_drops_disabled_users(session, seed) -> None:
    target = UsersTarget(ids=frozenset({seed.outsider_id, seed.disabled_student_id}))

    assert resolve_recipients(session, target) == [seed.outsider_id]


def test_only_disabled_users_yields_empty_recipient_set(session, seed) -> None:
    with pytest.raises(EmptyRecipientSetError):
        resolve_recipients(session, UsersTarget(ids=frozenset({seed.disabled_student_id})))


def test_users_target_drops_ids_missing_from_directory(session, seed) -> None:
    target = UsersTarget(ids=frozenset({seed.outsider_id, 999999}))

    assert resolve_recipients(session, target) == [seed.outsider_id]


def test_only_unknown_ids_yields_empty_recipient_set(session, seed) -> None:
    with pytest.raises(EmptyRecipientSetError):
        resolve_recipients(session, UsersTarget(ids=frozenset({999998, 999999})))
