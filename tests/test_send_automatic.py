"""End-to-end tests for sending automatic notifications."""

from __future__ import annotations

from datetime import datetime

import pytest

from conftest import FakePushProvider, add_push_subscription
from thesisflow.application.use_cases.notifications import (
    PUSH_NOT_CONFIGURED,
    mark_notification_read,
    send_automatic_notification,
)
from thesisflow.application.use_cases.notifications.dispatch import SUBSCRIPTIONS_UNAVAILABLE
from thesisflow.domain.entities import RoleTarget, ScheduleTarget, UsersTarget
from thesisflow.domain.errors import (
    EmptyRecipientSetError,
    ForbiddenError,
    ValidationError,
)
from thesisflow.infrastructure.models import NotificationModel, PushSubscriptionModel
from thesisflow.infrastructure.repositories import (
    NotificationRepository,
    PushSubscriptionRepository,
    UserRepository,
)


def _notification_count(session) -> int:
    return session.query(NotificationModel).count()


def test_schedule_update_reaches_students_and_panelists(session, seed, staff) -> None:
    sent_at = datetime(2025, 3, 10, 14, 0)

    result = send_automatic_notification(
        session,
        actor=staff,
        template_id="defense_schedule_updated",
        target=ScheduleTarget(schedule_id=seed.schedule_id),
        context_ids={"schedule_id": seed.schedule_id},
        created_at=sent_at,
    )

    assert result.recipient_count == 3
    assert result.persisted.recipient_ids == sorted([*seed.student_ids, seed.panelist_id])
    assert result.target_mode == "schedule"
    assert result.dispatch.enabled is False
    assert result.dispatch.reason == PUSH_NOT_CONFIGURED

    records = session.query(NotificationModel).order_by(NotificationModel.user_id).all()
    assert len(records) == 3
    assert {record.title for record in records} == {"Defense schedule update"}
    assert len({record.body for record in records}) == 1
    body = records[0].body
    assert "Mar 14, 2025 09:30 AM" in body
    assert "Room 301" in body
    assert "Smart Irrigation Using IoT" in body
    for record in records:
        assert record.type == "defense_schedule_updated"
        assert record.created_at == sent_at
        assert record.read_at is None
        assert record.data["template"] == "defense_schedule_updated"
        assert record.data["schedule_id"] == seed.schedule_id
        assert record.data["group_id"] == seed.group_id
        assert record.data["sent_by"] == seed.staff_id


def test_missing_required_context_creates_nothing(session, seed, staff) -> None:
    with pytest.raises(ValidationError, match="missing required context: evaluation_id"):
        send_automatic_notification(
            session,
            actor=staff,
            template_id="evaluation_submitted",
            target=UsersTarget(ids=frozenset(seed.student_ids)),
        )

    assert _notification_count(session) == 0


def test_type_override_and_include_selection(session, seed, staff) -> None:
    result = send_automatic_notification(
        session,
        actor=staff,
        template_id="evaluation_locked",
        target=UsersTarget(ids=frozenset({seed.outsider_id})),
        context_ids={"evaluation_id": seed.evaluation_id},
        include_fields=["evaluator_name", "schedule_room"],
        notification_type="general",
    )

    record = NotificationRepository(session).get(result.persisted.created_notification_ids[0])
    assert record.type == "general"
    assert record.body == (
        "The evaluation has been finalized and is now locked for edits."
        " • Room: Room 301 • Evaluator: Prof. Miguel Tan"
    )
    assert record.data["include_fields"] == ["schedule_room", "evaluator_name"]


def test_failure_on_second_insert_rolls_back_everything(
    session, seed, staff, monkeypatch
) -> None:
    original = NotificationRepository._to_model
    calls = {"count": 0}

    def flaky_to_model(notification):
        calls["count"] += 1
        if calls["count"] == 2:
            raise RuntimeError("database unavailable")
        return original(notification)

    monkeypatch.setattr(NotificationRepository, "_to_model", staticmethod(flaky_to_model))
    provider = FakePushProvider()
    add_push_subscription(session, seed.student_ids[0], "https://push.example.com/ana")

    with pytest.raises(RuntimeError):
        send_automatic_notification(
            session,
            actor=staff,
            template_id="general_update",
            target=UsersTarget(ids=frozenset(seed.student_ids)),
            push_provider=provider,
        )

    assert _notification_count(session) == 0
    assert provider.sent == []


def test_gone_subscription_is_pruned_without_touching_records(session, seed, staff) -> None:
    ana_id, ben_id = seed.student_ids
    add_push_subscription(session, ana_id, "https://push.example.com/ana")
    add_push_subscription(session, ben_id, "https://push.example.com/ben")
    provider = FakePushProvider(gone={"https://push.example.com/ana"})

    result = send_automatic_notification(
        session,
        actor=staff,
        template_id="general_update",
        target=UsersTarget(ids=frozenset(seed.student_ids)),
        push_provider=provider,
    )

    assert result.dispatch.enabled is True
    assert result.dispatch.total_subscriptions == 2
    assert (result.dispatch.sent, result.dispatch.removed, result.dispatch.failed) == (1, 1, 0)
    endpoints = [row.endpoint for row in session.query(PushSubscriptionModel).all()]
    assert endpoints == ["https://push.example.com/ben"]
    assert _notification_count(session) == 2
    assert all(row.read_at is None for row in session.query(NotificationModel).all())

    (endpoint, payload), = provider.sent
    assert endpoint == "https://push.example.com/ben"
    assert payload["title"] == "General announcement"
    assert payload["tag"] == "thesis-notification-general"
    assert payload["url"] == "/dashboard/notifications"
    ben_record = NotificationRepository(session).list_for_user(ben_id)[0]
    assert payload["data"]["notificationId"] == ben_record.id


def test_failed_push_keeps_subscription(session, seed, staff) -> None:
    add_push_subscription(session, seed.outsider_id, "https://push.example.com/dan")
    provider = FakePushProvider(failing={"https://push.example.com/dan"})

    result = send_automatic_notification(
        session,
        actor=staff,
        template_id="general_update",
        target=UsersTarget(ids=frozenset({seed.outsider_id})),
        push_provider=provider,
    )

    assert (result.dispatch.sent, result.dispatch.removed, result.dispatch.failed) == (0, 0, 1)
    assert session.query(PushSubscriptionModel).count() == 1
    assert _notification_count(session) == 1


def test_only_admins_can_target_a_role(session, seed, staff, admin) -> None:
    with pytest.raises(ForbiddenError):
        send_automatic_notification(
            session,
            actor=staff,
            template_id="general_update",
            target=RoleTarget(role="student"),
        )

    result = send_automatic_notification(
        session,
        actor=admin,
        template_id="general_update",
        target=RoleTarget(role="student"),
    )
    assert result.recipient_count == 3


def test_students_cannot_send(session, seed) -> None:
    student = UserRepository(session).get(seed.outsider_id)

    with pytest.raises(ForbiddenError):
        send_automatic_notification(
            session,
            actor=student,
            template_id="general_update",
            target=UsersTarget(ids=frozenset(seed.student_ids)),
        )
    assert _notification_count(session) == 0


def test_empty_recipient_set_creates_nothing(session, seed, staff) -> None:
    with pytest.raises(EmptyRecipientSetError):
        send_automatic_notification(
            session,
            actor=staff,
            template_id="general_update",
            target=UsersTarget(ids=frozenset({seed.disabled_student_id})),
        )

    assert _notification_count(session) == 0


def test_failed_prune_does_not_stop_other_prunes(session, seed, staff, monkeypatch) -> None:
    ana_id, ben_id = seed.student_ids
    add_push_subscription(session, ana_id, "https://push.example.com/ana")
    add_push_subscription(session, ben_id, "https://push.example.com/ben")
    provider = FakePushProvider(
        gone={"https://push.example.com/ana", "https://push.example.com/ben"}
    )
    original = PushSubscriptionRepository.delete_by_endpoint
    attempts: list[str] = []

    def flaky_delete(self, endpoint, *, user_id=None):
        attempts.append(endpoint)
        if len(attempts) == 1:
            raise RuntimeError("deadlock detected")
        return original(self, endpoint, user_id=user_id)

    monkeypatch.setattr(PushSubscriptionRepository, "delete_by_endpoint", flaky_delete)

    result = send_automatic_notification(
        session,
        actor=staff,
        template_id="general_update",
        target=UsersTarget(ids=frozenset(seed.student_ids)),
        push_provider=provider,
    )

    assert attempts == ["https://push.example.com/ana", "https://push.example.com/ben"]
    assert (result.dispatch.sent, result.dispatch.removed, result.dispatch.failed) == (0, 1, 1)
    assert _notification_count(session) == 2
    endpoints = [row.endpoint for row in session.query(PushSubscriptionModel).all()]
    assert endpoints == ["https://push.example.com/ana"]


def test_subscription_lookup_failure_keeps_records(session, seed, staff, monkeypatch) -> None:
    def broken_lookup(self, user_ids):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(PushSubscriptionRepository, "list_by_users", broken_lookup)
    provider = FakePushProvider()

    result = send_automatic_notification(
        session,
        actor=staff,
        template_id="general_update",
        target=UsersTarget(ids=frozenset(seed.student_ids)),
        push_provider=provider,
    )

    assert result.recipient_count == 2
    assert result.dispatch.enabled is True
    assert result.dispatch.reason == SUBSCRIPTIONS_UNAVAILABLE
    assert provider.sent == []
    assert _notification_count(session) == 2


def test_unknown_user_ids_are_skipped(session, seed, staff) -> None:
    result = send_automatic_notification(
        session,
        actor=staff,
        template_id="general_update",
        target=UsersTarget(ids=frozenset({seed.outsider_id, 999999})),
    )

    assert result.persisted.recipient_ids == [seed.outsider_id]
    outsider = UserRepository(session).get(seed.outsider_id)
    (notification_id,) = result.persisted.created_notification_ids
    marked = mark_notification_read(session, actor=outsider, notification_id=notification_id)
    assert marked.read_at is not None
