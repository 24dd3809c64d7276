"""Shared fixtures: a throwaway SQLite database and a seeded thesis defense."""

from __future__ import annotations

import os
import sys
import tempfile
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "thesisflow_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "Asia/Manila"
os.environ["VAPID_PUBLIC_KEY"] = ""
os.environ["VAPID_PRIVATE_KEY"] = ""

from thesisflow.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from thesisflow.domain.errors import PushGoneError, PushProviderError  # noqa: E402
from thesisflow.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from thesisflow.infrastructure.models import (  # noqa: E402
    DefenseScheduleModel,
    EvaluationModel,
    GroupMemberModel,
    PushSubscriptionModel,
    SchedulePanelistModel,
    ThesisGroupModel,
    UserModel,
)
from thesisflow.domain.entities import USER_STATUS_DISABLED  # noqa: E402
from thesisflow.infrastructure.repositories import UserRepository  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@dataclass(frozen=True)
class Seed:
    admin_id: int
    staff_id: int
    adviser_id: int
    student_ids: tuple[int, int]
    disabled_student_id: int
    panelist_id: int
    outsider_id: int
    group_id: int
    schedule_id: int
    evaluation_id: int


def _add_user(db, name: str, email: str, role: str, status: str = "active") -> int:
    user = UserModel(name=name, email=email, role=role, status=status)
    db.add(user)
    db.flush()
    return user.id


@pytest.fixture()
def seed(session) -> Seed:
    """One thesis group with a scheduled defense and a submitted evaluation.

    The group has two active students and one disabled student; the defense
    has one panelist and was created by a staff member.
    """

    admin_id = _add_user(session, "Ada Santos", "admin@example.edu", "admin")
    staff_id = _add_user(session, "Sam Reyes", "staff@example.edu", "staff")
    adviser_id = _add_user(session, "Dr. Lorna Cruz", "adviser@example.edu", "staff")
    ana_id = _add_user(session, "Ana Dizon", "ana@example.edu", "student")
    ben_id = _add_user(session, "Ben Lim", "ben@example.edu", "student")
    cara_id = _add_user(
        session, "Cara Uy", "cara@example.edu", "student", status=USER_STATUS_DISABLED
    )
    panelist_id = _add_user(session, "Prof. Miguel Tan", "tan@example.edu", "panelist")
    outsider_id = _add_user(session, "Dan Sy", "dan@example.edu", "student")

    group = ThesisGroupModel(
        title="Smart Irrigation Using IoT",
        program="BSIT",
        term="2024-2025 1st Semester",
        adviser_id=adviser_id,
    )
    session.add(group)
    session.flush()
    for student_id in (ana_id, ben_id, cara_id):
        session.add(GroupMemberModel(group_id=group.id, student_id=student_id))

    schedule = DefenseScheduleModel(
        group_id=group.id,
        scheduled_at=datetime(2025, 3, 14, 9, 30),
        room="Room 301",
        status="scheduled",
        created_by=staff_id,
    )
    session.add(schedule)
    session.flush()
    session.add(SchedulePanelistModel(schedule_id=schedule.id, staff_id=panelist_id))

    evaluation = EvaluationModel(
        schedule_id=schedule.id, evaluator_id=panelist_id, status="submitted"
    )
    session.add(evaluation)
    session.commit()

    return Seed(
        admin_id=admin_id,
        staff_id=staff_id,
        adviser_id=adviser_id,
        student_ids=(ana_id, ben_id),
        disabled_student_id=cara_id,
        panelist_id=panelist_id,
        outsider_id=outsider_id,
        group_id=group.id,
        schedule_id=schedule.id,
        evaluation_id=evaluation.id,
    )


@pytest.fixture()
def admin(session, seed):
    return UserRepository(session).get(seed.admin_id)


@pytest.fixture()
def staff(session, seed):
    return UserRepository(session).get(seed.staff_id)


def add_push_subscription(db, user_id: int, endpoint: str) -> int:
    now = datetime(2025, 3, 1, 8, 0)
    model = PushSubscriptionModel(
        user_id=user_id,
        endpoint=endpoint,
        p256dh="BNcRdreALRFXTkOOUHK1EtK2wtaz5Ry4YfYCA_0QTpQtUbVlUls0VJXg7A8u-Ts1XbjhazAkj7I99e8QcYP7DkM",
        auth="tBHItJI5svbpez7KI4CCXg",
        content_encoding="aes128gcm",
        created_at=now,
        updated_at=now,
    )
    db.add(model)
    db.commit()
    return model.id


class FakePushProvider:
    """In-process push provider that records deliveries.

    Endpoints listed in ``gone`` raise :class:`PushGoneError`; endpoints in
    ``failing`` raise :class:`PushProviderError`.
    """

    def __init__(self, *, gone=(), failing=()) -> None:
        self.gone = set(gone)
        self.failing = set(failing)
        self.sent: list[tuple[str, dict]] = []
        self._lock = threading.Lock()

    def send(self, subscription, payload) -> None:
        if subscription.endpoint in self.gone:
            raise PushGoneError(subscription.endpoint)
        if subscription.endpoint in self.failing:
            raise PushProviderError("push service unavailable")
        with self._lock:
            self.sent.append((subscription.endpoint, payload))


@pytest.fixture()
def push_provider() -> FakePushProvider:
    return FakePushProvider()
