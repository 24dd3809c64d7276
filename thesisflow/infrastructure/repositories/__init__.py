"""Repository implementations for infrastructure layer."""

from .defense_schedule_repository import DefenseScheduleRepository
from .evaluation_repository import EvaluationRepository
from .notification_repository import NotificationRepository
from .push_subscription_repository import PushSubscriptionRepository
from .thesis_group_repository import ThesisGroupRepository
from .user_repository import UserRepository

__all__ = [
    "DefenseScheduleRepository",
    "EvaluationRepository",
    "NotificationRepository",
    "PushSubscriptionRepository",
    "ThesisGroupRepository",
    "UserRepository",
]
