"""ORM models used by the application infrastructure."""

from .defense_schedule import DefenseScheduleModel, SchedulePanelistModel
from .evaluation import EvaluationModel
from .notification import NotificationModel
from .push_subscription import PushSubscriptionModel
from .thesis_group import GroupMemberModel, ThesisGroupModel
from .user import UserModel

__all__ = [
    "DefenseScheduleModel",
    "EvaluationModel",
    "GroupMemberModel",
    "NotificationModel",
    "PushSubscriptionModel",
    "SchedulePanelistModel",
    "ThesisGroupModel",
    "UserModel",
]
