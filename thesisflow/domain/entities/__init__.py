"""Domain entities exposed by the application."""

from .defense_schedule import DefenseSchedule
from .dispatch import (
    AutomaticNotificationResult,
    DispatchResult,
    NotificationContent,
    NotificationDetail,
    PersistResult,
    ResolvedContext,
)
from .evaluation import Evaluation
from .notification import Notification
from .notification_template import ContextKey, IncludeField, NotificationTemplate
from .push_subscription import DEFAULT_CONTENT_ENCODING, PushSubscription
from .target import (
    TARGET_MODES,
    GroupTarget,
    RoleTarget,
    ScheduleTarget,
    TargetDescriptor,
    UsersTarget,
)
from .thesis_group import ThesisGroup
from .user import USER_ROLES, USER_STATUS_ACTIVE, USER_STATUS_DISABLED, User

__all__ = [
    "AutomaticNotificationResult",
    "ContextKey",
    "DEFAULT_CONTENT_ENCODING",
    "DefenseSchedule",
    "DispatchResult",
    "Evaluation",
    "GroupTarget",
    "IncludeField",
    "Notification",
    "NotificationContent",
    "NotificationDetail",
    "NotificationTemplate",
    "PersistResult",
    "PushSubscription",
    "ResolvedContext",
    "RoleTarget",
    "ScheduleTarget",
    "TARGET_MODES",
    "TargetDescriptor",
    "ThesisGroup",
    "USER_ROLES",
    "USER_STATUS_ACTIVE",
    "USER_STATUS_DISABLED",
    "User",
    "UsersTarget",
]
