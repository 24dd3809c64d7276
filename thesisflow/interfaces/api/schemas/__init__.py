from .notification import (
    AutomaticNotificationRequest,
    AutomaticNotificationResponse,
    AutomationOptionsRead,
    DispatchResultRead,
    MarkAllReadResponse,
    NotificationRead,
    PushPublicKeyRead,
    PushSubscriptionCreate,
    PushSubscriptionDelete,
    PushSubscriptionRead,
)

__all__ = [
    "AutomaticNotificationRequest",
    "AutomaticNotificationResponse",
    "AutomationOptionsRead",
    "DispatchResultRead",
    "MarkAllReadResponse",
    "NotificationRead",
    "PushPublicKeyRead",
    "PushSubscriptionCreate",
    "PushSubscriptionDelete",
    "PushSubscriptionRead",
]
