"""Web Push delivery helpers for the infrastructure layer."""

from .fanout import PushAttempt, PushFanout, PushOutcome, PushProvider
from .web_push import GONE_STATUS_CODES, WebPushProvider

__all__ = [
    "GONE_STATUS_CODES",
    "PushAttempt",
    "PushFanout",
    "PushOutcome",
    "PushProvider",
    "WebPushProvider",
]
