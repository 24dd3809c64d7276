"""Domain entity representing a browser push subscription."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

DEFAULT_CONTENT_ENCODING = "aes128gcm"


@dataclass
class PushSubscription:
    """A Web Push endpoint registered by one of the user's browsers."""

    id: int | None
    user_id: int
    endpoint: str
    p256dh: str
    auth: str
    content_encoding: str | None = DEFAULT_CONTENT_ENCODING
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def subscription_info(self) -> dict[str, Any]:
        """Return the structure expected by Web Push libraries."""

        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }


__all__ = ["PushSubscription", "DEFAULT_CONTENT_ENCODING"]
