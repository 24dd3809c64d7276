"""Web Push delivery through ``pywebpush``."""

from __future__ import annotations

import json
import logging
from typing import Any

from pywebpush import WebPushException, webpush
from requests import RequestException

from thesisflow.config import Settings, get_settings
from thesisflow.domain.entities import PushSubscription
from thesisflow.domain.errors import PushGoneError, PushProviderError

logger = logging.getLogger(__name__)

# Push services answer 404/410 for subscriptions that will never work again.
GONE_STATUS_CODES = frozenset({404, 410})


class WebPushProvider:
    """Send one encrypted payload to one subscription, signed with VAPID."""

    def __init__(
        self,
        *,
        vapid_private_key: str,
        vapid_subject: str,
        timeout: float,
        ttl: int,
    ) -> None:
        self._vapid_private_key = vapid_private_key
        self._vapid_subject = vapid_subject
        self._timeout = timeout
        self._ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "WebPushProvider | None":
        """Build a provider, or return ``None`` when VAPID keys are missing."""

        settings = settings or get_settings()
        if not settings.push_enabled:
            return None
        return cls(
            vapid_private_key=settings.vapid_private_key or "",
            vapid_subject=settings.vapid_subject,
            timeout=settings.push_timeout_seconds,
            ttl=settings.push_ttl_seconds,
        )

    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        """Deliver ``payload``.

        Raises:
            PushGoneError: the push service no longer knows the endpoint.
            PushProviderError: any other delivery failure, timeouts included.
        """

        try:
            webpush(
                subscription_info=subscription.subscription_info(),
                data=json.dumps(payload, separators=(",", ":")),
                content_encoding=subscription.content_encoding or "aes128gcm",
                vapid_private_key=self._vapid_private_key,
                # pywebpush mutates the claims dict; build a fresh one per call.
                vapid_claims={"sub": self._vapid_subject},
                ttl=self._ttl,
                timeout=self._timeout,
                headers={"Urgency": "high"},
            )
        except WebPushException as exc:
            response = getattr(exc, "response", None)
            status_code = getattr(response, "status_code", None)
            if status_code in GONE_STATUS_CODES:
                raise PushGoneError(subscription.endpoint) from exc
            raise PushProviderError(
                f"push service rejected delivery (status {status_code}): {exc}"
            ) from exc
        except RequestException as exc:
            raise PushProviderError(f"push request failed: {exc}") from exc


__all__ = ["WebPushProvider", "GONE_STATUS_CODES"]
