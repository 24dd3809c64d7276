"""Bounded concurrent fan-out of push deliveries."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from thesisflow.domain.entities import PushSubscription
from thesisflow.domain.errors import PushGoneError, PushProviderError

logger = logging.getLogger(__name__)


class PushProvider(Protocol):
    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None: ...


class PushOutcome(str, Enum):
    SENT = "sent"
    GONE = "gone"
    FAILED = "failed"


@dataclass(frozen=True)
class PushAttempt:
    subscription: PushSubscription
    outcome: PushOutcome
    error: str | None = None


class PushFanout:
    """Run one push per subscription on a bounded thread pool.

    Worker threads only talk to the provider; callers apply the outcomes
    (such as pruning gone subscriptions) on their own thread.
    """

    def __init__(self, provider: PushProvider, *, max_workers: int = 8) -> None:
        self._provider = provider
        self._max_workers = max(1, max_workers)

    def deliver(
        self,
        subscriptions: Sequence[PushSubscription],
        build_payload: Callable[[PushSubscription], dict[str, Any]],
    ) -> list[PushAttempt]:
        if not subscriptions:
            return []
        workers = min(self._max_workers, len(subscriptions))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="push") as executor:
            futures = [
                executor.submit(self._attempt, subscription, build_payload(subscription))
                for subscription in subscriptions
            ]
            return [future.result() for future in futures]

    def _attempt(self, subscription: PushSubscription, payload: dict[str, Any]) -> PushAttempt:
        try:
            self._provider.send(subscription, payload)
        except PushGoneError as exc:
            return PushAttempt(subscription, PushOutcome.GONE, str(exc))
        except PushProviderError as exc:
            logger.warning(
                "Push delivery to subscription %s of user %s failed: %s",
                subscription.id,
                subscription.user_id,
                exc,
            )
            return PushAttempt(subscription, PushOutcome.FAILED, str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception(
                "Unexpected error pushing to subscription %s of user %s",
                subscription.id,
                subscription.user_id,
            )
            return PushAttempt(subscription, PushOutcome.FAILED, str(exc))
        return PushAttempt(subscription, PushOutcome.SENT)


__all__ = ["PushAttempt", "PushFanout", "PushOutcome", "PushProvider"]
