"""Value objects produced while rendering and dispatching notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .notification_template import ContextKey, IncludeField


@dataclass(frozen=True)
class ResolvedContext:
    """Flattened field values for one dispatch call.

    ``values`` only holds fields that could be resolved; ``entity_ids`` keeps
    the ids of the entities the notification is about.
    """

    values: Mapping[IncludeField, str] = field(default_factory=dict)
    entity_ids: Mapping[ContextKey, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "entity_ids", MappingProxyType(dict(self.entity_ids)))

    def get(self, include: IncludeField) -> str | None:
        return self.values.get(include)


@dataclass(frozen=True)
class NotificationDetail:
    label: str
    value: str


@dataclass(frozen=True)
class NotificationContent:
    """Rendered copy shared by every recipient of a dispatch."""

    title: str
    summary: str
    formal_subject: str
    formal_message: str
    details: tuple[NotificationDetail, ...] = ()

    @property
    def body(self) -> str:
        """Summary followed by ``• Label: value`` segments."""

        segments = [self.summary]
        segments.extend(f"{detail.label}: {detail.value}" for detail in self.details)
        return " • ".join(segments)


@dataclass
class PersistResult:
    """Outcome of the persistence phase."""

    created_notification_ids: list[int]
    recipient_ids: list[int]

    @property
    def recipient_count(self) -> int:
        return len(self.recipient_ids)


@dataclass
class DispatchResult:
    """Aggregated push fan-out outcome."""

    enabled: bool
    total_subscriptions: int = 0
    sent: int = 0
    failed: int = 0
    removed: int = 0
    reason: str | None = None


@dataclass
class AutomaticNotificationResult:
    """Everything returned to the caller of an automatic send."""

    template: str
    target_mode: str
    persisted: PersistResult
    dispatch: DispatchResult
    content: NotificationContent | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def recipient_count(self) -> int:
        return self.persisted.recipient_count


__all__ = [
    "ResolvedContext",
    "NotificationDetail",
    "NotificationContent",
    "PersistResult",
    "DispatchResult",
    "AutomaticNotificationResult",
]
