"""Domain entity representing a scheduled thesis defense."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class DefenseSchedule:
    """When and where a group defends, and who sits on the panel."""

    id: int | None
    group_id: int
    scheduled_at: datetime
    room: str | None = None
    status: str = "scheduled"
    created_by: int | None = None
    panelist_ids: list[int] = field(default_factory=list)


__all__ = ["DefenseSchedule"]
