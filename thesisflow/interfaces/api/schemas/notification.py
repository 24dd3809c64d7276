"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from thesisflow.domain.entities import (
    GroupTarget,
    RoleTarget,
    ScheduleTarget,
    TargetDescriptor,
    UsersTarget,
)


class CamelModel(BaseModel):
    """Accept snake_case or camelCase input and emit camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    type: str
    title: str
    body: str
    data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    read_at: datetime | None = None


class UsersTargetIn(CamelModel):
    mode: Literal["users"]
    user_ids: list[int] = Field(default_factory=list, description="Selected user ids")

    def to_target(self) -> TargetDescriptor:
        return UsersTarget(ids=frozenset(self.user_ids))


class RoleTargetIn(CamelModel):
    mode: Literal["role"]
    role: str = Field(..., min_length=1)

    def to_target(self) -> TargetDescriptor:
        return RoleTarget(role=self.role)


class GroupTargetIn(CamelModel):
    mode: Literal["group"]
    group_id: int
    include_adviser: bool = True
    include_students: bool = True

    def to_target(self) -> TargetDescriptor:
        return GroupTarget(
            group_id=self.group_id,
            include_adviser=self.include_adviser,
            include_students=self.include_students,
        )


class ScheduleTargetIn(CamelModel):
    mode: Literal["schedule"]
    schedule_id: int
    include_students: bool = True
    include_panelists: bool = True
    include_creator: bool = False

    def to_target(self) -> TargetDescriptor:
        return ScheduleTarget(
            schedule_id=self.schedule_id,
            include_students=self.include_students,
            include_panelists=self.include_panelists,
            include_creator=self.include_creator,
        )


TargetIn = Annotated[
    Union[UsersTargetIn, RoleTargetIn, GroupTargetIn, ScheduleTargetIn],
    Field(discriminator="mode"),
]


class AutomaticNotificationRequest(CamelModel):
    """Payload used to send a template-driven notification."""

    template: str = Field(..., min_length=1)
    target: TargetIn
    context_ids: dict[str, int | None] = Field(default_factory=dict)
    include_fields: list[str] | None = Field(
        default=None, description="Detail fields to render; omitted means template defaults"
    )
    type: str | None = Field(default=None, description="Overrides the template's record type")


class DispatchResultRead(CamelModel):
    enabled: bool
    total_subscriptions: int = 0
    sent: int = 0
    failed: int = 0
    removed: int = 0
    reason: str | None = None


class AutomaticNotificationResponse(CamelModel):
    recipient_count: int
    recipient_ids: list[int]
    created_notification_ids: list[int]
    template: str
    target_mode: str
    title: str
    body: str
    dispatch: DispatchResultRead


class OptionRead(CamelModel):
    value: str
    label: str
    description: str


class TemplateOptionRead(OptionRead):
    default_type: str
    required_context: list[str]
    allowed_includes: list[str]
    default_includes: list[str]


class UserOptionRead(CamelModel):
    value: int
    label: str
    role: str


class GroupOptionRead(CamelModel):
    value: int
    label: str
    program: str | None = None
    term: str | None = None


class ScheduleOptionRead(CamelModel):
    value: int
    label: str
    scheduled_at: datetime | None = None
    room: str | None = None
    group_id: int
    group_title: str | None = None


class EvaluationOptionRead(CamelModel):
    value: int
    label: str
    status: str
    schedule_id: int
    evaluator_id: int
    evaluator_name: str | None = None


class AutomationContextRead(CamelModel):
    roles: list[str]
    users: list[UserOptionRead]
    groups: list[GroupOptionRead]
    schedules: list[ScheduleOptionRead]
    evaluations: list[EvaluationOptionRead]


class AutomationOptionsRead(CamelModel):
    templates: list[TemplateOptionRead]
    target_modes: list[OptionRead]
    include_options: list[OptionRead]
    notification_types: list[str]
    context: AutomationContextRead


class MarkAllReadResponse(CamelModel):
    updated_count: int = Field(..., ge=0, description="Number of records flipped to read")


class PushPublicKeyRead(CamelModel):
    enabled: bool
    public_key: str | None = None
    reason: str | None = None


class PushSubscriptionKeys(BaseModel):
    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)


class PushSubscriptionCreate(CamelModel):
    """Browser ``PushSubscription.toJSON()`` payload."""

    endpoint: str = Field(..., min_length=1)
    keys: PushSubscriptionKeys
    content_encoding: str | None = None
    expiration_time: int | None = None


class PushSubscriptionDelete(CamelModel):
    endpoint: str = Field(..., min_length=1)


class PushSubscriptionRead(CamelModel):
    id: int
    endpoint: str
    content_encoding: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "AutomaticNotificationRequest",
    "AutomaticNotificationResponse",
    "AutomationOptionsRead",
    "DispatchResultRead",
    "GroupTargetIn",
    "MarkAllReadResponse",
    "NotificationRead",
    "PushPublicKeyRead",
    "PushSubscriptionCreate",
    "PushSubscriptionDelete",
    "PushSubscriptionRead",
    "RoleTargetIn",
    "ScheduleTargetIn",
    "UsersTargetIn",
]
