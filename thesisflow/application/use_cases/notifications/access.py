"""Authorization rules for notification operations."""

from __future__ import annotations

from thesisflow.domain.entities import RoleTarget, TargetDescriptor, User
from thesisflow.domain.errors import ForbiddenError

SENDER_ROLES = frozenset({"admin", "staff"})


def ensure_can_send(actor: User, target: TargetDescriptor) -> None:
    """Only staff and administrators send; only administrators target a role."""

    if not actor.is_active or actor.role not in SENDER_ROLES:
        raise ForbiddenError("only staff and administrators can send automatic notifications")
    if isinstance(target, RoleTarget) and not actor.is_admin():
        raise ForbiddenError("only administrators can notify an entire role")


def ensure_can_configure(actor: User) -> None:
    if not actor.is_active or actor.role not in SENDER_ROLES:
        raise ForbiddenError("only staff and administrators can configure automatic notifications")


def ensure_owner_or_admin(actor: User, owner_id: int) -> None:
    if actor.id != owner_id and not actor.is_admin():
        raise ForbiddenError("notifications belong to another user")


__all__ = ["SENDER_ROLES", "ensure_can_configure", "ensure_can_send", "ensure_owner_or_admin"]
