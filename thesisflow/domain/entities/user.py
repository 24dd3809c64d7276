"""Domain entity representing a user of the thesis system."""

from dataclasses import dataclass

USER_ROLES = ("student", "staff", "admin", "panelist")
USER_STATUS_ACTIVE = "active"
USER_STATUS_DISABLED = "disabled"


@dataclass
class User:
    """Directory entry for a student, staff member, panelist or administrator."""

    id: int | None
    name: str
    email: str
    role: str
    status: str = USER_STATUS_ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == USER_STATUS_ACTIVE

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role("admin")


__all__ = ["User", "USER_ROLES", "USER_STATUS_ACTIVE", "USER_STATUS_DISABLED"]
