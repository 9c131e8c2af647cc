from __future__ import annotations

from enum import Enum
from typing import Optional

from .constants import ADMIN_ROLE


class Capability(str, Enum):
    """Permission level resolved once per session."""

    ADMIN = "admin"
    MEMBER = "member"
    GUEST = "guest"

    @classmethod
    def from_role(cls, role: Optional[str]) -> "Capability":
        if role is None or not str(role).strip():
            return cls.GUEST
        if str(role).strip() == ADMIN_ROLE:
            return cls.ADMIN
        return cls.MEMBER

    @property
    def can_edit(self) -> bool:
        return self is Capability.ADMIN


class AttendanceStatus(str, Enum):
    """Attendance value stored per (member, training date)."""

    PRESENT = "Present"
    PENDING = "Pending"


class FeeStatus(str, Enum):
    """Fee value stored per (member, month)."""

    PAID = "paid"
    UNPAID = "unpaid"
