from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: a sign-in account.

    Note: Accounts are separate from team members; ``role`` is the raw stored
    string and is only interpreted through Capability.from_role.
    """

    user_id: int
    email: str
    password_hash: str
    role: Optional[str]
    is_active: bool = True
