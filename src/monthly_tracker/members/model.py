from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Member:
    """Domain entity: a team member (the `members` table row)."""

    id: int
    name: str
