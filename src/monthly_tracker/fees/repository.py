from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import FeeStatus
from .model import FeeEntry


class FeeRepository(Protocol):
    def list_for_month(self, *, member_ids: Sequence[int], month: str) -> Sequence[FeeEntry]:
        """Rows for ``member_ids`` whose month equals ``month`` exactly."""
        raise NotImplementedError

    def upsert(self, *, member_id: int, month: str, status: FeeStatus) -> None:
        """Insert or replace the row keyed on (member_id, month)."""
        raise NotImplementedError

    def delete_for_member(self, member_id: int) -> int:
        raise NotImplementedError
