from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEntry


class AttendanceRepository(Protocol):
    def list_for_members(self, *, member_ids: Sequence[int], start: date, end: date) -> Sequence[AttendanceEntry]:
        """Rows for ``member_ids`` with ``start <= date <= end``."""
        raise NotImplementedError

    def upsert(self, *, member_id: int, date: str, status: AttendanceStatus) -> None:
        """Insert or replace the row keyed on (member_id, date)."""
        raise NotImplementedError

    def delete_for_member(self, member_id: int) -> int:
        raise NotImplementedError
