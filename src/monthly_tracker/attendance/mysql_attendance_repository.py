from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import date_key
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import AttendanceEntry, to_attendance_status
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_members(self, *, member_ids: Sequence[int], start: date, end: date) -> Sequence[AttendanceEntry]:
        ids = [int(m) for m in member_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT member_id, date, status
                FROM attendance
                WHERE member_id IN ({in_clause(ids)}) AND date BETWEEN %s AND %s
                """,
                (*ids, start, end),
            )
            rows = fetchall(cur)
            return [
                AttendanceEntry(
                    member_id=int(r["member_id"]),
                    date=date_key(r["date"]) if isinstance(r["date"], date) else str(r["date"]),
                    status=to_attendance_status(r["status"]),
                )
                for r in rows
            ]

    def upsert(self, *, member_id: int, date: str, status: AttendanceStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(member_id, date, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (int(member_id), date, status.value),
            )

    def delete_for_member(self, member_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE member_id=%s", (int(member_id),))
            return int(cur.rowcount)
