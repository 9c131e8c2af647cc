from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import month_key
from ..core.enums import FeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import FeeEntry, to_fee_status
from .repository import FeeRepository


class MySQLFeeRepository(FeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_month(self, *, member_ids: Sequence[int], month: str) -> Sequence[FeeEntry]:
        ids = [int(m) for m in member_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT member_id, month, status
                FROM fees
                WHERE member_id IN ({in_clause(ids)}) AND month=%s
                """,
                (*ids, month),
            )
            rows = fetchall(cur)
            return [
                FeeEntry(
                    member_id=int(r["member_id"]),
                    month=month_key(r["month"]) if isinstance(r["month"], date) else str(r["month"]),
                    status=to_fee_status(r["status"]),
                )
                for r in rows
            ]

    def upsert(self, *, member_id: int, month: str, status: FeeStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO fees(member_id, month, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (int(member_id), month, status.value),
            )

    def delete_for_member(self, member_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM fees WHERE member_id=%s", (int(member_id),))
            return int(cur.rowcount)
