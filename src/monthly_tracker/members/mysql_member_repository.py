from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Member
from .repository import MemberRepository


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name FROM members ORDER BY id")
            rows = fetchall(cur)
            return [Member(id=int(r["id"]), name=r["name"]) for r in rows]

    def insert(self, *, name: str) -> Member:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO members(name) VALUES(%s)", (name,))
            return Member(id=int(cur.lastrowid), name=name)

    def update_name(self, *, member_id: int, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE members SET name=%s WHERE id=%s", (name, int(member_id)))
            return cur.rowcount > 0

    def delete_by_id(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM members WHERE id=%s", (int(member_id),))
            return cur.rowcount > 0
