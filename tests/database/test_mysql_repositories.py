from __future__ import annotations

from datetime import date

from monthly_tracker.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from monthly_tracker.core.enums import AttendanceStatus, FeeStatus
from monthly_tracker.fees.mysql_fee_repository import MySQLFeeRepository


class FakeCursor:
    def __init__(self, rows):
        self.rows = rows
        self.executed = []
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def fetchall(self):
        return self.rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, rows):
        self.cur = FakeCursor(rows)
        self.committed = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, rows=()):
        self.rows = list(rows)
        self.connections = []

    def connect(self, with_database=True):
        conn = FakeConnection(self.rows)
        self.connections.append(conn)
        return conn


def test_attendance_rows_with_unknown_status_read_as_pending():
    factory = FakeConnFactory(
        [
            {"member_id": 1, "date": date(2024, 3, 7), "status": "Present"},
            {"member_id": 2, "date": date(2024, 3, 7), "status": "Absent"},
            {"member_id": 3, "date": "2024-03-14", "status": None},
        ]
    )
    repo = MySQLAttendanceRepository(factory)

    entries = repo.list_for_members(member_ids=[1, 2, 3], start=date(2024, 3, 1), end=date(2024, 3, 31))

    assert [(e.member_id, e.date, e.status) for e in entries] == [
        (1, "2024-03-07", AttendanceStatus.PRESENT),
        (2, "2024-03-07", AttendanceStatus.PENDING),
        (3, "2024-03-14", AttendanceStatus.PENDING),
    ]
    conn = factory.connections[0]
    assert conn.committed and conn.closed and conn.cur.closed
    _, params = conn.cur.executed[0]
    assert params == (1, 2, 3, date(2024, 3, 1), date(2024, 3, 31))


def test_fee_rows_with_unknown_status_read_as_unpaid():
    factory = FakeConnFactory(
        [
            {"member_id": 1, "month": date(2025, 7, 1), "status": "paid"},
            {"member_id": 2, "month": date(2025, 7, 1), "status": "refunded"},
        ]
    )
    repo = MySQLFeeRepository(factory)

    entries = repo.list_for_month(member_ids=[1, 2], month="2025-07-01")

    assert [(e.member_id, e.month, e.status) for e in entries] == [
        (1, "2025-07-01", FeeStatus.PAID),
        (2, "2025-07-01", FeeStatus.UNPAID),
    ]


def test_empty_member_ids_skip_the_query():
    factory = FakeConnFactory()

    assert MySQLAttendanceRepository(factory).list_for_members(
        member_ids=[], start=date(2024, 3, 1), end=date(2024, 3, 31)
    ) == []
    assert MySQLFeeRepository(factory).list_for_month(member_ids=[], month="2025-07-01") == []
    assert factory.connections == []
