from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.view_model import AttendanceGridViewModel
from .core.constants import FEE_EPOCH
from .core.enums import Capability
from .database.connection import DatabaseConnection, DBConfig
from .fees.mysql_fee_repository import MySQLFeeRepository
from .fees.repository import FeeRepository
from .fees.view_model import FeeGridViewModel
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    members_repo: MemberRepository
    attendance_repo: AttendanceRepository
    fees_repo: FeeRepository
    users_repo: UserRepository

    auth_service: AuthService

    fee_epoch: date = FEE_EPOCH
    conn: Optional[DatabaseConnection] = None

    def attendance_grid(self, *, capability: Capability, month: Optional[date] = None) -> AttendanceGridViewModel:
        """A fresh view-model; each one keeps its own roster cache."""
        return AttendanceGridViewModel(
            self.members_repo,
            self.attendance_repo,
            self.fees_repo,
            capability=capability,
            month=month,
        )

    def fee_grid(self, *, capability: Capability, month: Optional[date] = None) -> FeeGridViewModel:
        return FeeGridViewModel(
            self.members_repo,
            self.fees_repo,
            capability=capability,
            month=month,
            epoch=self.fee_epoch,
        )


def build_container(*, db_config: dict, fee_epoch: date = FEE_EPOCH) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    members_repo = MySQLMemberRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    fees_repo = MySQLFeeRepository(conn)
    users_repo = MySQLUserRepository(conn)

    return Container(
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        fees_repo=fees_repo,
        users_repo=users_repo,
        auth_service=AuthService(users_repo),
        fee_epoch=fee_epoch,
        conn=conn,
    )
