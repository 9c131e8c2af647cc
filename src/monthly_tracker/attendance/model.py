from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from ..core.enums import AttendanceStatus

# ISO date key (YYYY-MM-DD) -> status. A missing key means Pending.
AttendanceRecord = Dict[str, AttendanceStatus]


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: one `attendance` row."""

    member_id: int
    date: str
    status: AttendanceStatus


@dataclass
class AttendanceMember:
    """Roster row held by the attendance grid."""

    id: int
    name: str
    attendance: AttendanceRecord = field(default_factory=dict)


def to_attendance_status(value: object) -> AttendanceStatus:
    """Only Present is Present; anything else, stored or not, is Pending."""
    if value == AttendanceStatus.PRESENT:
        return AttendanceStatus.PRESENT
    return AttendanceStatus.PENDING


def attendance_status_of(record: Mapping[str, object], key: str) -> AttendanceStatus:
    """Status at ``key``; absent or unrecognised values count as Pending."""
    return to_attendance_status(record.get(key))
