from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Union

from ..common.datetime_utils import (
    add_months,
    date_key,
    first_day_of_month,
    last_day_of_month,
    thursdays_in_month,
    today_local,
)
from ..common.validators import clean_name
from ..common.write_sequencer import WriteSequencer
from ..core.enums import AttendanceStatus, Capability
from ..core.exceptions import DataProviderError
from ..fees.repository import FeeRepository
from ..members.deletion import MemberDeletion
from ..members.model import Member
from ..members.repository import MemberRepository
from .model import AttendanceMember, AttendanceRecord, attendance_status_of
from .repository import AttendanceRepository

_LOGGER = logging.getLogger(__name__)


class AttendanceGridViewModel:
    """Member x Thursday attendance grid for one month.

    Writes are optimistic: the roster is patched first and the remote call
    follows. A failed write that is still the latest for its cell triggers a
    reconciling reload; a failed write that has already been superseded only
    records the error. Mutations are no-ops unless ``capability`` is ADMIN.
    """

    def __init__(
        self,
        members: MemberRepository,
        attendance: AttendanceRepository,
        fees: FeeRepository,
        *,
        capability: Capability,
        month: Optional[date] = None,
        sequencer: Optional[WriteSequencer] = None,
    ):
        self._members = members
        self._attendance = attendance
        self._fees = fees
        self._sequencer = sequencer or WriteSequencer()

        self.capability = capability
        self.month = first_day_of_month(month or today_local())
        self.members: List[AttendanceMember] = []
        self.is_loading = True
        self.error: Optional[str] = None

        self.editing_member_id: Optional[int] = None
        self.editing_name = ""
        self.deletion = MemberDeletion()

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------

    @property
    def visible_dates(self) -> List[date]:
        return thursdays_in_month(self.month)

    @property
    def visible_date_keys(self) -> List[str]:
        return [date_key(d) for d in self.visible_dates]

    @property
    def totals(self) -> List[int]:
        """Present count per visible date, in the same order as ``visible_dates``."""
        return [
            sum(1 for m in self.members if attendance_status_of(m.attendance, key) == AttendanceStatus.PRESENT)
            for key in self.visible_date_keys
        ]

    def status_of(self, member_id: int, day: Union[date, str]) -> AttendanceStatus:
        member = self.find_member(member_id)
        if member is None:
            return AttendanceStatus.PENDING
        return attendance_status_of(member.attendance, _as_key(day))

    def find_member(self, member_id: int) -> Optional[AttendanceMember]:
        for m in self.members:
            if m.id == member_id:
                return m
        return None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, month: Optional[date] = None) -> bool:
        """Replace local state with the remote snapshot for the cursor month."""
        if month is not None:
            self.month = first_day_of_month(month)

        self.is_loading = True
        self.error = None
        start = first_day_of_month(self.month)
        end = last_day_of_month(self.month)

        try:
            roster = list(self._members.list_all())
        except DataProviderError as e:
            _LOGGER.error("Error fetching members: %s", e)
            self.error = (
                "Failed to fetch members. This could be a network issue or a problem "
                f"with database permissions. Message: {e}"
            )
            self.members = []
            self.is_loading = False
            return False

        by_member: dict[int, AttendanceRecord] = {}
        ok = True
        member_ids = [m.id for m in roster]
        if member_ids:
            try:
                entries = self._attendance.list_for_members(member_ids=member_ids, start=start, end=end)
            except DataProviderError as e:
                _LOGGER.error("Error fetching attendance: %s", e)
                self.error = f"Failed to fetch attendance data. Message: {e}"
                entries = []
                ok = False
            for entry in entries:
                by_member.setdefault(entry.member_id, {})[entry.date] = entry.status

        self.members = [
            AttendanceMember(id=m.id, name=m.name, attendance=by_member.get(m.id, {}))
            for m in roster
        ]
        self.is_loading = False
        _LOGGER.debug("Loaded %d members for %s", len(self.members), start.strftime("%Y-%m"))
        return ok

    def change_month(self, offset: int) -> None:
        self.month = add_months(self.month, offset)
        self.load()

    def _reconcile(self, message: str) -> None:
        reload_ok = self.load()
        if reload_ok or not self.error:
            self.error = message
        else:
            self.error = f"{message} {self.error}"

    # ------------------------------------------------------------------
    # Attendance
    # ------------------------------------------------------------------

    def toggle_attendance(self, member_id: int, day: Union[date, str]) -> Optional[AttendanceStatus]:
        """Flip Present/Pending for one cell. Returns the new status, or None."""
        if not self.capability.can_edit:
            return None
        member = self.find_member(member_id)
        if member is None:
            return None

        key = _as_key(day)
        current = attendance_status_of(member.attendance, key)
        new_status = AttendanceStatus.PENDING if current == AttendanceStatus.PRESENT else AttendanceStatus.PRESENT

        write_key = ("attendance", member.id, key)
        seq = self._sequencer.begin(write_key)
        member.attendance[key] = new_status

        try:
            self._attendance.upsert(member_id=member.id, date=key, status=new_status)
        except DataProviderError as e:
            _LOGGER.error("Error saving attendance for member %s on %s: %s", member.id, key, e)
            message = f"Failed to save attendance. Reverting changes. Message: {e}"
            if self._sequencer.finish(write_key, seq):
                self._reconcile(message)
            else:
                # A newer write for this cell owns the local value now.
                self.error = message
            return None

        self._sequencer.finish(write_key, seq)
        return new_status

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def add_member(self, name: str) -> Optional[Member]:
        """Insert remotely first (the id is server-assigned), then append locally."""
        if not self.capability.can_edit:
            return None
        name = clean_name(name)
        if not name:
            return None

        try:
            created = self._members.insert(name=name)
        except DataProviderError as e:
            _LOGGER.error("Error adding member: %s", e)
            self.error = f"Failed to add member. Message: {e}"
            return None

        row = AttendanceMember(id=created.id, name=created.name, attendance={})
        self.members = sorted([*self.members, row], key=lambda m: m.id)
        return created

    def start_edit(self, member_id: int) -> bool:
        if not self.capability.can_edit:
            return False
        member = self.find_member(member_id)
        if member is None:
            return False
        self.editing_member_id = member.id
        self.editing_name = member.name
        return True

    def cancel_edit(self) -> None:
        self.editing_member_id = None
        self.editing_name = ""

    def rename_member(self, member_id: int, new_name: str) -> bool:
        if not self.capability.can_edit:
            return False
        name = clean_name(new_name)
        if not name:
            return False
        member = self.find_member(member_id)
        if member is None:
            return False

        write_key = ("member", member.id)
        seq = self._sequencer.begin(write_key)
        member.name = name
        self.cancel_edit()

        try:
            # rowcount is 0 when the name is unchanged, so the result is not checked.
            self._members.update_name(member_id=member.id, name=name)
        except DataProviderError as e:
            _LOGGER.error("Error updating member name: %s", e)
            message = f"Failed to update name. Reverting. Message: {e}"
            if self._sequencer.finish(write_key, seq):
                self._reconcile(message)
            else:
                self.error = message
            return False

        self._sequencer.finish(write_key, seq)
        return True

    def request_delete(self, member_id: int) -> bool:
        """Stage a deletion. Nothing changes until ``confirm_delete``."""
        if not self.capability.can_edit:
            return False
        if self.find_member(member_id) is None:
            return False
        self.deletion.request(member_id)
        return True

    def cancel_delete(self) -> None:
        self.deletion.cancel()

    def confirm_delete(self) -> bool:
        """Delete the staged member's attendance, then fees, then the member row.

        The first failing step aborts the rest and the member stays in the
        local roster.
        """
        if not self.capability.can_edit:
            return False
        member_id = self.deletion.confirm()
        if member_id is None:
            return False

        try:
            self._attendance.delete_for_member(member_id)
            self._fees.delete_for_member(member_id)
            self._members.delete_by_id(member_id)
        except DataProviderError as e:
            _LOGGER.error("Error deleting member %s: %s", member_id, e)
            self.error = f"Failed to delete member. Message: {e}"
            return False
        finally:
            self.deletion.settle()

        self.members = [m for m in self.members if m.id != member_id]
        _LOGGER.info("Deleted member %s", member_id)
        return True


def _as_key(day: Union[date, str]) -> str:
    return day if isinstance(day, str) else date_key(day)
