from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from ..common.datetime_utils import add_months, first_day_of_month, month_key
from ..common.write_sequencer import WriteSequencer
from ..core.constants import FEE_EPOCH
from ..core.enums import Capability, FeeStatus
from ..core.exceptions import DataProviderError
from ..members.repository import MemberRepository
from .model import FeeMember, FeeTotals, fee_status_of
from .repository import FeeRepository

_LOGGER = logging.getLogger(__name__)


class FeeGridViewModel:
    """Paid/unpaid status per member for one month, bounded below by ``epoch``."""

    def __init__(
        self,
        members: MemberRepository,
        fees: FeeRepository,
        *,
        capability: Capability,
        month: Optional[date] = None,
        epoch: date = FEE_EPOCH,
        sequencer: Optional[WriteSequencer] = None,
    ):
        self._members = members
        self._fees = fees
        self._sequencer = sequencer or WriteSequencer()

        self.capability = capability
        self.epoch = first_day_of_month(epoch)
        self.month = max(first_day_of_month(month or self.epoch), self.epoch)
        self.members: List[FeeMember] = []
        self.is_loading = True
        self.error: Optional[str] = None

    @property
    def month_key(self) -> str:
        return month_key(self.month)

    @property
    def can_go_previous(self) -> bool:
        return self.month > self.epoch

    @property
    def totals(self) -> FeeTotals:
        paid = sum(1 for m in self.members if fee_status_of(m.fees, self.month_key) == FeeStatus.PAID)
        return FeeTotals(paid=paid, unpaid=len(self.members) - paid)

    def status_of(self, member_id: int) -> FeeStatus:
        member = self.find_member(member_id)
        if member is None:
            return FeeStatus.UNPAID
        return fee_status_of(member.fees, self.month_key)

    def find_member(self, member_id: int) -> Optional[FeeMember]:
        for m in self.members:
            if m.id == member_id:
                return m
        return None

    def load(self, month: Optional[date] = None) -> bool:
        if month is not None:
            self.month = max(first_day_of_month(month), self.epoch)

        self.is_loading = True
        self.error = None
        key = self.month_key

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

        statuses: dict[int, FeeStatus] = {}
        ok = True
        member_ids = [m.id for m in roster]
        if member_ids:
            try:
                for entry in self._fees.list_for_month(member_ids=member_ids, month=key):
                    statuses[entry.member_id] = entry.status
            except DataProviderError as e:
                _LOGGER.error("Error fetching fees: %s", e)
                self.error = _fee_fetch_message(e)
                ok = False

        self.members = [
            FeeMember(id=m.id, name=m.name, fees={key: statuses.get(m.id, FeeStatus.UNPAID)})
            for m in roster
        ]
        self.is_loading = False
        _LOGGER.debug("Loaded fees for %d members in %s", len(self.members), key)
        return ok

    def change_month(self, offset: int) -> bool:
        """Move the cursor. Moving before the epoch is rejected and returns False."""
        target = add_months(self.month, offset)
        if target < self.epoch:
            return False
        self.month = target
        self.load()
        return True

    def toggle_fee_status(self, member_id: int) -> Optional[FeeStatus]:
        if not self.capability.can_edit:
            return None
        member = self.find_member(member_id)
        if member is None:
            return None

        key = self.month_key
        current = fee_status_of(member.fees, key)
        new_status = FeeStatus.UNPAID if current == FeeStatus.PAID else FeeStatus.PAID

        write_key = ("fee", member.id, key)
        seq = self._sequencer.begin(write_key)
        member.fees[key] = new_status

        try:
            self._fees.upsert(member_id=member.id, month=key, status=new_status)
        except DataProviderError as e:
            _LOGGER.error("Error saving fee status for member %s in %s: %s", member.id, key, e)
            message = f"Failed to save fee status. Reverting changes. Message: {e}"
            if self._sequencer.finish(write_key, seq):
                reload_ok = self.load()
                self.error = message if reload_ok or not self.error else f"{message} {self.error}"
            else:
                self.error = message
            return None

        self._sequencer.finish(write_key, seq)
        return new_status


def _fee_fetch_message(err: Exception) -> str:
    text = str(err)
    if "fees" in text and ("doesn't exist" in text or "does not exist" in text):
        return 'Database error: The "fees" table does not exist. Please run the setup SQL script provided.'
    return f"Failed to fetch fee data. Message: {text}"
