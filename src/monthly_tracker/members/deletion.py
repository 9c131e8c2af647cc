from __future__ import annotations

from enum import Enum
from typing import Optional


class DeletionPhase(str, Enum):
    IDLE = "idle"
    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class MemberDeletion:
    """Two-phase delete: Idle -> PendingConfirmation(id) -> Confirmed | Cancelled -> Idle.

    Only the transitions live here. The caller performs the side effects
    between ``confirm()`` and ``settle()``.
    """

    def __init__(self):
        self._phase = DeletionPhase.IDLE
        self._member_id: Optional[int] = None

    @property
    def phase(self) -> DeletionPhase:
        return self._phase

    @property
    def member_id(self) -> Optional[int]:
        return self._member_id

    @property
    def is_pending(self) -> bool:
        return self._phase == DeletionPhase.PENDING_CONFIRMATION

    def request(self, member_id: int) -> None:
        self._phase = DeletionPhase.PENDING_CONFIRMATION
        self._member_id = int(member_id)

    def confirm(self) -> Optional[int]:
        """Move to CONFIRMED and return the staged id, or None if nothing is staged."""
        if not self.is_pending:
            return None
        self._phase = DeletionPhase.CONFIRMED
        return self._member_id

    def cancel(self) -> None:
        if self.is_pending:
            self._phase = DeletionPhase.CANCELLED
        self.settle()

    def settle(self) -> None:
        self._phase = DeletionPhase.IDLE
        self._member_id = None
