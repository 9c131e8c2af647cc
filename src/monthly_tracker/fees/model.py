from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from ..core.enums import FeeStatus

# Month key (YYYY-MM-01) -> status. A missing key means Unpaid.
FeeRecord = Dict[str, FeeStatus]


@dataclass(frozen=True)
class FeeEntry:
    """Domain entity: one `fees` row."""

    member_id: int
    month: str
    status: FeeStatus


@dataclass
class FeeMember:
    """Roster row held by the fee grid."""

    id: int
    name: str
    fees: FeeRecord = field(default_factory=dict)


@dataclass(frozen=True)
class FeeTotals:
    paid: int
    unpaid: int


def to_fee_status(value: object) -> FeeStatus:
    if value == FeeStatus.PAID:
        return FeeStatus.PAID
    return FeeStatus.UNPAID


def fee_status_of(record: Mapping[str, object], key: str) -> FeeStatus:
    """Status at ``key``; absent or unrecognised values count as Unpaid."""
    return to_fee_status(record.get(key))
