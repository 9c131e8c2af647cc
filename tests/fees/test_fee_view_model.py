from __future__ import annotations

from datetime import date

from fakes import Store

from monthly_tracker.core.constants import FEE_EPOCH
from monthly_tracker.core.enums import Capability, FeeStatus
from monthly_tracker.fees.model import FeeTotals
from monthly_tracker.fees.view_model import FeeGridViewModel

JULY_2025 = date(2025, 7, 1)


def make_vm(store: Store, *, capability=Capability.ADMIN, month=JULY_2025) -> FeeGridViewModel:
    vm = FeeGridViewModel(store.members, store.fees, capability=capability, month=month)
    vm.load()
    return vm


def test_toggle_paid_then_unpaid_updates_totals():
    store = Store()
    store.members.seed(2, "Bo")
    vm = make_vm(store)

    assert vm.month_key == "2025-07-01"
    assert vm.status_of(2) == FeeStatus.UNPAID
    assert vm.totals == FeeTotals(paid=0, unpaid=1)

    assert vm.toggle_fee_status(2) == FeeStatus.PAID
    assert vm.totals == FeeTotals(paid=1, unpaid=0)
    assert store.fees.rows[(2, "2025-07-01")] == FeeStatus.PAID

    assert vm.toggle_fee_status(2) == FeeStatus.UNPAID
    assert vm.totals == FeeTotals(paid=0, unpaid=1)


def test_load_filters_to_exact_month():
    store = Store()
    store.members.seed(1, "Ann")
    store.members.seed(2, "Bo")
    store.fees.rows[(1, "2025-08-01")] = FeeStatus.PAID
    store.fees.rows[(2, "2025-07-01")] = FeeStatus.PAID

    vm = make_vm(store)

    assert vm.status_of(1) == FeeStatus.UNPAID
    assert vm.status_of(2) == FeeStatus.PAID


def test_default_cursor_is_epoch_and_previous_is_unavailable():
    store = Store()
    vm = FeeGridViewModel(store.members, store.fees, capability=Capability.GUEST)

    assert vm.month == FEE_EPOCH
    assert vm.can_go_previous is False


def test_cannot_move_before_epoch():
    store = Store()
    vm = make_vm(store)

    assert vm.change_month(-1) is False
    assert vm.month == JULY_2025
    assert vm.can_go_previous is False
    assert store.log.count("members.list_all") == 1


def test_navigation_forward_and_back_to_epoch():
    store = Store()
    vm = make_vm(store)

    assert vm.change_month(2) is True
    assert vm.month_key == "2025-09-01"
    assert vm.can_go_previous is True

    assert vm.change_month(-3) is False
    assert vm.change_month(-2) is True
    assert vm.month == JULY_2025


def test_month_before_epoch_is_clamped():
    store = Store()
    vm = make_vm(store, month=date(2024, 12, 1))

    assert vm.month == JULY_2025


def test_failed_toggle_reverts_to_unpaid():
    store = Store()
    store.members.seed(2, "Bo")
    vm = make_vm(store)
    store.fees.fail_on.add("upsert")

    assert vm.toggle_fee_status(2) is None

    assert vm.status_of(2) == FeeStatus.UNPAID
    assert vm.totals == FeeTotals(paid=0, unpaid=1)
    assert "Failed to save fee status" in vm.error


def test_toggle_is_noop_without_admin():
    store = Store()
    store.members.seed(2, "Bo")
    vm = make_vm(store, capability=Capability.MEMBER)

    assert vm.toggle_fee_status(2) is None
    assert vm.toggle_fee_status(404) is None
    assert "fees.upsert" not in store.log


def test_missing_fees_table_message():
    store = Store()
    store.members.seed(1, "Ann")
    store.fees.fail_message = "1146 (42S02): Table 'monthly_tracker.fees' doesn't exist"

    vm = make_vm(store)

    assert vm.error.startswith('Database error: The "fees" table does not exist')
    assert vm.status_of(1) == FeeStatus.UNPAID


def test_members_failure_leaves_roster_empty():
    store = Store()
    store.members.seed(1, "Ann")
    store.members.fail_on.add("list_all")

    vm = make_vm(store)

    assert vm.members == []
    assert vm.totals == FeeTotals(paid=0, unpaid=0)
    assert "Failed to fetch members" in vm.error
