from __future__ import annotations

from datetime import date

from fakes import Store

from monthly_tracker.attendance.view_model import AttendanceGridViewModel
from monthly_tracker.core.enums import AttendanceStatus, Capability, FeeStatus
from monthly_tracker.members.deletion import DeletionPhase, MemberDeletion


def seeded_store() -> Store:
    store = Store()
    store.members.seed(1, "Ann")
    store.members.seed(2, "Bo")
    for member_id in (1, 2):
        store.attendance.rows[(member_id, "2024-03-07")] = AttendanceStatus.PRESENT
        store.fees.rows[(member_id, "2024-03-01")] = FeeStatus.PAID
    return store


def make_vm(store: Store, capability=Capability.ADMIN) -> AttendanceGridViewModel:
    vm = AttendanceGridViewModel(
        store.members, store.attendance, store.fees, capability=capability, month=date(2024, 3, 1)
    )
    vm.load()
    store.log.clear()
    return vm


def test_state_machine_transitions():
    deletion = MemberDeletion()
    assert deletion.phase == DeletionPhase.IDLE
    assert deletion.confirm() is None

    deletion.request(5)
    assert deletion.phase == DeletionPhase.PENDING_CONFIRMATION
    assert deletion.member_id == 5

    assert deletion.confirm() == 5
    assert deletion.phase == DeletionPhase.CONFIRMED

    deletion.settle()
    assert deletion.phase == DeletionPhase.IDLE
    assert deletion.member_id is None

    deletion.request(6)
    deletion.cancel()
    assert deletion.phase == DeletionPhase.IDLE
    assert deletion.member_id is None


def test_request_delete_changes_nothing_until_confirmed():
    store = seeded_store()
    vm = make_vm(store)

    assert vm.request_delete(1) is True

    assert vm.deletion.is_pending
    assert [m.id for m in vm.members] == [1, 2]
    assert store.log == []


def test_confirm_delete_removes_children_before_member():
    store = seeded_store()
    vm = make_vm(store)
    vm.request_delete(1)

    assert vm.confirm_delete() is True

    assert store.log == ["attendance.delete_for_member", "fees.delete_for_member", "members.delete_by_id"]
    assert [m.id for m in vm.members] == [2]
    assert set(store.members.rows) == {2}
    assert set(store.attendance.rows) == {(2, "2024-03-07")}
    assert set(store.fees.rows) == {(2, "2024-03-01")}
    assert vm.deletion.phase == DeletionPhase.IDLE


def test_failed_step_aborts_remaining_steps_and_keeps_member():
    store = seeded_store()
    vm = make_vm(store)
    store.fees.fail_on.add("delete_for_member")
    vm.request_delete(1)

    assert vm.confirm_delete() is False

    assert "members.delete_by_id" not in store.log
    assert [m.id for m in vm.members] == [1, 2]
    assert 1 in store.members.rows
    assert "Failed to delete member" in vm.error
    assert vm.deletion.phase == DeletionPhase.IDLE


def test_cancel_delete_returns_to_idle_without_side_effects():
    store = seeded_store()
    vm = make_vm(store)
    vm.request_delete(2)

    vm.cancel_delete()

    assert vm.confirm_delete() is False
    assert store.log == []
    assert [m.id for m in vm.members] == [1, 2]


def test_non_admin_cannot_stage_or_confirm():
    store = seeded_store()
    vm = make_vm(store, capability=Capability.MEMBER)

    assert vm.request_delete(1) is False
    assert vm.confirm_delete() is False
    assert vm.deletion.phase == DeletionPhase.IDLE


def test_unknown_member_cannot_be_staged():
    store = seeded_store()
    vm = make_vm(store)

    assert vm.request_delete(42) is False
    assert vm.deletion.phase == DeletionPhase.IDLE
