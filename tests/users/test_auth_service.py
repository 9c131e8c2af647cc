from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from fakes import InMemoryUsers

from monthly_tracker.core.enums import Capability
from monthly_tracker.core.exceptions import AuthenticationError
from monthly_tracker.users.model import User
from monthly_tracker.users.service import AuthService


def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        [
            User(user_id=1, email="admin@example.com", password_hash=generate_password_hash("secret1"), role="admin"),
            User(user_id=2, email="player@example.com", password_hash=generate_password_hash("secret2"), role="player"),
            User(user_id=3, email="norole@example.com", password_hash=generate_password_hash("secret3"), role=None),
            User(
                user_id=4,
                email="gone@example.com",
                password_hash=generate_password_hash("secret4"),
                role="admin",
                is_active=False,
            ),
            User(user_id=5, email="broken@example.com", password_hash="CHANGE_ME", role="admin"),
        ]
    )


def test_admin_login_resolves_admin_capability():
    svc = AuthService(users_repo())

    s_user = svc.authenticate(" Admin@Example.com ", "secret1")

    assert s_user.user_id == 1
    assert s_user.capability == Capability.ADMIN


def test_other_roles_resolve_to_member_or_guest():
    svc = AuthService(users_repo())

    assert svc.authenticate("player@example.com", "secret2").capability == Capability.MEMBER
    assert svc.authenticate("norole@example.com", "secret3").capability == Capability.GUEST
    assert svc.resolve_capability(None) == Capability.GUEST
    assert svc.resolve_capability(999) == Capability.GUEST


@pytest.mark.parametrize(
    "email,password",
    [
        ("admin@example.com", "wrong"),
        ("nobody@example.com", "secret1"),
        ("gone@example.com", "secret4"),
        ("broken@example.com", "CHANGE_ME"),
        ("", ""),
    ],
)
def test_bad_credentials_raise(email, password):
    svc = AuthService(users_repo())
    with pytest.raises(AuthenticationError):
        svc.authenticate(email, password)


def test_role_lookup_failure_falls_back_to_guest():
    repo = users_repo()
    repo.fail_role_lookup = True

    assert AuthService(repo).resolve_capability(1) == Capability.GUEST


def test_capability_from_role_strings():
    assert Capability.from_role("admin") == Capability.ADMIN
    assert Capability.from_role(" admin ") == Capability.ADMIN
    assert Capability.from_role("Admin") == Capability.MEMBER
    assert Capability.from_role("coach") == Capability.MEMBER
    assert Capability.from_role("") == Capability.GUEST
    assert Capability.from_role(None) == Capability.GUEST
    assert Capability.ADMIN.can_edit
    assert not Capability.MEMBER.can_edit
    assert not Capability.GUEST.can_edit
