from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import Capability
from ..core.exceptions import AuthenticationError, DataProviderError
from .repository import UserRepository

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    email: str
    capability: Capability


class AuthService:
    """Use case: sign in and resolve the session capability."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        user = self._users.get_by_email(email) if email else None
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            email=user.email,
            capability=self.resolve_capability(user.user_id),
        )

    def resolve_capability(self, user_id: Optional[int]) -> Capability:
        """Role lookup: 'admin' -> ADMIN, any other role -> MEMBER, none -> GUEST."""
        if user_id is None:
            return Capability.GUEST
        try:
            role = self._users.get_role(int(user_id))
        except DataProviderError as e:
            _LOGGER.warning("Role lookup failed for user %s: %s", user_id, e)
            return Capability.GUEST
        return Capability.from_role(role)
