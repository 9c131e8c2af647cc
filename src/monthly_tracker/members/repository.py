from __future__ import annotations

from typing import Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    """Repository interface for members.

    Note (DIP): view-models depend on this interface, never on a concrete DB.
    Implementations raise DataProviderError when the store fails.
    """

    def list_all(self) -> Sequence[Member]:
        """All members ordered by id."""
        raise NotImplementedError

    def insert(self, *, name: str) -> Member:
        """Insert and return the generated row."""
        raise NotImplementedError

    def update_name(self, *, member_id: int, name: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, member_id: int) -> bool:
        raise NotImplementedError
