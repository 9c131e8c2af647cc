from __future__ import annotations

from itertools import count
from typing import Dict, Hashable


class WriteSequencer:
    """Tags optimistic writes so late responses can be recognised as stale.

    Every write gets a number from a single increasing counter. Only the most
    recent number issued for a key is current; a response carrying an older
    number belongs to a write that has since been superseded locally.
    """

    def __init__(self):
        self._counter = count(1)
        self._latest: Dict[Hashable, int] = {}

    def begin(self, key: Hashable) -> int:
        seq = next(self._counter)
        self._latest[key] = seq
        return seq

    def is_current(self, key: Hashable, seq: int) -> bool:
        return self._latest.get(key) == seq

    def finish(self, key: Hashable, seq: int) -> bool:
        """Settle a write. Returns True when ``seq`` was still the latest."""
        if not self.is_current(key, seq):
            return False
        del self._latest[key]
        return True
