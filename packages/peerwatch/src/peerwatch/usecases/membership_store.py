"""MembershipStore: the authoritative set of ready peer addresses."""

from __future__ import annotations

import threading
from typing import Iterable


class MembershipStore:
    """Thread-safe set of peer addresses currently believed ready.

    Written by a single owner (the change stream thread) and read by any
    number of consumers, e.g. HTTP handlers. Every access goes through one
    lock, so readers always see a consistent snapshot.

    Invariants:
        - The self address is always a member and cannot be removed.
        - Empty addresses are never stored.

    Parameters:
        self_address: Address of the local node.
        initial: Addresses to seed the store with (self may be included).
    """

    def __init__(self, self_address: str, initial: Iterable[str] = ()) -> None:
        if not self_address:
            raise ValueError("self_address cannot be empty")

        self._lock = threading.Lock()
        self._self_address = self_address
        self._addresses: set[str] = {self_address}
        for address in initial:
            self._validate(address)
            self._addresses.add(address)

    @property
    def self_address(self) -> str:
        return self._self_address

    @staticmethod
    def _validate(address: str) -> None:
        if not address:
            raise ValueError("address cannot be empty")

    def add(self, address: str) -> bool:
        """Insert ``address``.

        Returns:
            True if the address was not a member before.

        Raises:
            ValueError: If address is empty.
        """
        self._validate(address)
        with self._lock:
            if address in self._addresses:
                return False
            self._addresses.add(address)
            return True

    def remove(self, address: str) -> bool:
        """Remove ``address``. The self address is never removed.

        Returns:
            True if the address was a member and has been removed.
        """
        if address == self._self_address:
            return False
        with self._lock:
            if address not in self._addresses:
                return False
            self._addresses.discard(address)
            return True

    def contains(self, address: str) -> bool:
        """Check whether ``address`` is a member."""
        with self._lock:
            return address in self._addresses

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.contains(address)

    def __len__(self) -> int:
        with self._lock:
            return len(self._addresses)

    def snapshot_sorted(self) -> list[str]:
        """Return the members in lexicographic order, without duplicates."""
        with self._lock:
            return sorted(self._addresses)

    def __repr__(self) -> str:
        return f"MembershipStore({self.snapshot_sorted()!r})"
