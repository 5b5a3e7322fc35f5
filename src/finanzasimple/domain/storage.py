"""Durable key-value storage protocol."""

from __future__ import annotations

from typing import Mapping, Optional, Protocol


class KeyValueStore(Protocol):
    """Small persistence interface for the client-held session record.

    Implementations may be a local SQLite table, memory, or an OS keychain.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def set_many(self, items: Mapping[str, str]) -> None:
        """Store every pair, or none of them if the write fails."""
        ...

    def clear(self, *keys: str) -> None:
        """Remove the given keys, or every key when none are given."""
        ...
