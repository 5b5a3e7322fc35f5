"""In-process key-value store."""

from __future__ import annotations

from typing import Mapping, Optional


class MemoryKeyValueStore:
    """Dictionary-backed store; nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def clear(self, *keys: str) -> None:
        if not keys:
            self._data.clear()
            return
        for key in keys:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
