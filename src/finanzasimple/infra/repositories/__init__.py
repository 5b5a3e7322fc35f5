"""KeyValueStore implementations."""

from .memory import MemoryKeyValueStore
from .settings import SQLModelKeyValueStore

__all__ = ["MemoryKeyValueStore", "SQLModelKeyValueStore"]
