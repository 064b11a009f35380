"""Store collaborator: interface, in-memory backend and profile adapter."""

import functools

from spacesync.store.base import SpaceStore
from spacesync.store.memory import InMemorySpaceStore


@functools.lru_cache()
def get_store() -> SpaceStore:
    """Process-wide store used by the API (override in tests)."""
    return InMemorySpaceStore()


__all__ = ["SpaceStore", "InMemorySpaceStore", "get_store"]
