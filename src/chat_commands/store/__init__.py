"""Storage collaborators: protocols, errors and in-memory implementations."""

from chat_commands.store.base import (
    CommandStore,
    ProfileStore,
    SequenceGenerator,
    StoreError,
)
from chat_commands.store.memory import (
    MemoryCommandStore,
    MemoryProfileStore,
    MemorySequenceGenerator,
    new_storage_id,
)

__all__ = [
    "CommandStore",
    "MemoryCommandStore",
    "MemoryProfileStore",
    "MemorySequenceGenerator",
    "new_storage_id",
    "ProfileStore",
    "SequenceGenerator",
    "StoreError",
]
