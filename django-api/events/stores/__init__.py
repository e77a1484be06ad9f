from events.stores.interfaces import Directory, EventStore, ModerationLogStore, RequestStore
from events.stores.memory_store import (
    InMemoryDirectory,
    InMemoryEventStore,
    InMemoryModerationLogStore,
    InMemoryRequestStore,
)

__all__ = [
    "EventStore",
    "RequestStore",
    "ModerationLogStore",
    "Directory",
    "InMemoryEventStore",
    "InMemoryRequestStore",
    "InMemoryModerationLogStore",
    "InMemoryDirectory",
]
