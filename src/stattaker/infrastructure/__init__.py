"""
Infrastructure layer for the tagging workflow engine.

Contains adapters for the remote event store.
"""

from stattaker.infrastructure.http import HttpEventStore, HttpEventStoreConfig
from stattaker.infrastructure.persistence import InMemoryEventStore

__all__ = [
    # Persistence
    "InMemoryEventStore",
    # HTTP
    "HttpEventStore",
    "HttpEventStoreConfig",
]
