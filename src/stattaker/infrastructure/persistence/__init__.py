"""
Persistence adapters for the event store.
"""

from stattaker.infrastructure.persistence.memory import InMemoryEventStore

__all__ = [
    "InMemoryEventStore",
]
