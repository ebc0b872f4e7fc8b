"""In-memory adapters for the store protocols."""

from event_workflow.infrastructure.memory.stores import (
    InMemoryDatabase,
    InMemoryEventStore,
    InMemoryHistoryStore,
    InMemoryUnitOfWork,
    InMemoryUnitOfWorkFactory,
)

__all__ = [
    "InMemoryDatabase",
    "InMemoryEventStore",
    "InMemoryHistoryStore",
    "InMemoryUnitOfWork",
    "InMemoryUnitOfWorkFactory",
]
