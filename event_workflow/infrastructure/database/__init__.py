"""SQLAlchemy async adapters for the store protocols."""

from event_workflow.infrastructure.database.models import EventRecord, StatusHistoryRecord
from event_workflow.infrastructure.database.session import (
    Base,
    create_engine,
    create_schema,
    create_session_factory,
)
from event_workflow.infrastructure.database.unit_of_work import (
    SqlAlchemyEventStore,
    SqlAlchemyHistoryStore,
    SqlAlchemyUnitOfWork,
    SqlAlchemyUnitOfWorkFactory,
)

__all__ = [
    "Base",
    "EventRecord",
    "StatusHistoryRecord",
    "SqlAlchemyEventStore",
    "SqlAlchemyHistoryStore",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUnitOfWorkFactory",
    "create_engine",
    "create_schema",
    "create_session_factory",
]
