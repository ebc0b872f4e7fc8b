# event_workflow/infrastructure/database/models.py

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)

from event_workflow.infrastructure.database.session import Base


class EventRecord(Base):
    """Current state of one event. version guards concurrent status writes."""

    __tablename__ = "events"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    organization_id = Column(String, nullable=False, index=True)
    category_id = Column(Integer, nullable=True)
    event_type = Column(String, nullable=True)
    location_text = Column(String, nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False)

    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    # [[start_iso, end_iso], ...]
    secondary_dates = Column(JSON, nullable=False, default=list)

    status = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    last_status_changed_at = Column(DateTime(timezone=True), nullable=False)
    version = Column(Integer, nullable=False, default=1)


class StatusHistoryRecord(Base):
    """Append-only audit row. Never updated or deleted by the application."""

    __tablename__ = "event_status_history"

    id = Column(String, primary_key=True)
    event_id = Column(String, ForeignKey("events.id"), nullable=False, index=True)
    previous_status = Column(String, nullable=True)
    new_status = Column(String, nullable=False)
    action = Column(String, nullable=True)
    actor_id = Column(String, nullable=False)
    actor_role = Column(String, nullable=False)
    reason = Column(Text, nullable=True)
    comments = Column(Text, nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
