"""Pydantic schemas for query-side inputs and outputs. Strict validation, no storage."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from event_workflow.domain.models.event import as_utc
from event_workflow.domain.models.status import EventStatusCode


class EventFilters(BaseModel):
    """
    Filter fields for admin and public event lists. Every field is optional;
    None or blank values are no-ops. Fields combine with logical AND.
    """

    model_config = ConfigDict(frozen=True)

    search: Optional[str] = Field(None, max_length=255)
    category_id: Optional[int] = None
    status: Optional[EventStatusCode] = None
    type: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_featured: Optional[bool] = None

    @field_validator("search", "type", mode="before")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("status", mode="before")
    @classmethod
    def blank_status_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def dates_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None

    @model_validator(mode="after")
    def range_is_ordered(self) -> "EventFilters":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class DashboardCounters(BaseModel):
    """Per-tab counts. Always a fresh projection; never persisted."""

    model_config = ConfigDict(frozen=True)

    requires_action: int = 0
    pending: int = 0
    published: int = 0
    historic: int = 0

    def as_tab_dict(self) -> dict:
        return {
            "requires-action": self.requires_action,
            "pending": self.pending,
            "published": self.published,
            "historic": self.historic,
        }
