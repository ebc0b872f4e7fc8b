"""Domain schemas. Query inputs and projection outputs."""

from event_workflow.domain.schemas.filters import DashboardCounters, EventFilters

__all__ = [
    "DashboardCounters",
    "EventFilters",
]
