"""Observability layer: in-process metrics for the workflow service boundary."""

from event_workflow.observability.metrics import MetricsCollector

__all__ = [
    "MetricsCollector",
]
