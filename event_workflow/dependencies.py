"""Service wiring: lock backend, notifier, metrics and the two services, built from settings."""

import logging
from dataclasses import dataclass
from typing import Optional

from event_workflow.application.locking import EventLock, InMemoryLockBackend, LockBackend
from event_workflow.application.query_service import EventQueryService
from event_workflow.application.repositories import (
    Clock,
    StatusChangeNotifier,
    SystemClock,
    UnitOfWorkFactory,
)
from event_workflow.application.workflow_service import ApprovalWorkflowService
from event_workflow.config.logging import configure_logging
from event_workflow.config.settings import WorkflowSettings, get_settings
from event_workflow.infrastructure.cache.redis_lock_backend import RedisLockBackend
from event_workflow.observability.metrics import MetricsCollector


@dataclass
class WorkflowServices:
    workflow: ApprovalWorkflowService
    queries: EventQueryService
    metrics: MetricsCollector
    lock: EventLock


def get_lock_backend(settings: WorkflowSettings) -> LockBackend:
    """Redis when configured (multi-node), otherwise per-process."""
    if settings.redis_url:
        return RedisLockBackend(redis_url=settings.redis_url)
    return InMemoryLockBackend()


def build_services(
    uow_factory: UnitOfWorkFactory,
    settings: Optional[WorkflowSettings] = None,
    clock: Optional[Clock] = None,
    notifier: Optional[StatusChangeNotifier] = None,
    lock_backend: Optional[LockBackend] = None,
    logger: Optional[logging.Logger] = None,
) -> WorkflowServices:
    """Build workflow and query services sharing one clock and store."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    clock = clock or SystemClock()
    metrics = MetricsCollector(enabled=settings.enable_metrics)
    lock = EventLock(
        lock_backend or get_lock_backend(settings),
        ttl_seconds=settings.lock_ttl_seconds,
        wait_seconds=settings.lock_wait_seconds,
        poll_interval_seconds=settings.lock_poll_interval_seconds,
    )
    workflow = ApprovalWorkflowService(
        uow_factory=uow_factory,
        logger=logger or logging.getLogger("event_workflow.workflow"),
        clock=clock,
        lock=lock,
        notifier=notifier,
        metrics=metrics,
        storage_timeout_seconds=settings.storage_timeout_seconds,
    )
    queries = EventQueryService(uow_factory=uow_factory, clock=clock)
    return WorkflowServices(workflow=workflow, queries=queries, metrics=metrics, lock=lock)
