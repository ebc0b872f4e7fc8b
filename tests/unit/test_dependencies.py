"""Service wiring from settings."""

from unittest.mock import AsyncMock

from event_workflow.application.locking import InMemoryLockBackend
from event_workflow.config.settings import WorkflowSettings
from event_workflow.dependencies import build_services, get_lock_backend
from event_workflow.domain.models.status import EventStatusCode
from event_workflow.infrastructure.cache.redis_lock_backend import RedisLockBackend


def test_lock_backend_follows_redis_url():
    assert isinstance(get_lock_backend(WorkflowSettings(_env_file=None)), InMemoryLockBackend)
    backend = get_lock_backend(WorkflowSettings(_env_file=None, redis_url="redis://localhost:6379/0"))
    assert isinstance(backend, RedisLockBackend)


async def test_built_services_share_store_and_clock(uow_factory, make_event, clock, notifier):
    settings = WorkflowSettings(_env_file=None, enable_metrics=True)
    services = build_services(uow_factory, settings=settings, clock=clock, notifier=notifier)
    uow_factory.seed(make_event("evt-1", EventStatusCode.DRAFT))

    await services.workflow.transition("evt-1", "approve_internal", "entity_admin", "admin-1")

    event = await services.queries.get_event("evt-1")
    assert event.status is EventStatusCode.APPROVED_INTERNAL
    assert services.metrics.counter_total("workflow_transitions_total") == 1
    notifier.notify.assert_awaited_once()


async def test_metrics_can_be_disabled(uow_factory, make_event, clock):
    settings = WorkflowSettings(_env_file=None, enable_metrics=False)
    services = build_services(uow_factory, settings=settings, clock=clock, notifier=AsyncMock())
    uow_factory.seed(make_event("evt-1", EventStatusCode.DRAFT))

    await services.workflow.transition("evt-1", "approve_internal", "entity_admin", "admin-1")

    assert services.metrics.export_metrics()["counters"] == {}
