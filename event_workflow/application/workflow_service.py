"""Approval workflow service: the transaction boundary for status changes."""

import asyncio
import logging
import time
from typing import List, Optional

from event_workflow.application.exceptions import (
    StorageFailureError,
    StorageTimeoutError,
)
from event_workflow.application.history_tracker import HistoryTracker
from event_workflow.application.locking import EventLock, InMemoryLockBackend
from event_workflow.application.repositories import (
    Clock,
    StatusChangeNotifier,
    SystemClock,
    UnitOfWork,
    UnitOfWorkFactory,
)
from event_workflow.application.schemas import (
    EventCreateRequest,
    TransitionRequest,
    TransitionResult,
)
from event_workflow.core.context import bind_actor
from event_workflow.domain.exceptions import (
    DomainError,
    DomainValidationError,
    EventNotFoundError,
    WorkflowError,
)
from event_workflow.domain.models.event import Event
from event_workflow.domain.models.history import StatusHistoryEntry
from event_workflow.domain.models.status import StatusRegistry, status_registry
from event_workflow.domain.validators.transition_validator import (
    clean_text,
    validate_comments,
)
from event_workflow.observability.metrics import MetricsCollector
from event_workflow.workflows.duration import compute_state_duration
from event_workflow.workflows.rules import decide

DEFAULT_STORAGE_TIMEOUT_SECONDS = 5.0


class ApprovalWorkflowService:
    """
    Application-layer orchestration only. No HTTP, no direct infrastructure.
    Transaction strategy: status update and history entry commit together or not at all;
    business-rule denials never touch storage; notification failure does not fail the call.
    Transitions on the same event are serialized by EventLock.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        logger: logging.Logger,
        clock: Optional[Clock] = None,
        lock: Optional[EventLock] = None,
        notifier: Optional[StatusChangeNotifier] = None,
        metrics: Optional[MetricsCollector] = None,
        history: Optional[HistoryTracker] = None,
        registry: StatusRegistry = status_registry,
        storage_timeout_seconds: float = DEFAULT_STORAGE_TIMEOUT_SECONDS,
    ) -> None:
        self._uow_factory = uow_factory
        self._logger = logger
        self._clock = clock or SystemClock()
        self._lock = lock or EventLock(InMemoryLockBackend())
        self._notifier = notifier
        self._metrics = metrics or MetricsCollector()
        self._history = history or HistoryTracker(uow_factory, self._clock)
        self._registry = registry
        self._storage_timeout = storage_timeout_seconds

    @property
    def history(self) -> HistoryTracker:
        return self._history

    async def apply_transition(self, request: TransitionRequest) -> TransitionResult:
        """
        Single entry point for status changes. Looks up the event, applies the rule engine,
        then atomically writes the new status and one history entry.
        Raises EventNotFoundError, InvalidTransitionError, ReasonTooShortError, UnauthorizedError
        verbatim. Any storage or lock-backend failure, read or write, surfaces as StorageFailureError.
        """
        with bind_actor(request.actor_id):
            return await self._apply_transition(request)

    async def _apply_transition(self, request: TransitionRequest) -> TransitionResult:
        started = time.perf_counter()
        log_ctx = {
            "event_id": request.event_id,
            "action": request.action.value,
            "actor_id": request.actor_id,
            "actor_role": request.actor_role.value,
        }

        try:
            # Step 1: serialize per event
            async with self._lock.hold(request.event_id):
                async with self._uow_factory() as uow:
                    # Step 2: load current state
                    event = await uow.events.get(request.event_id)
                    if event is None:
                        self._record_denial("not_found", log_ctx)
                        raise EventNotFoundError(request.event_id)

                    # Step 3: rule engine, then comment evidence
                    denial_ctx = {**log_ctx, "current_status": event.status.value}
                    decision = decide(
                        event.status,
                        request.action,
                        request.actor_role,
                        reason=request.reason,
                        registry=self._registry,
                    )
                    if decision.error is not None:
                        self._record_denial(
                            decision.error.kind.value,
                            {**denial_ctx, "error": decision.error.message},
                        )
                        raise decision.error
                    next_status = decision.next_status_or_raise()
                    try:
                        validate_comments(request.comments)
                    except DomainError as e:
                        self._record_denial(e.kind.value, {**denial_ctx, "error": e.message})
                        raise

                    # Step 4: atomic write, status + history
                    now = self._clock.now()
                    time_in_previous = compute_state_duration(event.last_status_changed_at, now)
                    updated = event.with_status(next_status, now)
                    await uow.events.update_status(updated, expected_version=event.version)
                    entry = await self._history.record_entry(
                        uow,
                        event=updated,
                        previous_status=event.status,
                        new_status=next_status,
                        actor_id=request.actor_id,
                        actor_role=request.actor_role.value,
                        timestamp=now,
                        action=request.action,
                        reason=clean_text(request.reason),
                        comments=clean_text(request.comments),
                    )
                    await self._commit(uow, log_ctx)
        except WorkflowError:
            raise
        except Exception as e:
            self._record_storage_failure(log_ctx, e)
            raise StorageFailureError(
                f"Status write failed for event {request.event_id}: {e}",
                {"event_id": request.event_id},
            ) from e

        latency_ms = (time.perf_counter() - started) * 1000
        self._metrics.increment(
            "workflow_transitions_total",
            action=request.action.value,
            new_status=next_status.value,
        )
        self._metrics.observe_latency("workflow_transition_latency_ms", latency_ms)
        self._logger.info(
            "transition_applied",
            extra={
                **log_ctx,
                "previous_status": event.status.value,
                "new_status": next_status.value,
                "history_entry_id": entry.entry_id,
            },
        )

        # Step 5: notify collaborators, best-effort after commit
        await self._notify(updated, entry, log_ctx)

        return TransitionResult(
            event=updated,
            previous_status=event.status,
            history_entry=entry,
            time_in_previous_state=time_in_previous,
        )

    async def transition(
        self,
        event_id: str,
        action: str,
        actor_role: str,
        actor_id: str,
        reason: Optional[str] = None,
        comments: Optional[str] = None,
    ) -> TransitionResult:
        """Convenience wrapper building the TransitionRequest from plain values."""
        request = TransitionRequest(
            event_id=event_id,
            action=action,
            actor_role=actor_role,
            actor_id=actor_id,
            reason=reason,
            comments=comments,
        )
        return await self.apply_transition(request)

    async def register_event(self, request: EventCreateRequest) -> Event:
        """Store a new event in draft together with its creation history entry."""
        with bind_actor(request.actor_id):
            return await self._register_event(request)

    async def _register_event(self, request: EventCreateRequest) -> Event:
        log_ctx = {
            "event_id": request.event_id,
            "actor_id": request.actor_id,
            "actor_role": request.actor_role.value,
        }
        try:
            async with self._lock.hold(request.event_id):
                async with self._uow_factory() as uow:
                    if await uow.events.get(request.event_id) is not None:
                        raise DomainValidationError(
                            f"Event already exists: {request.event_id}",
                            {"event_id": request.event_id},
                        )
                    now = self._clock.now()
                    event = request.to_event(now)
                    await uow.events.add(event)
                    entry = await self._history.record_entry(
                        uow,
                        event=event,
                        previous_status=None,
                        new_status=event.status,
                        actor_id=request.actor_id,
                        actor_role=request.actor_role.value,
                        timestamp=now,
                    )
                    await self._commit(uow, log_ctx)
        except WorkflowError:
            raise
        except Exception as e:
            self._record_storage_failure(log_ctx, e)
            raise StorageFailureError(
                f"Could not register event {request.event_id}: {e}",
                {"event_id": request.event_id},
            ) from e

        self._logger.info(
            "event_registered",
            extra={**log_ctx, "status": event.status.value, "history_entry_id": entry.entry_id},
        )
        return event

    async def get_history(self, event_id: str) -> List[StatusHistoryEntry]:
        return await self._history.history_for(event_id)

    async def _commit(self, uow: UnitOfWork, log_ctx: dict) -> None:
        """Commit within the storage timeout. A timeout is a storage failure."""
        try:
            await asyncio.wait_for(uow.commit(), timeout=self._storage_timeout)
        except asyncio.TimeoutError as e:
            self._record_storage_failure(log_ctx, e)
            raise StorageTimeoutError(
                f"Commit timed out after {self._storage_timeout}s",
                {"event_id": log_ctx.get("event_id")},
            ) from e
        except StorageFailureError as e:
            self._record_storage_failure(log_ctx, e)
            raise

    async def _notify(self, event: Event, entry: StatusHistoryEntry, log_ctx: dict) -> None:
        if self._notifier is None:
            return
        try:
            await self._notifier.notify(event, entry)
        except Exception as e:
            self._logger.error(
                "status_notification_failed",
                extra={**log_ctx, "error": str(e)},
            )
            # Do not re-raise: the transition is already committed.

    def _record_denial(self, kind: str, log_ctx: dict) -> None:
        self._metrics.increment("workflow_denials_total", kind=kind)
        self._logger.warning("transition_denied", extra={**log_ctx, "kind": kind})

    def _record_storage_failure(self, log_ctx: dict, error: BaseException) -> None:
        self._metrics.increment("workflow_storage_failures_total")
        self._logger.error("storage_failure", extra={**log_ctx, "error": str(error)})
