# scripts/smoke_workflow.py
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
import uuid
from datetime import datetime, timedelta, timezone

from event_workflow.application.schemas import EventCreateRequest
from event_workflow.dependencies import build_services
from event_workflow.infrastructure.database import (
    SqlAlchemyUnitOfWorkFactory,
    create_engine,
    create_schema,
    create_session_factory,
)


async def smoke():
    engine = create_engine()
    await create_schema(engine)
    services = build_services(SqlAlchemyUnitOfWorkFactory(create_session_factory(engine)))

    start = datetime.now(timezone.utc) + timedelta(days=14)
    event = await services.workflow.register_event(
        EventCreateRequest(
            event_id=f"smoke-{uuid.uuid4().hex[:8]}",
            title="Smoke test festival",
            organization_id="org-smoke",
            start_date=start,
            end_date=start + timedelta(hours=6),
            actor_id="smoke-organizer",
            actor_role="organizer_admin",
        )
    )
    for action in ("approve_internal", "request_public", "approve_public"):
        result = await services.workflow.transition(
            event.event_id, action, actor_role="entity_admin", actor_id="smoke-admin"
        )
        print(f"{action}: {result.previous_status.value} -> {result.new_status.value}")

    for entry in await services.workflow.get_history(event.event_id):
        print("history:", entry.to_dict())
    print("counters:", (await services.queries.get_dashboard_counters("entity_admin")).as_tab_dict())
    await engine.dispose()


asyncio.run(smoke())
