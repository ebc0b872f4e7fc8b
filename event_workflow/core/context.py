# event_workflow/core/context.py

import contextvars
from contextlib import contextmanager

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
actor_id_ctx = contextvars.ContextVar("actor_id", default=None)


@contextmanager
def bind_actor(actor_id):
    """Expose actor_id to log records emitted inside the block."""
    token = actor_id_ctx.set(actor_id)
    try:
        yield
    finally:
        actor_id_ctx.reset(token)
