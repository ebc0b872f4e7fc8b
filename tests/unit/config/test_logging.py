"""JsonFormatter: structured fields, context variables, extra= payload."""

import json
import logging

from event_workflow.config.logging import JsonFormatter, configure_logging
from event_workflow.core.context import bind_actor, correlation_id_ctx


def _record(msg="transition_applied", **extra):
    record = logging.LogRecord("event_workflow.workflow", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_json_with_extra_fields():
    payload = json.loads(JsonFormatter().format(_record(event_id="evt-1", new_status="published")))
    assert payload["message"] == "transition_applied"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "event_workflow.workflow"
    assert payload["event_id"] == "evt-1"
    assert payload["new_status"] == "published"
    assert "args" not in payload


def test_includes_context_variables():
    token = correlation_id_ctx.set("corr-9")
    try:
        with bind_actor("admin-1"):
            payload = json.loads(JsonFormatter().format(_record()))
    finally:
        correlation_id_ctx.reset(token)
    assert payload["correlation_id"] == "corr-9"
    assert payload["actor_id"] == "admin-1"


def test_bind_actor_restores_previous_value():
    with bind_actor("outer"):
        with bind_actor("inner"):
            pass
        payload = json.loads(JsonFormatter().format(_record()))
    assert payload["actor_id"] == "outer"
    assert json.loads(JsonFormatter().format(_record()))["actor_id"] is None


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        configure_logging("INFO")
        configure_logging("INFO")
        json_handlers = [h for h in root.handlers if isinstance(h.formatter, JsonFormatter)]
        assert len(json_handlers) == 1
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
