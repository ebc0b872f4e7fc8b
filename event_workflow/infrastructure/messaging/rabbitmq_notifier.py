# event_workflow/infrastructure/messaging/rabbitmq_notifier.py

import json
from typing import Any, Dict, Optional

import aio_pika

from event_workflow.config.settings import get_settings
from event_workflow.domain.models.event import Event
from event_workflow.domain.models.history import StatusHistoryEntry

STATUS_CHANGED_ROUTING_KEY = "event.status_changed"


def status_change_message(event: Event, entry: StatusHistoryEntry) -> Dict[str, Any]:
    """Message body for a committed status change."""
    return {
        "event_id": event.event_id,
        "title": event.title,
        "organization_id": event.organization_id,
        "status": event.status.value,
        "version": event.version,
        "history": entry.to_dict(),
    }


class RabbitMQStatusNotifier:
    """
    StatusChangeNotifier publishing to a durable topic exchange.
    The history entry id doubles as the idempotency key for consumers.
    """

    def __init__(
        self,
        rabbitmq_url: Optional[str] = None,
        exchange_name: Optional[str] = None,
        routing_key: str = STATUS_CHANGED_ROUTING_KEY,
    ):
        settings = get_settings()
        self._url = rabbitmq_url or settings.rabbitmq_url
        self._exchange_name = exchange_name or settings.status_exchange
        self._routing_key = routing_key
        self._connection = None
        self._channel = None
        self._exchange = None

    async def connect(self):
        if not self._url:
            raise ValueError("rabbitmq_url is not configured")
        self._connection = await aio_pika.connect_robust(self._url)
        self._channel = await self._connection.channel()
        self._exchange = await self._channel.declare_exchange(
            self._exchange_name,
            aio_pika.ExchangeType.TOPIC,
            durable=True,
        )

    async def notify(self, event: Event, entry: StatusHistoryEntry) -> None:
        if self._exchange is None:
            await self.connect()

        msg = aio_pika.Message(
            body=json.dumps(status_change_message(event, entry)).encode(),
            content_type="application/json",
            delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
            headers={
                "idempotency_key": entry.entry_id,
            },
        )

        await self._exchange.publish(msg, routing_key=self._routing_key)

    async def close(self):
        if self._connection is not None:
            await self._connection.close()
        self._connection = None
        self._channel = None
        self._exchange = None
