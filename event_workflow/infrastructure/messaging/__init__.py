from event_workflow.infrastructure.messaging.rabbitmq_notifier import (
    STATUS_CHANGED_ROUTING_KEY,
    RabbitMQStatusNotifier,
    status_change_message,
)

__all__ = ["STATUS_CHANGED_ROUTING_KEY", "RabbitMQStatusNotifier", "status_change_message"]
