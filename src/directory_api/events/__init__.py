"""Outbound domain events."""

from directory_api.events.publisher import (
    EventPublishError,
    EventPublisher,
    NullEventPublisher,
    RedisEventPublisher,
    get_event_publisher,
)
from directory_api.events.schemas import EmployeeCreatedEvent

__all__ = [
    "EmployeeCreatedEvent",
    "EventPublishError",
    "EventPublisher",
    "NullEventPublisher",
    "RedisEventPublisher",
    "get_event_publisher",
]
