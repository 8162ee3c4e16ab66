"""Event publishers for propagating directory changes to the identity service."""

import logging
from abc import ABC, abstractmethod

import redis.asyncio as redis

from directory_api.config import get_settings
from directory_api.events.schemas import EmployeeCreatedEvent
from directory_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)


class EventPublishError(Exception):
    """Raised when an event could not be handed to the transport."""

    pass


class EventPublisher(ABC):
    """Hand-off point to an at-least-once transport.

    A successful return means the transport accepted the event. There is no
    delivery confirmation beyond that.
    """

    @abstractmethod
    async def publish_employee_created(self, event: EmployeeCreatedEvent) -> None:
        """Publish an employee-created event.

        Args:
            event: Event to publish

        Raises:
            EventPublishError: If the transport did not accept the event
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        return None


class RedisEventPublisher(EventPublisher):
    """Appends events to a Redis stream read by consumer groups."""

    _instance: "RedisEventPublisher | None" = None

    def __init__(
        self,
        client: redis.Redis,
        stream_name: str,
        maxlen: int | None = None,
    ) -> None:
        """Initialize publisher.

        Args:
            client: Redis asyncio client
            stream_name: Stream key to append to
            maxlen: Approximate stream length cap, or None for unbounded
        """
        self._client = client
        self.stream_name = stream_name
        self.maxlen = maxlen

    @classmethod
    def get_instance(cls) -> "RedisEventPublisher":
        """Get or create the shared publisher.

        Returns:
            RedisEventPublisher singleton instance
        """
        if cls._instance is None:
            settings = get_settings()
            client = redis.from_url(
                str(settings.redis_url),
                encoding="utf-8",
                decode_responses=True,
            )
            cls._instance = RedisEventPublisher(
                client,
                stream_name=settings.event_stream_name,
                maxlen=settings.event_stream_maxlen,
            )
            logger.info("Redis event publisher configured for stream %s", settings.event_stream_name)
        return cls._instance

    async def publish_employee_created(self, event: EmployeeCreatedEvent) -> None:
        """Append an employee-created event to the stream.

        Args:
            event: Event to publish

        Raises:
            EventPublishError: If Redis rejected the write or was unreachable
        """
        fields = {
            "event_type": event.event_type,
            "employee_id": str(event.employee_id),
            "payload": event.to_payload(),
        }
        try:
            message_id = await self._client.xadd(
                self.stream_name,
                fields,
                maxlen=self.maxlen,
                approximate=True,
            )
        except redis.RedisError as e:
            log_error(logger, "Failed to publish employee.created event", e)
            raise EventPublishError("Event transport unavailable") from e

        logger.debug(
            "Published %s for employee %s as %s", event.event_type, event.employee_id, message_id
        )

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()
        if RedisEventPublisher._instance is self:
            RedisEventPublisher._instance = None

    @classmethod
    async def close_instance(cls) -> None:
        """Close the shared publisher if one was ever created."""
        if cls._instance is not None:
            await cls._instance.close()


class NullEventPublisher(EventPublisher):
    """Publisher used when events are disabled; drops everything."""

    async def publish_employee_created(self, event: EmployeeCreatedEvent) -> None:
        """Log and discard the event."""
        logger.info("Event publishing disabled, dropping %s for %s", event.event_type, event.employee_id)


def get_event_publisher() -> EventPublisher:
    """Get the configured event publisher.

    Returns:
        Redis publisher, or a no-op publisher when events are disabled
    """
    if not get_settings().events_enabled:
        return NullEventPublisher()
    return RedisEventPublisher.get_instance()
