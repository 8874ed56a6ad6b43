from datetime import datetime, UTC
from enum import Enum
from typing import Any, Dict, Optional

CACHE_INVALIDATION_TOPIC = "modelretriever/cache/INVALIDATE"


class EventType(Enum):
    INVALIDATION = "invalidation"
    SHUTDOWN = "shutdown"


class InvalidationEvent(object):
    """
    Signal asking the retriever to drop its models cache.

    Parameters
    ----------
    topic: `str`
        Event topic; only events on the retriever's invalidation topic
        clear the cache.
    time: `datetime`, optional
        Event time, defaults to now (UTC)
    properties: `dict`, optional
        Free form event properties, e.g. the path that changed
    """
    def __init__(
        self,
        topic: str = CACHE_INVALIDATION_TOPIC,
        time: Optional[datetime] = None,
        properties: Optional[Dict[str, Any]] = None
    ):
        self.type = EventType.INVALIDATION
        self.topic = topic
        self.time = time or datetime.now(UTC)
        self.properties = dict(properties or {})

    def __str__(self):
        return f"Type: {self.type.value}, Topic: {self.topic}, Time: {self.time}"

    def __repr__(self):
        return str(self)


class ShutdownEvent(object):
    """Put on the queue by a producer to end a running invalidation listener."""
    def __init__(self):
        self.type = EventType.SHUTDOWN
        self.time = datetime.now(UTC)

    def __str__(self):
        return f"Type: {self.type.value}, Time: {self.time}"

    def __repr__(self):
        return str(self)
