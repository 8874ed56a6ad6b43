"""
Cache invalidation events.
"""

from .event import EventType, InvalidationEvent, ShutdownEvent, CACHE_INVALIDATION_TOPIC
from .listener import CacheInvalidationListener

__all__ = [
    'EventType',
    'InvalidationEvent',
    'ShutdownEvent',
    'CACHE_INVALIDATION_TOPIC',
    'CacheInvalidationListener'
]
