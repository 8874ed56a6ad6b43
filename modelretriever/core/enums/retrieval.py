"""
Retrieval-related enums for the model retriever.
"""

from enum import Enum


class RetrievalErrorCode(Enum):
    """Standardized error codes for retrieval operations."""
    HIERARCHY_RESOLUTION_FAILED = "hierarchy_resolution_failed"
    PROVIDER_FAILED = "provider_failed"
    INVALID_PROVIDER_RESULT = "invalid_provider_result"
    UNKNOWN_VALIDATOR = "unknown_validator"


class BuildLockMode(Enum):
    """Granularity of the lock guarding first-time index builds."""
    PER_TYPE = "per_type"
    GLOBAL = "global"


class InvalidationReason(Enum):
    """Why the models cache was cleared."""
    PROVIDER_ADDED = "provider_added"
    PROVIDER_REMOVED = "provider_removed"
    VALIDATOR_ADDED = "validator_added"
    VALIDATOR_REMOVED = "validator_removed"
    EVENT = "event"
    EXPLICIT = "explicit"
