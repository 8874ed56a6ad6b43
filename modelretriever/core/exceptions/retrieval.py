"""
Retrieval-specific exceptions for the model retriever.
"""

from typing import Any

from .base import ModelRetrieverError, ValidationError
from ..enums.retrieval import RetrievalErrorCode


class InvalidModelError(ValidationError):
    """Raised when a validation model violates its own invariants."""

    def __init__(self, field: str, value: str = None, message: str = None):
        super().__init__(field, value, message)


class RetrievalError(ModelRetrieverError):
    """Base exception for failures while retrieving a model."""

    def __init__(self, message: str, error_code: RetrievalErrorCode = RetrievalErrorCode.PROVIDER_FAILED):
        self.error_code = error_code
        super().__init__(message)


class HierarchyResolutionError(RetrievalError):
    """Raised when the supertype chain of a resource type cannot be resolved."""

    def __init__(self, resource_type: str, reason: str = None):
        self.resource_type = resource_type
        self.reason = reason
        message = f"Could not resolve super type of '{resource_type}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, RetrievalErrorCode.HIERARCHY_RESOLUTION_FAILED)


class ModelProviderError(RetrievalError):
    """Raised when a model provider fails while the index of a resource type is built."""

    def __init__(self, provider: Any, resource_type: str, reason: str = None,
                 error_code: RetrievalErrorCode = RetrievalErrorCode.PROVIDER_FAILED):
        self.provider = provider
        self.resource_type = resource_type
        self.reason = reason
        message = f"Model provider '{provider}' failed for resource type '{resource_type}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, error_code)


class UnknownValidatorError(RetrievalError):
    """Raised when a model references a validator that is not registered."""

    def __init__(self, validator_id: str, source: str = None):
        self.validator_id = validator_id
        self.source = source
        message = f"Could not find validator with id '{validator_id}'"
        if source:
            message += f" referenced in {source}"
        super().__init__(message, RetrievalErrorCode.UNKNOWN_VALIDATOR)
