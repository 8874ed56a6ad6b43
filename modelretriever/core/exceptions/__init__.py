"""
Core exceptions for the model retriever.

This module provides all exception classes used throughout the package,
organized by domain and with a clear inheritance hierarchy.
"""

# Base exceptions
from .base import (
    ModelRetrieverError,
    ValidationError,
    ConfigurationError
)

# Retrieval exceptions
from .retrieval import (
    InvalidModelError,
    RetrievalError,
    HierarchyResolutionError,
    ModelProviderError,
    UnknownValidatorError
)

__all__ = [
    # Base exceptions
    'ModelRetrieverError',
    'ValidationError',
    'ConfigurationError',

    # Retrieval exceptions
    'InvalidModelError',
    'RetrievalError',
    'HierarchyResolutionError',
    'ModelProviderError',
    'UnknownValidatorError'
]
