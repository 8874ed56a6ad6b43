"""
Core enums for the model retriever.
"""

from .retrieval import (
    RetrievalErrorCode,
    BuildLockMode,
    InvalidationReason
)

__all__ = [
    'RetrievalErrorCode',
    'BuildLockMode',
    'InvalidationReason'
]
