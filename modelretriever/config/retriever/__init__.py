"""
Retriever domain configuration.
"""

from .config import RetrieverSettings, LoggingSettings
from .schema import RETRIEVER_SCHEMA, validate_retriever_settings, get_retriever_validators

__all__ = [
    'RetrieverSettings',
    'LoggingSettings',
    'RETRIEVER_SCHEMA',
    'validate_retriever_settings',
    'get_retriever_validators'
]
