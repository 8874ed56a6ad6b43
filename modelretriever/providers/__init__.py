"""
Validation model providers.

- ValidationModelProvider: abstract source of validation models
- RankedProviders: rank ordered set of bound providers
- InMemoryModelProvider: models registered at runtime
- YamlModelProvider: models read from YAML files in a directory
"""

from .base import ValidationModelProvider, SERVICE_RANKING
from .ranked import RankedProviders
from .in_memory import InMemoryModelProvider
from .yaml_provider import YamlModelProvider, parse_models

__all__ = [
    'ValidationModelProvider',
    'SERVICE_RANKING',
    'RankedProviders',
    'InMemoryModelProvider',
    'YamlModelProvider',
    'parse_models'
]
