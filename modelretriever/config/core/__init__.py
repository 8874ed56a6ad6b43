"""
Core configuration management components.

- ConfigRegistry: resolves the validated settings of a domain
- ConfigProvider: read-only settings sources (YAML file, in-code mapping)
- ConfigValidator: validation framework for settings data
"""

from .registry import ConfigRegistry, merge_settings
from .provider import ConfigProvider, FileConfigProvider, MappingConfigProvider
from .validator import ConfigValidator, SchemaValidator, BusinessValidator, ConfigIssue, ValidationResult

__all__ = [
    # Registry
    'ConfigRegistry',
    'merge_settings',

    # Providers
    'ConfigProvider',
    'FileConfigProvider',
    'MappingConfigProvider',

    # Validators
    'ConfigValidator',
    'SchemaValidator',
    'BusinessValidator',
    'ConfigIssue',
    'ValidationResult'
]
