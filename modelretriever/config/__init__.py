"""
Configuration management for the model retriever.

This module provides:
- Retriever settings (hierarchy limits, build locking, logging)
- Core registry and provider infrastructure
"""

from typing import Any, Mapping, Optional

# Core infrastructure
from .core import (
    ConfigRegistry, ConfigProvider, FileConfigProvider, MappingConfigProvider,
    ConfigValidator, SchemaValidator, BusinessValidator, ConfigIssue, ValidationResult
)

# Domain configurations
from .retriever import (
    RetrieverSettings, LoggingSettings, RETRIEVER_SCHEMA, validate_retriever_settings
)

RETRIEVER_DOMAIN = "retriever"


def get_config_registry(config_dir: str = "settings") -> ConfigRegistry:
    """Create a configuration registry with the retriever domain validator."""
    registry = ConfigRegistry(config_dir)
    registry.register_domain(RETRIEVER_DOMAIN, validator=_RetrieverSettingsValidator())
    return registry


def get_retriever_settings(
    registry: Optional[ConfigRegistry] = None,
    overrides: Optional[Mapping[str, Any]] = None
) -> RetrieverSettings:
    """
    Load retriever settings from a configuration registry.

    Args:
        registry: Registry to read from, defaults to ``settings/retriever.yaml``
        overrides: Settings applied on top of the stored ones

    Raises:
        ConfigurationError: If the resulting settings are invalid
    """
    if registry is None:
        registry = get_config_registry()
    elif registry.validator_of(RETRIEVER_DOMAIN) is None:
        registry.register_domain(RETRIEVER_DOMAIN, validator=_RetrieverSettingsValidator())

    return RetrieverSettings.from_dict(registry.load(RETRIEVER_DOMAIN, overrides))


class _RetrieverSettingsValidator(ConfigValidator):

    def __init__(self):
        super().__init__(RETRIEVER_DOMAIN)

    def validate(self, config):
        return validate_retriever_settings(config)


__all__ = [
    # Core infrastructure
    'ConfigRegistry',
    'ConfigProvider',
    'FileConfigProvider',
    'MappingConfigProvider',
    'ConfigValidator',
    'SchemaValidator',
    'BusinessValidator',
    'ConfigIssue',
    'ValidationResult',

    # Retriever domain
    'RetrieverSettings',
    'LoggingSettings',
    'RETRIEVER_SCHEMA',
    'validate_retriever_settings',
    'RETRIEVER_DOMAIN',

    # Convenience functions
    'get_config_registry',
    'get_retriever_settings'
]
