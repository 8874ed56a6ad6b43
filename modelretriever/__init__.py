"""
Lookup-and-merge cache of validation models.

Resolves the validation model applicable to a (resource type, resource path)
pair from pluggable providers, walking the resource super type chain on
request.
"""

from modelretriever.config import RetrieverSettings, get_config_registry, get_retriever_settings
from modelretriever.core.exceptions import (
    ModelRetrieverError, ValidationError, ConfigurationError, InvalidModelError,
    RetrievalError, HierarchyResolutionError, ModelProviderError, UnknownValidatorError
)
from modelretriever.events import CacheInvalidationListener, InvalidationEvent, CACHE_INVALIDATION_TOPIC
from modelretriever.hierarchy import ResourceTypeHierarchy, MappingTypeHierarchy
from modelretriever.index import PrefixTrie
from modelretriever.logger import init_logger, get_retriever_logger
from modelretriever.model import (
    ValidationModel, ResourceProperty, ChildResource, ValidatorInvocation,
    MergedValidationModel, merge_validation_models
)
from modelretriever.providers import (
    ValidationModelProvider, RankedProviders, InMemoryModelProvider, YamlModelProvider
)
from modelretriever.retriever import ModelRetriever
from modelretriever.validators import Validator, ValidatorRegistry

__version__ = "0.1.0"

__all__ = [
    'ModelRetriever',
    'RetrieverSettings',
    'get_config_registry',
    'get_retriever_settings',
    'ModelRetrieverError',
    'ValidationError',
    'ConfigurationError',
    'InvalidModelError',
    'RetrievalError',
    'HierarchyResolutionError',
    'ModelProviderError',
    'UnknownValidatorError',
    'CacheInvalidationListener',
    'InvalidationEvent',
    'CACHE_INVALIDATION_TOPIC',
    'ResourceTypeHierarchy',
    'MappingTypeHierarchy',
    'PrefixTrie',
    'init_logger',
    'get_retriever_logger',
    'ValidationModel',
    'ResourceProperty',
    'ChildResource',
    'ValidatorInvocation',
    'MergedValidationModel',
    'merge_validation_models',
    'ValidationModelProvider',
    'RankedProviders',
    'InMemoryModelProvider',
    'YamlModelProvider',
    'Validator',
    'ValidatorRegistry'
]
