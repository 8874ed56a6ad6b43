"""
Retrieval of the most appropriate validation model for a resource.

The retriever keeps one prefix trie per resource type, filled lazily from all
bound model providers, and returns the model with the longest applicable path
matching the requested resource path. Optionally the models of all super types
are collected and merged into the most specific one.
"""

import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from modelretriever.config import RetrieverSettings
from modelretriever.core.enums import BuildLockMode, InvalidationReason, RetrievalErrorCode
from modelretriever.core.exceptions import (
    HierarchyResolutionError, ModelProviderError, ValidationError
)
from modelretriever.hierarchy import ResourceTypeHierarchy
from modelretriever.index import PrefixTrie
from modelretriever.logger import get_retriever_logger
from modelretriever.model import ValidationModel, merge_validation_models
from modelretriever.providers import RankedProviders, ValidationModelProvider
from modelretriever.validators import Validator, ValidatorRegistry

ModelMerger = Callable[[ValidationModel, Sequence[ValidationModel]], ValidationModel]


class ModelRetriever:
    """
    Retrieves the validation model with the longest matching applicable path
    from any of the bound model providers, and caches all models retrieved so far.

    Thread safety:
    - The resource type -> trie map is only ever replaced or extended with
      fully built tries, readers never see a partially filled trie.
    - First-time builds are single-flight: concurrent callers for the same
      resource type wait for one build instead of querying providers again.
    - Every provider or validator change, and every invalidation event, drops
      the whole map. A build finishing after an invalidation re-populates its
      entry, the next invalidation or lookup converges again.
    """

    def __init__(
        self,
        hierarchy: Optional[ResourceTypeHierarchy] = None,
        settings: Optional[RetrieverSettings] = None,
        model_merger: ModelMerger = merge_validation_models,
        validators: Optional[ValidatorRegistry] = None
    ):
        self.hierarchy = hierarchy
        self.settings = settings or RetrieverSettings()
        self.model_merger = model_merger
        self.validators = validators if validators is not None else ValidatorRegistry()
        self.model_providers = RankedProviders()

        # resource type -> trie of models keyed by applicable path
        self._models_cache: Dict[str, PrefixTrie[ValidationModel]] = {}

        self._global_build_lock = threading.Lock()
        self._build_locks: Dict[str, threading.Lock] = {}
        self._build_locks_guard = threading.Lock()

        # Serialises provider and validator changes
        self._registration_lock = threading.RLock()

        self.logger = get_retriever_logger("ModelRetriever")

    # ===================
    # LOOKUP
    # ===================

    def get_model(
        self,
        resource_type: str,
        resource_path: str,
        consider_resource_super_types: bool = False
    ) -> Optional[ValidationModel]:
        """
        Get the validation model for a resource.

        Args:
            resource_type: The resource type to validate
            resource_path: Path of the resource, matched against applicable paths
            consider_resource_super_types: Also collect the models of all super
                types and merge them into the most specific one

        Returns:
            The applicable model, a merged model, or None if nothing applies

        Raises:
            HierarchyResolutionError: If the super type chain cannot be resolved
            ModelProviderError: If a provider fails while a trie is built
        """
        if not resource_type:
            raise ValidationError("resource_type", message="Resource type must not be empty")

        base_model = self._get_model(resource_type, resource_path)
        if not consider_resource_super_types:
            return base_model

        models = [base_model] if base_model is not None else []
        for super_type in self._super_types(resource_type):
            model = self._get_model(super_type, resource_path)
            if model is not None:
                models.append(model)

        if not models:
            return None
        if len(models) == 1:
            return models[0]

        self.logger.debug(
            "Merging validation models",
            resource_type=resource_type,
            merged_types=[m.validated_resource_type for m in models]
        )
        return self.model_merger(models[0], models[1:])

    def _get_model(self, resource_type: str, resource_path: str) -> Optional[ValidationModel]:
        models_for_resource_type = self.get_index(resource_type)
        model = models_for_resource_type.longest_match(resource_path)

        if model is None:
            if models_for_resource_type.is_empty():
                self.logger.debug("No validation model registered for resource type", resource_type=resource_type)
            elif self.settings.log_unmatched_paths:
                self.logger.warning(
                    "Although model for resource type is available, it is not allowed for path",
                    resource_type=resource_type,
                    resource_path=resource_path
                )
        return model

    def _super_types(self, resource_type: str) -> List[str]:
        """Super types of a resource type, most specific first."""
        if self.hierarchy is None:
            raise HierarchyResolutionError(resource_type, "No resource type hierarchy configured")

        super_types = []
        visited = {resource_type}
        current = resource_type
        while True:
            try:
                parent = self.hierarchy.parent_of(current)
            except HierarchyResolutionError:
                raise
            except Exception as e:
                raise HierarchyResolutionError(current, str(e)) from e

            if parent is None:
                return super_types
            if parent in visited:
                self.logger.warning(
                    "Cycle in resource type hierarchy, stopping super type walk",
                    resource_type=resource_type,
                    repeated_type=parent
                )
                return super_types
            if len(super_types) >= self.settings.max_hierarchy_depth:
                self.logger.warning(
                    "Maximum resource type hierarchy depth reached, stopping super type walk",
                    resource_type=resource_type,
                    max_depth=self.settings.max_hierarchy_depth
                )
                return super_types

            visited.add(parent)
            super_types.append(parent)
            current = parent

    # ===================
    # CACHE
    # ===================

    def get_index(self, resource_type: str) -> PrefixTrie[ValidationModel]:
        """Get the trie of a resource type, building it on the first request."""
        models_for_resource_type = self._models_cache.get(resource_type)
        if models_for_resource_type is None:
            models_for_resource_type = self._fill_trie_for_resource_type(resource_type)
        return models_for_resource_type

    def get_cached_index(self, resource_type: str) -> Optional[PrefixTrie[ValidationModel]]:
        """Get the trie of a resource type without building it."""
        return self._models_cache.get(resource_type)

    def is_cached(self, resource_type: str) -> bool:
        return resource_type in self._models_cache

    def cached_resource_types(self) -> List[str]:
        return list(self._models_cache.keys())

    def _build_lock_for(self, resource_type: str) -> threading.Lock:
        if self.settings.build_lock_mode is BuildLockMode.GLOBAL:
            return self._global_build_lock
        with self._build_locks_guard:
            lock = self._build_locks.get(resource_type)
            if lock is None:
                lock = self._build_locks[resource_type] = threading.Lock()
            return lock

    def _fill_trie_for_resource_type(self, resource_type: str) -> PrefixTrie[ValidationModel]:
        with self._build_lock_for(resource_type):
            # double-checked, another caller may just have finished the build
            models_for_resource_type = self._models_cache.get(resource_type)
            if models_for_resource_type is not None:
                return models_for_resource_type

            models_for_resource_type = self._build_trie(resource_type)
            self._models_cache[resource_type] = models_for_resource_type
            return models_for_resource_type

    def _build_trie(self, resource_type: str) -> PrefixTrie[ValidationModel]:
        """Fill a fresh trie with all models of all providers, in rank order."""
        trie: PrefixTrie[ValidationModel] = PrefixTrie()
        validators = self.validators.snapshot()
        providers = self.model_providers.providers()

        for provider in providers:
            for model in self._models_from(provider, resource_type, validators):
                for applicable_path in model.applicable_paths:
                    if not trie.insert(applicable_path, model):
                        self.logger.debug(
                            "Applicable path already taken by a higher ranked model",
                            resource_type=resource_type,
                            applicable_path=applicable_path,
                            source=model.source
                        )

        self.logger.debug(
            "Models cache filled for resource type",
            resource_type=resource_type,
            providers=len(providers),
            applicable_paths=len(trie)
        )
        return trie

    def _models_from(
        self,
        provider: ValidationModelProvider,
        resource_type: str,
        validators: Mapping[str, Validator]
    ) -> List[ValidationModel]:
        try:
            models = provider.get_models(resource_type, validators)
        except Exception as e:
            self.logger.error(
                "Model provider failed",
                provider=str(provider),
                resource_type=resource_type,
                error=str(e)
            )
            raise ModelProviderError(provider, resource_type, str(e)) from e

        if models is None:
            raise ModelProviderError(
                provider, resource_type, "Provider returned None instead of a list",
                RetrievalErrorCode.INVALID_PROVIDER_RESULT
            )
        models = list(models)
        if any(model is None for model in models):
            raise ModelProviderError(
                provider, resource_type, "Provider returned a None model",
                RetrievalErrorCode.INVALID_PROVIDER_RESULT
            )
        return models

    # ===================
    # INVALIDATION
    # ===================

    def invalidate_all(self, reason: InvalidationReason = InvalidationReason.EXPLICIT) -> None:
        """Drop all cached tries and their build locks, the next lookups rebuild them."""
        self._models_cache = {}
        with self._build_locks_guard:
            # builds still holding an old lock finish on their own
            self._build_locks = {}
        self.logger.debug("Models cache invalidated", reason=reason.value)

    def handle_event(self, event: Any) -> bool:
        """
        Handle an invalidation event.

        Returns:
            True if the event was on the invalidation topic and the cache was cleared
        """
        if getattr(event, 'topic', None) != self.settings.invalidation_topic:
            self.logger.debug("Ignoring event on unrelated topic", topic=getattr(event, 'topic', None))
            return False
        self.invalidate_all(InvalidationReason.EVENT)
        return True

    # ===================
    # PROVIDERS & VALIDATORS
    # ===================

    def add_model_provider(self, model_provider: ValidationModelProvider,
                           properties: Optional[Mapping[str, Any]] = None) -> None:
        with self._registration_lock:
            self.model_providers.bind(model_provider, properties)
            self.logger.debug(
                "Invalidating models cache because new model provider available",
                provider=str(model_provider)
            )
            self.invalidate_all(InvalidationReason.PROVIDER_ADDED)

    def remove_model_provider(self, model_provider: ValidationModelProvider,
                              properties: Optional[Mapping[str, Any]] = None) -> bool:
        with self._registration_lock:
            if not self.model_providers.unbind(model_provider, properties):
                return False
            self.logger.debug(
                "Invalidating models cache because model provider is no longer available",
                provider=str(model_provider)
            )
            self.invalidate_all(InvalidationReason.PROVIDER_REMOVED)
            return True

    def add_validator(self, validator: Validator) -> None:
        with self._registration_lock:
            self.validators.add(validator)
            self.logger.debug(
                "Invalidating models cache because validator is now available",
                validator_id=validator.validator_id
            )
            self.invalidate_all(InvalidationReason.VALIDATOR_ADDED)

    def remove_validator(self, validator: Validator) -> bool:
        with self._registration_lock:
            if self.validators.remove(validator) is None:
                return False
            self.logger.debug(
                "Invalidating models cache because validator is no longer available",
                validator_id=validator.validator_id
            )
            self.invalidate_all(InvalidationReason.VALIDATOR_REMOVED)
            return True
