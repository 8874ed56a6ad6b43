"""
Rank ordered registry of validation model providers.
"""

import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

from readerwriterlock import rwlock

from .base import ValidationModelProvider, SERVICE_RANKING
from modelretriever.logger import get_retriever_logger


@dataclass
class _Binding:
    provider: ValidationModelProvider
    properties: Dict[str, Any]
    sequence: int
    ranking: int = field(init=False)

    def __post_init__(self):
        self.ranking = _ranking_of(self.properties)


def _ranking_of(properties: Mapping[str, Any]) -> int:
    ranking = properties.get(SERVICE_RANKING, 0)
    try:
        return int(ranking)
    except (TypeError, ValueError):
        return 0


class RankedProviders:
    """
    Ordered set of validation model providers.

    Iteration yields the highest ranked provider first; providers with the
    same ranking come in the order they were first bound. A provider is
    identified by the object itself.

    Binding and unbinding are serialised by the writer side of a
    reader/writer lock. Iteration works on a snapshot taken under the reader
    lock, so a slow provider never blocks registry changes.
    """

    def __init__(self):
        self._bindings: Dict[int, _Binding] = {}
        self._sequence = itertools.count()
        self._lock = rwlock.RWLockFair()
        self.logger = get_retriever_logger("RankedProviders")

    def bind(self, provider: ValidationModelProvider, properties: Optional[Mapping[str, Any]] = None) -> None:
        """
        Add a provider or replace the properties of an already bound one.

        Args:
            provider: The provider to bind
            properties: Provider properties, ``service.ranking`` defines the order
        """
        properties = dict(properties or {})
        with self._lock.gen_wlock():
            existing = self._bindings.get(id(provider))
            if existing is not None:
                sequence = existing.sequence
                self.logger.debug("Provider re-bound, properties replaced", provider=str(provider))
            else:
                sequence = next(self._sequence)
            self._bindings[id(provider)] = _Binding(provider, properties, sequence)

    def unbind(self, provider: ValidationModelProvider, properties: Optional[Mapping[str, Any]] = None) -> bool:
        """
        Remove a provider.

        Returns:
            True if the provider was bound, False if the call was a no-op
        """
        with self._lock.gen_wlock():
            binding = self._bindings.get(id(provider))
            if binding is None or binding.provider is not provider:
                return False
            del self._bindings[id(provider)]
            return True

    def providers(self) -> List[ValidationModelProvider]:
        """Snapshot of the bound providers in rank order."""
        with self._lock.gen_rlock():
            bindings = sorted(self._bindings.values(), key=lambda b: (-b.ranking, b.sequence))
        return [binding.provider for binding in bindings]

    def properties_of(self, provider: ValidationModelProvider) -> Optional[Dict[str, Any]]:
        with self._lock.gen_rlock():
            binding = self._bindings.get(id(provider))
            return dict(binding.properties) if binding is not None else None

    def __iter__(self) -> Iterator[ValidationModelProvider]:
        return iter(self.providers())

    def __len__(self) -> int:
        with self._lock.gen_rlock():
            return len(self._bindings)

    def __contains__(self, provider) -> bool:
        with self._lock.gen_rlock():
            binding = self._bindings.get(id(provider))
            return binding is not None and binding.provider is provider
