import threading
from typing import Dict, List, Mapping

from .base import ValidationModelProvider
from modelretriever.model import ValidationModel
from modelretriever.validators import Validator


class InMemoryModelProvider(ValidationModelProvider):
    """
    Provider that keeps validation models in memory.

    Models are added and removed at runtime. The provider does not tell the
    retriever about changes; invalidate the cache after modifying it.
    """

    def __init__(self, models: List[ValidationModel] = None, name: str = "in-memory"):
        self.name = name
        self._lock = threading.RLock()
        self._models: Dict[str, List[ValidationModel]] = {}
        for model in models or []:
            self.add_model(model)

    def add_model(self, model: ValidationModel) -> None:
        with self._lock:
            self._models.setdefault(model.validated_resource_type, []).append(model)

    def remove_model(self, model: ValidationModel) -> bool:
        with self._lock:
            models = self._models.get(model.validated_resource_type, [])
            if model not in models:
                return False
            models.remove(model)
            if not models:
                del self._models[model.validated_resource_type]
            return True

    def clear(self) -> None:
        with self._lock:
            self._models.clear()

    def get_models(self, resource_type: str, validators: Mapping[str, Validator]) -> List[ValidationModel]:
        with self._lock:
            return list(self._models.get(resource_type, []))

    def __str__(self):
        return f"InMemoryModelProvider({self.name})"
