"""
Shared test doubles for the model retriever tests.
"""

import threading
import time
from typing import Dict, List, Mapping, Optional

from modelretriever.hierarchy import ResourceTypeHierarchy
from modelretriever.model import ValidationModel, ResourceProperty, ChildResource
from modelretriever.providers import ValidationModelProvider
from modelretriever.validators import Validator


def make_model(resource_type: str, *paths: str, properties=(), children=(), source: str = "") -> ValidationModel:
    return ValidationModel(
        validated_resource_type=resource_type,
        applicable_paths=paths,
        resource_properties=tuple(ResourceProperty(name) for name in properties),
        children=tuple(ChildResource(name) for name in children),
        source=source or f"{resource_type}:{','.join(paths)}"
    )


class CountingProvider(ValidationModelProvider):
    """Provider returning fixed models and counting how often it is asked."""

    def __init__(self, models: List[ValidationModel] = None, delay: float = 0.0, name: str = "counting"):
        self.models = list(models or [])
        self.delay = delay
        self.name = name
        self.fail_with: Optional[Exception] = None
        self.calls: Dict[str, int] = {}
        self.seen_validators: List[Mapping[str, Validator]] = []
        self._lock = threading.Lock()

    def get_models(self, resource_type, validators):
        with self._lock:
            self.calls[resource_type] = self.calls.get(resource_type, 0) + 1
            self.seen_validators.append(validators)
        if self.delay:
            time.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        return [m for m in self.models if m.validated_resource_type == resource_type]

    def call_count(self, resource_type: str = None) -> int:
        with self._lock:
            if resource_type is None:
                return sum(self.calls.values())
            return self.calls.get(resource_type, 0)

    def __str__(self):
        return f"CountingProvider({self.name})"


class BrokenResultProvider(ValidationModelProvider):
    """Provider violating its contract by returning None entries."""

    def __init__(self, result):
        self.result = result

    def get_models(self, resource_type, validators):
        return self.result


class FailingHierarchy(ResourceTypeHierarchy):
    """Hierarchy that fails on every call and counts them."""

    def __init__(self):
        self.calls = 0

    def parent_of(self, resource_type):
        self.calls += 1
        raise RuntimeError("type hierarchy unavailable")


class RecordingHierarchy(ResourceTypeHierarchy):
    """Dict based hierarchy recording each requested type."""

    def __init__(self, parents: Dict[str, str]):
        self.parents = dict(parents)
        self.requested: List[str] = []

    def parent_of(self, resource_type):
        self.requested.append(resource_type)
        return self.parents.get(resource_type)


class RegexValidator(Validator):

    def validate(self, value, arguments):
        import re
        return re.match(arguments['regex'], str(value)) is not None


class NotEmptyValidator(Validator):

    def validate(self, value, arguments):
        return bool(value)


class NamedValidator(Validator):
    """Validator with an explicit id, used to test overwriting."""

    def __init__(self, validator_id: str):
        self._id = validator_id

    @property
    def validator_id(self):
        return self._id

    def validate(self, value, arguments):
        return True
