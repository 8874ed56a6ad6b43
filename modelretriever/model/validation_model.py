"""
Validation model definitions.

A validation model describes the properties and children a resource of a
given resource type must have. The retriever never looks inside a model: it
only uses ``applicable_paths`` to index it and ``validated_resource_type`` for
logging.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from modelretriever.core.exceptions import InvalidModelError


@dataclass(frozen=True)
class ValidatorInvocation:
    """A reference to a registered validator together with its arguments."""
    validator_id: str
    arguments: Mapping[str, Any] = field(default_factory=dict, hash=False)
    severity: Optional[int] = None

    def __post_init__(self):
        if not self.validator_id:
            raise InvalidModelError("validator_id", message="Validator id must not be empty")
        object.__setattr__(self, 'arguments', MappingProxyType(dict(self.arguments)))


@dataclass(frozen=True)
class ResourceProperty:
    """A property expected on the validated resource."""
    name: str
    optional: bool = False
    multiple: bool = False
    validator_invocations: Tuple[ValidatorInvocation, ...] = ()

    def __post_init__(self):
        if not self.name:
            raise InvalidModelError("name", message="Resource property name must not be empty")
        object.__setattr__(self, 'validator_invocations', tuple(self.validator_invocations))


@dataclass(frozen=True)
class ChildResource:
    """A child resource expected below the validated resource."""
    name: str
    optional: bool = False
    resource_properties: Tuple[ResourceProperty, ...] = ()
    children: Tuple['ChildResource', ...] = ()

    def __post_init__(self):
        if not self.name:
            raise InvalidModelError("name", message="Child resource name must not be empty")
        object.__setattr__(self, 'resource_properties', tuple(self.resource_properties))
        object.__setattr__(self, 'children', tuple(self.children))


@dataclass(frozen=True)
class ValidationModel:
    """
    Validation model for one resource type.

    Immutable once built. ``applicable_paths`` holds the path prefixes the
    model applies to; it must contain at least one non-empty string.
    """
    validated_resource_type: str
    applicable_paths: Tuple[str, ...]
    resource_properties: Tuple[ResourceProperty, ...] = ()
    children: Tuple[ChildResource, ...] = ()
    source: str = ""

    def __post_init__(self):
        if not self.validated_resource_type:
            raise InvalidModelError("validated_resource_type", message="Resource type must not be empty")

        if isinstance(self.applicable_paths, str):
            raise InvalidModelError(
                "applicable_paths", self.applicable_paths,
                "Applicable paths must be a sequence of strings, not a single string"
            )
        paths = tuple(self.applicable_paths)
        if not paths:
            raise InvalidModelError("applicable_paths", message="At least one applicable path is required")
        for path in paths:
            if not isinstance(path, str) or not path:
                raise InvalidModelError(
                    "applicable_paths", repr(path), "Applicable paths must be non-empty strings"
                )

        object.__setattr__(self, 'applicable_paths', paths)
        object.__setattr__(self, 'resource_properties', tuple(self.resource_properties))
        object.__setattr__(self, 'children', tuple(self.children))

    def get_resource_property(self, name: str) -> Optional[ResourceProperty]:
        """Get a resource property by name."""
        for resource_property in self.resource_properties:
            if resource_property.name == name:
                return resource_property
        return None

    def get_child(self, name: str) -> Optional[ChildResource]:
        """Get a child resource by name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the model to a plain dictionary (the YAML layout)."""
        return {
            'validated_resource_type': self.validated_resource_type,
            'applicable_paths': list(self.applicable_paths),
            'properties': [_property_to_dict(p) for p in self.resource_properties],
            'children': [_child_to_dict(c) for c in self.children],
            'source': self.source
        }

    def __str__(self):
        return f"ValidationModel({self.validated_resource_type}, paths={list(self.applicable_paths)}, source={self.source!r})"


def _property_to_dict(resource_property: ResourceProperty) -> Dict[str, Any]:
    return {
        'name': resource_property.name,
        'optional': resource_property.optional,
        'multiple': resource_property.multiple,
        'validators': [
            {
                'id': invocation.validator_id,
                'arguments': dict(invocation.arguments),
                'severity': invocation.severity
            }
            for invocation in resource_property.validator_invocations
        ]
    }


def _child_to_dict(child: ChildResource) -> Dict[str, Any]:
    return {
        'name': child.name,
        'optional': child.optional,
        'properties': [_property_to_dict(p) for p in child.resource_properties],
        'children': [_child_to_dict(c) for c in child.children]
    }
