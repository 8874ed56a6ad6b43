import threading
from typing import Dict, Mapping, Optional

from .base import ResourceTypeHierarchy


class MappingTypeHierarchy(ResourceTypeHierarchy):
    """
    Resource type hierarchy backed by a dictionary of type -> super type.
    """

    def __init__(self, parents: Optional[Mapping[str, str]] = None):
        self._lock = threading.Lock()
        self._parents: Dict[str, str] = dict(parents or {})

    def parent_of(self, resource_type: str) -> Optional[str]:
        with self._lock:
            return self._parents.get(resource_type)

    def set_parent(self, resource_type: str, super_type: str) -> None:
        with self._lock:
            self._parents[resource_type] = super_type

    def remove_parent(self, resource_type: str) -> Optional[str]:
        with self._lock:
            return self._parents.pop(resource_type, None)
