from abc import ABC, abstractmethod
from typing import List, Optional


class ResourceTypeHierarchy(ABC):
    """Abstract base class resolving the super type of a resource type."""

    @abstractmethod
    def parent_of(self, resource_type: str) -> Optional[str]:
        """Return the direct super type, or None if the type has none."""
        pass

    def supertype_chain(self, resource_type: str, max_depth: int = 50) -> List[str]:
        """
        List the super types of a resource type, most specific first.

        The walk stops at the top of the hierarchy, on the first repeated
        type, or after ``max_depth`` super types.
        """
        chain = []
        visited = {resource_type}
        current = resource_type
        while len(chain) < max_depth:
            current = self.parent_of(current)
            if current is None or current in visited:
                break
            visited.add(current)
            chain.append(current)
        return chain
