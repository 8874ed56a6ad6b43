"""
Resource type hierarchy used to walk from a resource type to its super types.
"""

from .base import ResourceTypeHierarchy
from .mapping import MappingTypeHierarchy

__all__ = ['ResourceTypeHierarchy', 'MappingTypeHierarchy']
