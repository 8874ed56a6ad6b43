"""
Validators known to the system.

Validators are handed to model providers unchanged; the retriever only
tracks them so that the models cache can be invalidated when they change.
"""

from .base import Validator
from .registry import ValidatorRegistry

__all__ = ['Validator', 'ValidatorRegistry']
