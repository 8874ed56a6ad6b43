"""
Validation model data types.

- ValidationModel: the per resource type model served by the retriever
- MergedValidationModel: a model combined with the models of its super types
"""

from .validation_model import (
    ValidationModel, ResourceProperty, ChildResource, ValidatorInvocation
)
from .merged import MergedValidationModel, merge_validation_models

__all__ = [
    'ValidationModel',
    'ResourceProperty',
    'ChildResource',
    'ValidatorInvocation',
    'MergedValidationModel',
    'merge_validation_models'
]
