"""
Merging of validation models along the resource super type chain.
"""

from typing import Dict, List, Sequence

from .validation_model import ValidationModel, ResourceProperty, ChildResource


class MergedValidationModel(ValidationModel):
    """
    A validation model combined with the models of less specific resource types.

    The base model keeps its resource type, applicable paths and source.
    Resource properties and children are collected from the base model first
    and then from every merged model in order; an entry whose name is already
    present is skipped, so the most specific definition wins.
    """

    def __init__(self, base_model: ValidationModel, models_to_merge: Sequence[ValidationModel]):
        properties: Dict[str, ResourceProperty] = {}
        children: Dict[str, ChildResource] = {}

        for model in [base_model, *models_to_merge]:
            for resource_property in model.resource_properties:
                properties.setdefault(resource_property.name, resource_property)
            for child in model.children:
                children.setdefault(child.name, child)

        super().__init__(
            validated_resource_type=base_model.validated_resource_type,
            applicable_paths=base_model.applicable_paths,
            resource_properties=tuple(properties.values()),
            children=tuple(children.values()),
            source=base_model.source
        )
        object.__setattr__(self, 'base_model', base_model)
        object.__setattr__(self, 'merged_models', tuple(models_to_merge))

    @property
    def merged_resource_types(self) -> List[str]:
        """Resource types that contributed to this model, most specific first."""
        return [self.base_model.validated_resource_type] + [
            model.validated_resource_type for model in self.merged_models
        ]


def merge_validation_models(base_model: ValidationModel,
                            models_to_merge: Sequence[ValidationModel]) -> ValidationModel:
    """Default merger used by the retriever."""
    return MergedValidationModel(base_model, models_to_merge)
