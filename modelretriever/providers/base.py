from abc import ABC, abstractmethod
from typing import List, Mapping

from modelretriever.model import ValidationModel
from modelretriever.validators import Validator

# Provider property key used for ordering
SERVICE_RANKING = "service.ranking"


class ValidationModelProvider(ABC):
    """
    Abstract base class for validation model providers.

    Defines the interface that all model sources must implement.
    """

    @abstractmethod
    def get_models(self, resource_type: str, validators: Mapping[str, Validator]) -> List[ValidationModel]:
        """
        Get all validation models for a resource type.

        Args:
            resource_type: The validated resource type
            validators: Known validators keyed by validator id

        Returns:
            Models for the resource type, independent of any path. May be
            empty but must not contain None.
        """
        pass
