from abc import ABC, abstractmethod
from typing import Any, Mapping


class Validator(ABC):
    """
    Abstract base class for property validators.

    A validator is identified by ``validator_id``, which defaults to the
    fully qualified class name.
    """

    @property
    def validator_id(self) -> str:
        return f"{type(self).__module__}.{type(self).__qualname__}"

    @abstractmethod
    def validate(self, value: Any, arguments: Mapping[str, Any]) -> bool:
        """Check a single property value."""
        pass

    def __repr__(self):
        return f"{type(self).__name__}(id={self.validator_id!r})"
