"""
Configuration validation framework.

This module provides validation capabilities for configuration data.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from modelretriever.logger import get_retriever_logger


class ConfigIssue:
    """A single problem found while validating configuration data."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value

    def __repr__(self):
        return f"ConfigIssue({self.message!r})"


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool = True, errors: Optional[List[ConfigIssue]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: ConfigIssue):
        """Add a validation error."""
        self.errors.append(error)
        self.is_valid = False

    def merge(self, other: 'ValidationResult'):
        """Add all errors of another result."""
        for error in other.errors:
            self.add_error(error)

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors]

    def __bool__(self):
        return self.is_valid


class ConfigValidator(ABC):
    """Abstract base class for configuration validators."""

    def __init__(self, domain: str):
        self.domain = domain
        self.logger = get_retriever_logger(f"ConfigValidator_{domain}")

    @abstractmethod
    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """Validate configuration data."""
        pass


class SchemaValidator(ConfigValidator):
    """
    Schema-based configuration validator.

    Schema values are a type, a tuple of types, or a nested schema dict.
    Only keys present in the configuration are checked, missing keys fall
    back to defaults.
    """

    def __init__(self, domain: str, schema: Dict[str, Any], allow_unknown: bool = False):
        super().__init__(domain)
        self.schema = schema
        self.allow_unknown = allow_unknown

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """Validate configuration against schema."""
        result = ValidationResult()
        self._validate_dict(config, self.schema, result)
        return result

    def _validate_dict(self, config: Dict[str, Any], schema: Dict[str, Any], result: ValidationResult, path: str = ""):
        """Recursively validate dictionary against schema."""
        if not self.allow_unknown:
            for key in config:
                if key not in schema:
                    full_path = f"{path}.{key}" if path else key
                    result.add_error(ConfigIssue(f"Unknown field: {full_path}", field=key))

        for key, expected_type in schema.items():
            full_path = f"{path}.{key}" if path else key

            if key not in config:
                continue

            value = config[key]

            if isinstance(expected_type, (type, tuple)):
                # bool is an int subclass, don't accept it for numeric fields
                if isinstance(value, bool) and expected_type is int:
                    valid = False
                else:
                    valid = isinstance(value, expected_type)
                if not valid:
                    result.add_error(ConfigIssue(
                        f"Field {full_path} must be of type {_type_name(expected_type)}, got {type(value).__name__}",
                        field=key, value=value
                    ))
            elif isinstance(expected_type, dict):
                if isinstance(value, dict):
                    self._validate_dict(value, expected_type, result, full_path)
                else:
                    result.add_error(ConfigIssue(
                        f"Field {full_path} must be a dictionary, got {type(value).__name__}",
                        field=key, value=value
                    ))


class BusinessValidator(ConfigValidator):
    """Business logic validator for configuration data."""

    def __init__(self, domain: str, validation_rules: List[Callable[[Dict[str, Any]], Any]]):
        super().__init__(domain)
        self.validation_rules = validation_rules

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """Validate configuration using business rules."""
        result = ValidationResult()

        for rule in self.validation_rules:
            rule_result = rule(config)
            if isinstance(rule_result, ValidationResult):
                result.merge(rule_result)
            elif rule_result is False:
                result.add_error(ConfigIssue(f"Business rule {rule.__name__} failed"))

        return result


def _type_name(expected_type) -> str:
    if isinstance(expected_type, tuple):
        return " or ".join(t.__name__ for t in expected_type)
    return expected_type.__name__
