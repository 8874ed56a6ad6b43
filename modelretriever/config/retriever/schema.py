"""
Retriever configuration schema definitions.
"""

from typing import Any, Dict

from modelretriever.core.enums import BuildLockMode
from ..core.validator import BusinessValidator, ConfigIssue, SchemaValidator, ValidationResult

RETRIEVER_SCHEMA = {
    'max_hierarchy_depth': int,
    'build_lock_mode': str,
    'log_unmatched_paths': bool,
    'invalidation_topic': str,
    'logging': {
        'level': str,
        'json_logs': bool
    }
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _positive_depth(config: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    depth = config.get('max_hierarchy_depth', 1)
    if isinstance(depth, int) and depth < 1:
        result.add_error(ConfigIssue("max_hierarchy_depth must be at least 1", 'max_hierarchy_depth', depth))
    return result


def _known_lock_mode(config: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    mode = config.get('build_lock_mode')
    if isinstance(mode, str) and mode not in {m.value for m in BuildLockMode}:
        result.add_error(ConfigIssue(f"Unknown build_lock_mode: {mode}", 'build_lock_mode', mode))
    return result


def _known_log_level(config: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    level = (config.get('logging') or {}).get('level')
    if isinstance(level, str) and level.upper() not in LOG_LEVELS:
        result.add_error(ConfigIssue(f"Unknown log level: {level}", 'logging.level', level))
    return result


def _non_empty_topic(config: Dict[str, Any]) -> bool:
    return config.get('invalidation_topic', 'default') != ''


def get_retriever_validators():
    """Schema and business rule validators for the retriever domain."""
    return [
        SchemaValidator('retriever', RETRIEVER_SCHEMA),
        BusinessValidator('retriever', [_positive_depth, _known_lock_mode, _known_log_level, _non_empty_topic])
    ]


def validate_retriever_settings(config: Dict[str, Any]) -> ValidationResult:
    """
    Validate retriever configuration data.

    Args:
        config: Configuration dictionary to validate

    Returns:
        Combined result of the schema and business rule checks
    """
    result = ValidationResult()
    for validator in get_retriever_validators():
        result.merge(validator.validate(config))
    return result
