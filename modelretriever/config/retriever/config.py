"""
Retriever domain configuration classes.

This module defines the settings of the model retriever: hierarchy walk
limits, build locking and logging.
"""

from dataclasses import dataclass, field
from typing import Dict, Any

from modelretriever.core.enums import BuildLockMode
from modelretriever.events.event import CACHE_INVALIDATION_TOPIC


@dataclass
class LoggingSettings:
    """Logging output settings."""
    level: str = "INFO"
    json_logs: bool = False


@dataclass
class RetrieverSettings:
    """
    Main model retriever configuration.

    Attributes:
        max_hierarchy_depth: Maximum number of super types visited per lookup
        build_lock_mode: One lock per resource type, or one for all builds
        log_unmatched_paths: Warn when models exist but none applies to a path
        invalidation_topic: Event topic that clears the models cache
        logging: Logging output settings
    """

    max_hierarchy_depth: int = 50
    build_lock_mode: BuildLockMode = BuildLockMode.PER_TYPE
    log_unmatched_paths: bool = True
    invalidation_topic: str = CACHE_INVALIDATION_TOPIC
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'max_hierarchy_depth': self.max_hierarchy_depth,
            'build_lock_mode': self.build_lock_mode.value,
            'log_unmatched_paths': self.log_unmatched_paths,
            'invalidation_topic': self.invalidation_topic,
            'logging': {
                'level': self.logging.level,
                'json_logs': self.logging.json_logs
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RetrieverSettings':
        """Create configuration from dictionary."""
        config = cls()

        config.max_hierarchy_depth = data.get('max_hierarchy_depth', config.max_hierarchy_depth)

        if 'build_lock_mode' in data:
            config.build_lock_mode = BuildLockMode(data['build_lock_mode'])

        config.log_unmatched_paths = data.get('log_unmatched_paths', config.log_unmatched_paths)
        config.invalidation_topic = data.get('invalidation_topic', config.invalidation_topic)

        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingSettings(
                level=log_data.get('level', config.logging.level),
                json_logs=log_data.get('json_logs', config.logging.json_logs)
            )

        return config
