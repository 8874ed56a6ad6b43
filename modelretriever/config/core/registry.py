"""
Registry resolving the validated settings of a domain.
"""

import threading
from typing import Any, Dict, List, Mapping, Optional
from pathlib import Path

from .provider import ConfigProvider, FileConfigProvider
from .validator import ConfigValidator
from modelretriever.core.exceptions import ConfigurationError
from modelretriever.logger import get_retriever_logger


class ConfigRegistry:
    """
    Maps each settings domain to the provider it is read from and the
    validator it must pass.

    Domains nobody registered are read from ``<config_dir>/<domain>.yaml``.
    """

    def __init__(self, config_dir: str = "settings"):
        self.config_dir = Path(config_dir)
        self.logger = get_retriever_logger("ConfigRegistry")
        self._lock = threading.RLock()
        self._providers: Dict[str, ConfigProvider] = {}
        self._validators: Dict[str, ConfigValidator] = {}

    def register_domain(
        self,
        domain: str,
        provider: Optional[ConfigProvider] = None,
        validator: Optional[ConfigValidator] = None
    ) -> ConfigProvider:
        """
        Register where a domain is read from and how it is validated.

        Omitted arguments keep what is already registered; a domain without
        any provider gets a FileConfigProvider.
        """
        with self._lock:
            if provider is None:
                provider = self._providers.get(domain) or FileConfigProvider(domain, str(self.config_dir))
            self._providers[domain] = provider
            if validator is not None:
                self._validators[domain] = validator

        self.logger.debug(
            "Settings domain registered",
            domain=domain,
            source=provider.describe(),
            validated=validator is not None or self.validator_of(domain) is not None
        )
        return provider

    def get_provider(self, domain: str) -> ConfigProvider:
        with self._lock:
            provider = self._providers.get(domain)
        return provider if provider is not None else self.register_domain(domain)

    def validator_of(self, domain: str) -> Optional[ConfigValidator]:
        with self._lock:
            return self._validators.get(domain)

    def load(self, domain: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Load the settings of a domain with overrides applied on top.

        Nested mappings are merged key by key, everything else is replaced.

        Raises:
            ConfigurationError: If the result fails the domain's validator
        """
        provider = self.get_provider(domain)
        config = merge_settings(provider.load(), overrides or {})

        validator = self.validator_of(domain)
        if validator is not None:
            result = validator.validate(config)
            if not result.is_valid:
                self.logger.error("Settings validation failed", domain=domain,
                                  source=provider.describe(), errors=result.messages)
                raise ConfigurationError(domain, reason="; ".join(result.messages))
        return config

    def list_domains(self) -> List[str]:
        with self._lock:
            return list(self._providers)


def merge_settings(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = merge_settings(current, value)
        else:
            merged[key] = value
    return merged
