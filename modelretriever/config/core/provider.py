"""
Sources of raw settings mappings.

A provider only knows where the settings of one domain come from. Merging
overrides and validation happen in the registry.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Tuple
from pathlib import Path
import copy
import threading

import yaml

from modelretriever.core.exceptions import ConfigurationError
from modelretriever.logger import get_retriever_logger


class ConfigProvider(ABC):
    """Read-only source of the settings of one domain."""

    def __init__(self, domain: str):
        self.domain = domain
        self.logger = get_retriever_logger("ConfigProvider").bind(domain=domain)

    @abstractmethod
    def load(self) -> Dict[str, Any]:
        """
        Load the raw settings of the domain.

        Returns:
            A fresh mapping the caller may modify, empty when nothing is set
        """

    def describe(self) -> str:
        return type(self).__name__


class FileConfigProvider(ConfigProvider):
    """
    Settings read from ``<config_dir>/<domain>.yaml``.

    A missing file means every setting keeps its default. The parsed file is
    kept until its modification time or size changes.
    """

    def __init__(self, domain: str, config_dir: str = "settings"):
        super().__init__(domain)
        self.config_dir = Path(config_dir)
        self._lock = threading.Lock()
        self._signature: Optional[Tuple[int, int]] = None
        self._data: Dict[str, Any] = {}

    @property
    def config_file(self) -> Path:
        return self.config_dir / f"{self.domain}.yaml"

    def load(self) -> Dict[str, Any]:
        with self._lock:
            try:
                stat = self.config_file.stat()
            except FileNotFoundError:
                self._signature, self._data = None, {}
                return {}

            signature = (stat.st_mtime_ns, stat.st_size)
            if signature != self._signature:
                self._data = self._read()
                self._signature = signature
                self.logger.debug("Settings file loaded", file=str(self.config_file))
            return copy.deepcopy(self._data)

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.config_file, 'r') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            return {}
        except yaml.YAMLError as e:
            self.logger.error("Failed to parse settings file", file=str(self.config_file), error=str(e))
            raise ConfigurationError(str(self.config_file), reason=f"Invalid YAML: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(str(self.config_file), reason="Settings file must contain a mapping")
        return data

    def describe(self) -> str:
        return str(self.config_file)


class MappingConfigProvider(ConfigProvider):
    """Settings handed over in code by an embedding application."""

    def __init__(self, domain: str, config: Optional[Mapping[str, Any]] = None):
        super().__init__(domain)
        self._config = copy.deepcopy(dict(config or {}))

    def load(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)
