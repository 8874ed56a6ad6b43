"""
File based validation model provider reading YAML definitions.

Every ``*.yaml`` / ``*.yml`` file in the directory holds a ``models`` list::

    models:
      - validated_resource_type: app/components/page
        applicable_paths: ["/content/site"]
        properties:
          - name: title
            validators:
              - id: app.validators.RegexValidator
                arguments: {regex: "^[a-z]+$"}
        children:
          - name: metadata
            optional: true
"""

import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .base import ValidationModelProvider
from modelretriever.core.exceptions import ConfigurationError, UnknownValidatorError
from modelretriever.logger import get_retriever_logger
from modelretriever.model import (
    ValidationModel, ResourceProperty, ChildResource, ValidatorInvocation
)
from modelretriever.validators import Validator


class YamlModelProvider(ValidationModelProvider):
    """
    Provider reading validation models from YAML files.

    Parsed files are cached and re-read only when their modification time or
    size changes. Files removed while a lookup lists the directory are
    skipped. Validator ids referenced by a model must be known, otherwise
    ``UnknownValidatorError`` is raised for the whole lookup.
    """

    PATTERNS = ("*.yaml", "*.yml")

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.logger = get_retriever_logger("YamlModelProvider")
        self._lock = threading.RLock()
        # path -> ((mtime_ns, size), entries)
        self._file_cache: Dict[Path, Tuple[Tuple[int, int], List[Dict[str, Any]]]] = {}

    def get_models(self, resource_type: str, validators: Mapping[str, Validator]) -> List[ValidationModel]:
        models = []
        for path, entries in self._load_all():
            for index, entry in enumerate(entries):
                if entry.get('validated_resource_type') != resource_type:
                    continue
                models.append(_build_model(entry, f"{path}#{index}", validators))
        return models

    def _load_all(self) -> List[Tuple[Path, List[Dict[str, Any]]]]:
        if not self.directory.is_dir():
            self.logger.debug("Model directory does not exist", directory=str(self.directory))
            return []

        with self._lock:
            files = self._list_files()
            loaded = []
            for path in files:
                entries = self._load_file(path)
                if entries is not None:
                    loaded.append((path, entries))

            # Forget files that were deleted since the last lookup
            for cached in list(self._file_cache):
                if cached not in files:
                    del self._file_cache[cached]
            return loaded

    def _list_files(self) -> List[Path]:
        return sorted({f for pattern in self.PATTERNS for f in self.directory.glob(pattern)})

    def _load_file(self, path: Path) -> Optional[List[Dict[str, Any]]]:
        """Entries of a model file, or None if it vanished after listing."""
        try:
            stat = path.stat()
            signature = (stat.st_mtime_ns, stat.st_size)
            cached = self._file_cache.get(path)
            if cached is not None and cached[0] == signature:
                return cached[1]

            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            self._file_cache.pop(path, None)
            self.logger.debug("Model file removed while loading", file=str(path))
            return None
        except yaml.YAMLError as e:
            raise ConfigurationError(str(path), reason=f"Invalid YAML: {e}") from e

        entries = _entries_of(data, str(path))
        self._file_cache[path] = (signature, entries)
        self.logger.debug("Model file loaded", file=str(path), models=len(entries))
        return entries

    def __str__(self):
        return f"YamlModelProvider({self.directory})"


def parse_models(data: Any, source: str, validators: Optional[Mapping[str, Validator]] = None) -> List[ValidationModel]:
    """
    Build validation models from an already parsed YAML document.

    Args:
        data: Parsed document with a ``models`` list
        source: Description of where the document came from
        validators: Known validators; when given, every referenced id must be present

    Returns:
        The models in declaration order
    """
    return [
        _build_model(entry, f"{source}#{index}", validators)
        for index, entry in enumerate(_entries_of(data, source))
    ]


def _entries_of(data: Any, source: str) -> List[Dict[str, Any]]:
    if not isinstance(data, dict):
        raise ConfigurationError(source, reason="Model file must contain a mapping")

    entries = data.get('models', [])
    if not isinstance(entries, list):
        raise ConfigurationError(source, reason="'models' must be a list")

    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"{source}#{index}", reason="Model entry must be a mapping")
        if not entry.get('validated_resource_type'):
            raise ConfigurationError(f"{source}#{index}", reason="Missing 'validated_resource_type'")
    return entries


def _build_model(entry: Dict[str, Any], source: str,
                 validators: Optional[Mapping[str, Validator]]) -> ValidationModel:
    paths = entry.get('applicable_paths')
    if isinstance(paths, str):
        paths = [paths]
    if not paths:
        raise ConfigurationError(source, reason="Missing 'applicable_paths'")

    return ValidationModel(
        validated_resource_type=entry['validated_resource_type'],
        applicable_paths=tuple(paths),
        resource_properties=_build_properties(entry.get('properties') or [], source, validators),
        children=_build_children(entry.get('children') or [], source, validators),
        source=source
    )


def _build_properties(items: List[Dict[str, Any]], source: str,
                      validators: Optional[Mapping[str, Validator]]) -> Tuple[ResourceProperty, ...]:
    properties = []
    for item in items:
        if not isinstance(item, dict) or not item.get('name'):
            raise ConfigurationError(source, reason=f"Invalid property definition: {item!r}")

        invocations = []
        for invocation in item.get('validators') or []:
            validator_id = invocation.get('id') if isinstance(invocation, dict) else None
            if not validator_id:
                raise ConfigurationError(source, reason=f"Validator without id on property '{item['name']}'")
            if validators is not None and validator_id not in validators:
                raise UnknownValidatorError(validator_id, source)
            invocations.append(ValidatorInvocation(
                validator_id=validator_id,
                arguments=invocation.get('arguments') or {},
                severity=invocation.get('severity')
            ))

        properties.append(ResourceProperty(
            name=item['name'],
            optional=bool(item.get('optional', False)),
            multiple=bool(item.get('multiple', False)),
            validator_invocations=tuple(invocations)
        ))
    return tuple(properties)


def _build_children(items: List[Dict[str, Any]], source: str,
                    validators: Optional[Mapping[str, Validator]]) -> Tuple[ChildResource, ...]:
    children = []
    for item in items:
        if not isinstance(item, dict) or not item.get('name'):
            raise ConfigurationError(source, reason=f"Invalid child definition: {item!r}")
        children.append(ChildResource(
            name=item['name'],
            optional=bool(item.get('optional', False)),
            resource_properties=_build_properties(item.get('properties') or [], source, validators),
            children=_build_children(item.get('children') or [], source, validators)
        ))
    return tuple(children)
