"""
Thread-safe registry of validators keyed by validator id.
"""

import threading
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .base import Validator
from modelretriever.logger import get_retriever_logger


class ValidatorRegistry:
    """
    Registry of all known validators.

    Adding a validator whose id is already registered overwrites the
    previous one. ``snapshot()`` returns a read-only view that is passed to
    model providers.
    """

    def __init__(self):
        self._validators: Dict[str, Validator] = {}
        self._lock = threading.RLock()
        self.logger = get_retriever_logger("ValidatorRegistry")

    def add(self, validator: Validator) -> Optional[Validator]:
        """
        Register a validator.

        Returns:
            The validator that was replaced, if any
        """
        with self._lock:
            previous = self._validators.get(validator.validator_id)
            self._validators[validator.validator_id] = validator

        if previous is not None:
            self.logger.debug(
                "Validator has been registered already and was now overwritten",
                validator_id=validator.validator_id
            )
        return previous

    def remove(self, validator: Validator) -> Optional[Validator]:
        """
        Unregister a validator.

        Returns:
            The removed validator, or None if it was not registered
        """
        with self._lock:
            return self._validators.pop(validator.validator_id, None)

    def get(self, validator_id: str) -> Optional[Validator]:
        with self._lock:
            return self._validators.get(validator_id)

    def snapshot(self) -> Mapping[str, Validator]:
        """Read-only copy of the current validator mapping."""
        with self._lock:
            return MappingProxyType(dict(self._validators))

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._validators.keys())

    def __contains__(self, validator_id) -> bool:
        with self._lock:
            return validator_id in self._validators

    def __len__(self) -> int:
        with self._lock:
            return len(self._validators)
