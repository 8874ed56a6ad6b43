"""
Character keyed prefix trie with longest-matching-prefix lookup.
"""

from typing import Dict, Generic, Iterator, List, Optional, TypeVar

from modelretriever.core.exceptions import ValidationError

T = TypeVar('T')

_MISSING = object()


class _Node:
    __slots__ = ('children', 'value')

    def __init__(self):
        self.children: Dict[str, '_Node'] = {}
        self.value = _MISSING


class PrefixTrie(Generic[T]):
    """
    Maps string prefixes to values.

    Matching uses plain string prefix semantics: ``"/content/a"`` is a
    prefix of ``"/content/abc"`` even though the path segments differ.
    Inserting a prefix that is already stored keeps the first value, so
    among equally specific entries the earliest insert wins.

    The trie is only ever filled by the thread that builds it and is
    published afterwards, so it carries no lock of its own.
    """

    def __init__(self):
        self._root = _Node()
        self._prefixes: List[str] = []

    def insert(self, prefix: str, value: T) -> bool:
        """
        Store a value under a prefix.

        Args:
            prefix: Non-empty key
            value: Value returned for paths starting with ``prefix``

        Returns:
            True if the value was stored, False if the prefix was already taken

        Raises:
            ValidationError: If the prefix is empty or not a string
        """
        if not isinstance(prefix, str) or not prefix:
            raise ValidationError("prefix", repr(prefix), "Prefix must be a non-empty string")

        node = self._root
        for char in prefix:
            node = node.children.setdefault(char, _Node())

        if node.value is not _MISSING:
            return False

        node.value = value
        self._prefixes.append(prefix)
        return True

    def longest_match(self, path: str) -> Optional[T]:
        """Return the value of the longest stored prefix of ``path``, or None."""
        if path is None:
            return None

        node = self._root
        match = None
        for char in path:
            node = node.children.get(char)
            if node is None:
                break
            if node.value is not _MISSING:
                match = node.value
        return match

    def is_empty(self) -> bool:
        return not self._prefixes

    def prefixes(self) -> List[str]:
        """Stored prefixes in insertion order."""
        return list(self._prefixes)

    def __len__(self) -> int:
        return len(self._prefixes)

    def __contains__(self, prefix) -> bool:
        if not isinstance(prefix, str) or not prefix:
            return False
        node = self._root
        for char in prefix:
            node = node.children.get(char)
            if node is None:
                return False
        return node.value is not _MISSING

    def __iter__(self) -> Iterator[str]:
        return iter(self.prefixes())

    def __repr__(self):
        return f"PrefixTrie(prefixes={self._prefixes!r})"
