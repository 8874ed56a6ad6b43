"""
Prefix index used to find the model applicable to a resource path.
"""

from .trie import PrefixTrie

__all__ = ['PrefixTrie']
