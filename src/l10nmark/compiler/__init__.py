"""Dictionary compilation package.

Resolves pointers and external resources in nested translation
dictionaries and flattens them into read-only lookup tables.

Submodules:
    keys       - ResourceKey construction (merge_key, split_key)
    loading    - ResourceLoader protocol, PathResourceLoader, MappingResourceLoader
    cache      - DictionaryCache (LRU keyed by dictionary content)
    dictionary - DictionaryCompiler, CompiledDictionary, compile_dictionary

Python 3.13+.
"""

from .cache import DictionaryCache
from .dictionary import (
    CompiledDictionary,
    DictionaryCompiler,
    clear_shared_cache,
    compile_dictionary,
)
from .keys import merge_key, split_key
from .loading import MappingResourceLoader, PathResourceLoader, ResourceLoader

__all__ = [
    "CompiledDictionary",
    "DictionaryCache",
    "DictionaryCompiler",
    "MappingResourceLoader",
    "PathResourceLoader",
    "ResourceLoader",
    "clear_shared_cache",
    "compile_dictionary",
    "merge_key",
    "split_key",
]
