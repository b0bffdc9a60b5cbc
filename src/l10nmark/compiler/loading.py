"""External resource loading for dictionary compilation.

A dictionary sub-map carrying the resource marker key names a fragment to
splice in place:

    {"en": {"help": {"__load-resource": "en/help.json"}}}

Loaders turn such names into mappings. Loads are memoized by name for the
lifetime of the loader (resource content is assumed static); call
clear_cache() after changing resources on disk.

Components:
    ResourceLoader - Protocol for fragment loaders (structural typing)
    PathResourceLoader - Disk-based loader for .json and .po fragments
    MappingResourceLoader - In-memory fragments

Python 3.13+.
"""

from __future__ import annotations

import io
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from threading import RLock
from typing import Protocol

from babel.messages.pofile import PoFileError, read_po

from l10nmark.compiler.keys import split_key
from l10nmark.constants import KEY_DELIMITERS, SYMBOL_PREFIX
from l10nmark.diagnostics import CompileError, ErrorTemplate

__all__ = [
    "MappingResourceLoader",
    "PathResourceLoader",
    "ResourceLoader",
]

logger = logging.getLogger(__name__)

type Fragment = Mapping[str, object]


class ResourceLoader(Protocol):
    """Protocol for loading dictionary fragments by name.

    This is a Protocol (structural typing) rather than ABC so any object
    with a matching load() method can serve fragments.

    Example:
        >>> class StaticLoader:
        ...     def load(self, name: str) -> Mapping[str, object]:
        ...         return {"greeting": "Hello"}
        >>> compiler = DictionaryCompiler(StaticLoader())
    """

    def load(self, name: str) -> Fragment:
        """Load the named fragment.

        Args:
            name: Resource name from the dictionary marker

        Returns:
            Dictionary fragment

        Raises:
            CompileError: If the resource is missing, unreadable or malformed
        """
        ...


class _MemoizedLoader(ABC):
    """Shared name-keyed memoization for concrete loaders.

    Subclasses implement _load(); the base cannot be instantiated.
    """

    __slots__ = ("_cache", "_lock")

    def __init__(self) -> None:
        self._cache: dict[str, Fragment] = {}
        self._lock = RLock()

    def load(self, name: str) -> Fragment:
        """Load the named fragment, reusing an earlier result."""
        with self._lock:
            cached = self._cache.get(name)
            if cached is not None:
                return cached
            fragment = self._load(name)
            self._cache[name] = fragment
            logger.debug("Loaded external resource: %s", name)
            return fragment

    def clear_cache(self) -> None:
        """Forget every loaded fragment."""
        with self._lock:
            self._cache.clear()

    @abstractmethod
    def _load(self, name: str) -> Fragment:
        """Read the named fragment without memoization."""


class MappingResourceLoader(_MemoizedLoader):
    """Serves fragments from an in-memory mapping.

    Example:
        >>> loader = MappingResourceLoader({"extra": {"bye": "Goodbye"}})
        >>> loader.load("extra")
        {'bye': 'Goodbye'}
    """

    __slots__ = ("_fragments",)

    def __init__(self, fragments: Mapping[str, Fragment]) -> None:
        super().__init__()
        self._fragments = fragments

    def _load(self, name: str) -> Fragment:
        try:
            fragment = self._fragments[name]
        except KeyError:
            raise CompileError(ErrorTemplate.resource_not_found(name)) from None
        if not isinstance(fragment, Mapping):
            raise CompileError(
                ErrorTemplate.resource_malformed(name, f"got {type(fragment).__name__}")
            )
        return fragment


class PathResourceLoader(_MemoizedLoader):
    """File system loader for dictionary fragments.

    Resource names are paths relative to a root directory. The suffix picks
    the decoder:

        .json  JSON object (hiccup lists and colon-prefixed symbols allowed)
        .po    gettext catalog read with Babel; msgid is the resource id,
               msgctxt (if any) a scope, msgstr the template. Untranslated
               and fuzzy entries are skipped. msgstr text is never read as
               a symbol; msgids and contexts may use "." and "/" only
               between non-empty key segments.

    Security:
        Names containing "..", absolute paths and names resolving outside
        the root directory are rejected.

    Example:
        >>> loader = PathResourceLoader("locales")
        >>> loader.load("en/help.json")
        # Loads from: locales/en/help.json
    """

    __slots__ = ("_root",)

    def __init__(self, root_dir: str | Path) -> None:
        super().__init__()
        self._root = Path(root_dir).resolve()

    @property
    def root_dir(self) -> Path:
        """Resolved root directory."""
        return self._root

    def _validate_name(self, name: object) -> Path:
        if not isinstance(name, str) or not name:
            raise CompileError(ErrorTemplate.resource_name_invalid(name, "expected a non-empty string"))
        if name.strip() != name:
            raise CompileError(
                ErrorTemplate.resource_name_invalid(name, "leading or trailing whitespace")
            )
        if Path(name).is_absolute() or name.startswith(("/", "\\")):
            raise CompileError(ErrorTemplate.resource_name_invalid(name, "absolute path"))
        if ".." in Path(name).parts:
            raise CompileError(
                ErrorTemplate.resource_name_invalid(name, "path traversal sequence")
            )
        full_path = (self._root / name).resolve()
        if not full_path.is_relative_to(self._root):
            raise CompileError(
                ErrorTemplate.resource_name_invalid(name, "resolves outside the root directory")
            )
        return full_path

    def _load(self, name: str) -> Fragment:
        path = self._validate_name(name)
        suffix = path.suffix.lower()
        if suffix not in (".json", ".po"):
            raise CompileError(ErrorTemplate.resource_format_unsupported(name, suffix))
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            logger.error("External resource not found: %s", path)
            raise CompileError(ErrorTemplate.resource_not_found(name)) from None
        except OSError as e:
            logger.error("Failed to read external resource %s: %s", path, e)
            raise CompileError(ErrorTemplate.resource_unreadable(name, str(e))) from e

        fragment = _decode_po(name, data) if suffix == ".po" else _decode_json(name, data)
        if not isinstance(fragment, Mapping):
            raise CompileError(
                ErrorTemplate.resource_malformed(name, f"top level is {type(fragment).__name__}")
            )
        return fragment


def _decode_json(name: str, data: bytes) -> object:
    try:
        return json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise CompileError(ErrorTemplate.resource_unreadable(name, str(e))) from e
    except json.JSONDecodeError as e:
        raise CompileError(ErrorTemplate.resource_malformed(name, str(e))) from e


def _po_key(name: str, kind: str, value: str) -> str:
    """Reject msgids and contexts whose key path has empty segments.

    "Cancel." would otherwise split to the same key as "Cancel".
    """
    delimiters = sum(value.count(d) for d in KEY_DELIMITERS)
    if len(split_key(value)) != delimiters + 1:
        raise CompileError(
            ErrorTemplate.resource_malformed(
                name, f"{kind} '{value}' has an empty key segment"
            )
        )
    return value


def _decode_po(name: str, data: bytes) -> dict[str, object]:
    try:
        catalog = read_po(io.BytesIO(data), abort_invalid=True)
    except (PoFileError, UnicodeDecodeError, ValueError) as e:
        raise CompileError(ErrorTemplate.resource_malformed(name, str(e))) from e

    fragment: dict[str, object] = {}
    for message in catalog:
        if not message.id or message.fuzzy:
            continue
        msgid = message.id[0] if isinstance(message.id, tuple) else message.id
        msgstr = message.string[0] if isinstance(message.string, tuple) else message.string
        if not msgstr:
            continue
        msgid = _po_key(name, "msgid", msgid)
        # msgstr is plain text, never a symbol
        if msgstr.startswith(SYMBOL_PREFIX):
            msgstr = SYMBOL_PREFIX + msgstr
        if message.context:
            context = _po_key(name, "msgctxt", message.context)
            scope = fragment.setdefault(context, {})
            if not isinstance(scope, dict):
                raise CompileError(
                    ErrorTemplate.resource_malformed(
                        name, f"msgctxt '{context}' is also a msgid"
                    )
                )
            scope[msgid] = msgstr
        elif isinstance(fragment.get(msgid), dict):
            raise CompileError(
                ErrorTemplate.resource_malformed(name, f"msgid '{msgid}' is also a msgctxt")
            )
        else:
            fragment[msgid] = msgstr
    return fragment
