"""Shared constants for l10nmark.

Centralized configuration constants used across the compiler, markup and
runtime packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for dictionary and tree walks
- Cache limits: Memory bounds for caching subsystems
- Syntax: Placeholder, pointer and resource marker syntax

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "DEFAULT_DICTIONARY_CACHE_SIZE",
    # Syntax
    "MAX_PLACEHOLDER",
    "RESOURCE_KEY",
    "SYMBOL_PREFIX",
    "PATH_DELIMITERS",
    "KEY_DELIMITERS",
    "LOCALE_DELIMITERS",
    "ESCAPE_CHAR",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: dictionary preprocessing (nesting and pointer chains).
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Default maximum number of compiled dictionaries kept by DictionaryCompiler.
# Applications normally compile a handful of dictionaries once at startup.
DEFAULT_DICTIONARY_CACHE_SIZE: int = 64

# ============================================================================
# SYNTAX
# ============================================================================

# Highest positional placeholder recognized in templates (%1 .. %13).
MAX_PLACEHOLDER: int = 13

# Sub-map key naming an external fragment to splice into the dictionary.
RESOURCE_KEY: str = "__load-resource"

# Strings starting with this prefix are symbolic tokens (pointers,
# placeholders, hiccup tags). A doubled prefix escapes a literal colon.
SYMBOL_PREFIX: str = ":"

# Pointer paths: "en.example/greeting", "en:example:greeting".
PATH_DELIMITERS: str = ".:/"

# Scope and resource ids: "example.greeting", "example/greeting".
KEY_DELIMITERS: str = "./"

# Locale segments: "en-GB-var1", "en_GB_var1".
LOCALE_DELIMITERS: str = "-_"

# Backtick escapes the following percent or markup delimiter.
ESCAPE_CHAR: str = "`"
