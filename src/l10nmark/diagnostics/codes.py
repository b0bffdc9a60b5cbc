"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic attached to every
l10nmark exception.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Dictionary compilation errors (shape, pointers, keys)
        2000-2999: External resource errors (loading, decoding)
        3000-3999: Template errors (placeholders, template types)
        4000-4999: Argument errors (render-time argument normalization)
    """

    # Dictionary compilation errors (1000-1999)
    DICTIONARY_MALFORMED = 1001
    POINTER_UNRESOLVED = 1002
    POINTER_CYCLE = 1003
    DUPLICATE_KEY = 1004
    LEAF_TOO_SHALLOW = 1005
    MAX_DEPTH_EXCEEDED = 1006

    # External resource errors (2000-2999)
    RESOURCE_NOT_FOUND = 2001
    RESOURCE_UNREADABLE = 2002
    RESOURCE_MALFORMED = 2003
    RESOURCE_FORMAT_UNSUPPORTED = 2004
    RESOURCE_NAME_INVALID = 2005

    # Template errors (3000-3999)
    PLACEHOLDER_INVALID = 3001
    TEMPLATE_INVALID = 3002

    # Argument errors (4000-4999)
    ARG_KEY_INVALID = 4001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context for both
    humans and tools to locate the failing dictionary entry, resource or
    template.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        resource_name: External resource involved in the failure
        template: Template text that failed to compile
        path: Dictionary path of the failing entry
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    resource_name: str | None = None
    template: str | None = None
    path: tuple[str, ...] | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[POINTER_UNRESOLVED]: Pointer 'en.missing' does not resolve
              --> en.example.alias
              = help: Check that the pointer path exists in the dictionary

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
