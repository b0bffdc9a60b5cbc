"""l10nmark exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ArgError",
    "CompileError",
    "CyclicPointerError",
    "L10nError",
]


class L10nError(Exception):
    """Base exception for all l10nmark errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize L10nError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class CompileError(L10nError):
    """Dictionary or template compilation failed.

    Raised for malformed dictionary structure, missing or unreadable
    external resources, unresolvable pointers and invalid placeholders.
    Compilation never returns partial output.

    Attributes:
        resource_name: External resource that failed to load (if any)
        template: Template text that failed to compile (if any)
        path: Dictionary path of the failing entry (if any)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        super().__init__(message)
        diagnostic = self.diagnostic
        self.resource_name = diagnostic.resource_name if diagnostic else None
        self.template = diagnostic.template if diagnostic else None
        self.path = diagnostic.path if diagnostic else None


class CyclicPointerError(CompileError):
    """Pointer chain loops back onto itself.

    Example:
        {"en": {"a": ":en.b", "b": ":en.a"}}

    Attributes:
        cycle: Dictionary paths forming the cycle, in resolution order
    """

    def __init__(self, message: str | Diagnostic, cycle: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.cycle = cycle


class ArgError(L10nError, ValueError):
    """Invalid key in an argument map.

    Argument maps are 1-indexed; zero, negative and non-integer keys are a
    caller bug and fail hard.

    Attributes:
        key: The offending key
    """

    def __init__(self, message: str | Diagnostic, key: object = None) -> None:
        super().__init__(message)
        self.key = key
