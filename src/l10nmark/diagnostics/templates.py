"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


def _dotted(path: tuple[str, ...]) -> str:
    return ".".join(path) if path else "<root>"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Each factory returns a Diagnostic ready to be wrapped in an exception.
    """

    # ------------------------------------------------------------------
    # Dictionary compilation
    # ------------------------------------------------------------------

    @staticmethod
    def dictionary_malformed(path: tuple[str, ...], detail: str) -> Diagnostic:
        """Dictionary node has an unsupported shape.

        Args:
            path: Dictionary path of the offending node
            detail: What was wrong with the node

        Returns:
            Diagnostic for DICTIONARY_MALFORMED
        """
        msg = f"Malformed dictionary at '{_dotted(path)}': {detail}"
        return Diagnostic(
            code=DiagnosticCode.DICTIONARY_MALFORMED,
            message=msg,
            hint="Dictionaries nest mappings keyed by locale, scope and resource id",
            path=path,
        )

    @staticmethod
    def pointer_unresolved(pointer: str, path: tuple[str, ...]) -> Diagnostic:
        """Pointer target does not exist.

        Args:
            pointer: Pointer path text
            path: Dictionary path holding the pointer

        Returns:
            Diagnostic for POINTER_UNRESOLVED
        """
        msg = f"Pointer '{pointer}' at '{_dotted(path)}' does not resolve"
        return Diagnostic(
            code=DiagnosticCode.POINTER_UNRESOLVED,
            message=msg,
            hint="Pointer paths start at the dictionary root, e.g. 'en.scope.resid'",
            path=path,
        )

    @staticmethod
    def pointer_cycle(cycle: tuple[str, ...]) -> Diagnostic:
        """Pointer chain loops back onto itself.

        Args:
            cycle: Dotted paths forming the cycle

        Returns:
            Diagnostic for POINTER_CYCLE
        """
        chain = " -> ".join(cycle)
        msg = f"Cyclic pointer reference: {chain}"
        return Diagnostic(
            code=DiagnosticCode.POINTER_CYCLE,
            message=msg,
            hint="Make at least one entry in the chain a template",
        )

    @staticmethod
    def duplicate_key(key: tuple[str, ...]) -> Diagnostic:
        """Two dictionary leaves normalize to the same lookup key.

        Args:
            key: The colliding resource key

        Returns:
            Diagnostic for DUPLICATE_KEY
        """
        msg = f"Duplicate resource '{_dotted(key)}' after key normalization"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_KEY,
            message=msg,
            hint="Dotted keys and nested mappings address the same resource",
            path=key,
        )

    @staticmethod
    def leaf_too_shallow(path: tuple[str, ...]) -> Diagnostic:
        """Template found directly under a locale (or at the root).

        Args:
            path: Path of the leaf

        Returns:
            Diagnostic for LEAF_TOO_SHALLOW
        """
        msg = f"Template at '{_dotted(path)}' has no resource id"
        return Diagnostic(
            code=DiagnosticCode.LEAF_TOO_SHALLOW,
            message=msg,
            hint="Templates live under a locale key and at least one resource id",
            path=path,
        )

    @staticmethod
    def max_depth_exceeded(max_depth: int, path: tuple[str, ...] | None = None) -> Diagnostic:
        """Nesting or pointer chain exceeds the depth limit.

        Args:
            max_depth: Configured depth limit
            path: Path being processed when the limit was hit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Flatten the dictionary or shorten pointer chains",
            path=path,
        )

    # ------------------------------------------------------------------
    # External resources
    # ------------------------------------------------------------------

    @staticmethod
    def resource_not_found(resource_name: str) -> Diagnostic:
        """External resource does not exist.

        Args:
            resource_name: Requested resource name

        Returns:
            Diagnostic for RESOURCE_NOT_FOUND
        """
        msg = f"External resource '{resource_name}' not found"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_NOT_FOUND,
            message=msg,
            hint="Resource names are relative to the loader's root directory",
            resource_name=resource_name,
        )

    @staticmethod
    def resource_unreadable(resource_name: str, reason: str) -> Diagnostic:
        """External resource exists but cannot be read.

        Args:
            resource_name: Requested resource name
            reason: Underlying error text

        Returns:
            Diagnostic for RESOURCE_UNREADABLE
        """
        msg = f"External resource '{resource_name}' could not be read: {reason}"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_UNREADABLE,
            message=msg,
            resource_name=resource_name,
        )

    @staticmethod
    def resource_malformed(resource_name: str, reason: str) -> Diagnostic:
        """External resource content is not a valid dictionary fragment.

        Args:
            resource_name: Requested resource name
            reason: What was wrong with the content

        Returns:
            Diagnostic for RESOURCE_MALFORMED
        """
        msg = f"External resource '{resource_name}' is malformed: {reason}"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_MALFORMED,
            message=msg,
            hint="Fragments must decode to a mapping",
            resource_name=resource_name,
        )

    @staticmethod
    def resource_format_unsupported(resource_name: str, suffix: str) -> Diagnostic:
        """External resource has an unknown file suffix.

        Args:
            resource_name: Requested resource name
            suffix: File suffix that has no decoder

        Returns:
            Diagnostic for RESOURCE_FORMAT_UNSUPPORTED
        """
        msg = f"External resource '{resource_name}' has unsupported format '{suffix}'"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_FORMAT_UNSUPPORTED,
            message=msg,
            hint="Supported formats: .json, .po",
            resource_name=resource_name,
        )

    @staticmethod
    def resource_name_invalid(resource_name: object, reason: str) -> Diagnostic:
        """External resource name is not acceptable.

        Args:
            resource_name: Requested resource name
            reason: Why the name was rejected

        Returns:
            Diagnostic for RESOURCE_NAME_INVALID
        """
        msg = f"Invalid external resource name {resource_name!r}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_NAME_INVALID,
            message=msg,
            resource_name=str(resource_name),
        )

    # ------------------------------------------------------------------
    # Templates and arguments
    # ------------------------------------------------------------------

    @staticmethod
    def placeholder_zero(template: str) -> Diagnostic:
        """Template uses the invalid %0 placeholder.

        Args:
            template: Offending template text

        Returns:
            Diagnostic for PLACEHOLDER_INVALID
        """
        msg = f"Invalid placeholder '%0' in template {template!r}"
        return Diagnostic(
            code=DiagnosticCode.PLACEHOLDER_INVALID,
            message=msg,
            hint="Placeholders are 1-indexed: %1 is the first argument",
            template=template,
        )

    @staticmethod
    def template_invalid(template: object, expected: str) -> Diagnostic:
        """Template has a type the requested compilation cannot handle.

        Args:
            template: Offending template value
            expected: Description of what was expected

        Returns:
            Diagnostic for TEMPLATE_INVALID
        """
        msg = f"Expected {expected}, got {type(template).__name__}: {template!r}"
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_INVALID,
            message=msg,
            template=repr(template),
        )

    @staticmethod
    def arg_key_invalid(key: object) -> Diagnostic:
        """Argument map key is not a positive integer.

        Args:
            key: Offending key

        Returns:
            Diagnostic for ARG_KEY_INVALID
        """
        msg = f"Argument map keys must be positive integers, got {key!r}"
        return Diagnostic(
            code=DiagnosticCode.ARG_KEY_INVALID,
            message=msg,
            hint="Argument maps are 1-indexed: {1: first, 2: second}",
        )
