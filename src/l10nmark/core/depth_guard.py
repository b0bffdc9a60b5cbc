"""Depth limiting for recursion protection.

Provides depth tracking to prevent stack overflow from deeply nested
dictionaries, long pointer chains and programmatically built markup trees.

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from l10nmark.constants import MAX_DEPTH
from l10nmark.diagnostics import CompileError, ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(CompileError):
    """Raised when maximum nesting depth is exceeded.

    This error indicates either:
    - A dictionary nested far deeper than any locale/scope/resid layout
    - A pointer chain longer than the depth limit
    - Malformed programmatic tree construction
    """


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage:
        guard = DepthGuard(max_depth=50)
        with guard:
            self._preprocess(child, path)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
        path: Dictionary path reported when the limit is hit
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)
    path: tuple[str, ...] | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Validates depth limit BEFORE incrementing so a raised error leaves
        current_depth unchanged (__exit__ is not called when __enter__ raises).
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.max_depth_exceeded(self.max_depth, self.path)
            )
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    def at(self, path: tuple[str, ...]) -> DepthGuard:
        """Record the path being entered and return the guard for `with`."""
        self.path = path
        return self


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Each guarded level may use several stack frames, so the safe limit is a
    third of what remains after reserving frames for call overhead.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary
    """
    max_safe_depth = (sys.getrecursionlimit() - reserve_frames) // 3
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
