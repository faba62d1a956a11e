"""Shared constants for parsecomb.

This module provides centralized configuration defaults used across the
combinator modules. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for forward-declared parsers
- Unit error: The error value primitives fail with

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Unit error
    "UNIT_ERROR",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Forward-declared parsers are the only way a grammar recurses. Each nesting
# level costs several Python frames (the forward parser, the combinators it
# wraps, the caller-supplied closures), so the interpreter's recursion limit
# of 1000 is usually reached at a nesting depth of a few hundred. The guard
# below fails earlier, with a parse Failure, instead of RecursionError.
#
# Used by: forward.ForwardParser (per-thread nesting counter).
MAX_DEPTH: int = 100

# ============================================================================
# UNIT ERROR
# ============================================================================

# Error carried by Failure when the caller supplied none: unit(), just(),
# end(), filter() without on_reject, and the zero-width cutoff of many().
UNIT_ERROR: None = None
