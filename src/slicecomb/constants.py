"""Shared constants for slicecomb.

This module provides centralized configuration constants used across the
engine and the bundled grammars. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Opt-in recursion protection for nested grammars
- Diagnostics: Limits applied when rendering errors

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    "DEPTH_RESERVE_FRAMES",
    # Diagnostics
    "MAX_CAUSE_CHAIN",
    "MAX_DIAGNOSTIC_CONTENT",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# The engine itself never limits recursion: a recursive-descent grammar is
# bounded only by the host call stack. Grammars that recurse on untrusted
# input (nested arrays, nested maps) opt into a limit through
# Driver(max_depth=...). MAX_DEPTH is the default those grammars use.
#
# Every nesting level costs several Python frames (the grammar function plus
# the combinator closures wrapping it), so the limit sits well below the
# interpreter's default recursion limit of 1000.
#
# ============================================================================

# Default maximum nesting depth for grammars that opt into a depth guard.
MAX_DEPTH: int = 100

# Stack frames kept free when clamping a requested depth against
# sys.getrecursionlimit().
DEPTH_RESERVE_FRAMES: int = 50

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Maximum number of chained causes rendered by ContextError.format_chain().
# Cause chains are acyclic by construction; the cap only bounds output size.
MAX_CAUSE_CHAIN: int = 32

# Default truncation length for sanitized diagnostic output.
MAX_DIAGNOSTIC_CONTENT: int = 100
