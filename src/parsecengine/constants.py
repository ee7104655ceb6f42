"""Shared constants for ParsecEngine.

This module provides centralized configuration constants used across
the syntax and diagnostics packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for recursive (lazy) grammars
- Input limits: DoS prevention via size constraints
- Character classes: ASCII alphabets used by primitive parsers

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Character classes
    "ASCII_DIGITS",
    "DIGIT_CLASS_LABEL",
    "EOF_LABEL",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Each nesting level of a recursive grammar costs several Python stack frames
# (lazy -> or -> and -> many -> ...), so the limit is counted in lazy-parser
# entries, not frames. 64 levels at roughly ten frames each stays well below
# the default interpreter recursion limit of 1000.
#
# ============================================================================

# Maximum nesting depth of lazy (self-referential) parsers per parse.
MAX_DEPTH: int = 64

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# CHARACTER CLASSES
# ============================================================================

# ASCII digits only. str.isdigit() accepts Unicode digits like '²'.
ASCII_DIGITS: str = "0123456789"

# Label reported in Failed.expected when a digit class is missing.
DIGIT_CLASS_LABEL: str = "0-9"

# Label reported in Failed.expected when end of input is required.
EOF_LABEL: str = "end of input"
