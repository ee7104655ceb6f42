"""Depth limiting for recursion protection.

Recursive grammars built with lazy() recurse through the Python call stack.
The nesting limit used by ParseContext is clamped here against the
interpreter recursion limit so that a misconfigured limit fails as a parse
failure instead of a RecursionError.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["FRAMES_PER_LEVEL", "depth_clamp"]

logger = logging.getLogger(__name__)

# Approximate stack frames consumed per lazy-parser nesting level
# (lazy -> or -> and -> many -> primitive, each through attempt()).
FRAMES_PER_LEVEL: int = 10


def depth_clamp(
    requested_depth: int,
    reserve_frames: int = 50,
    frames_per_level: int = FRAMES_PER_LEVEL,
) -> int:
    """Clamp requested nesting depth against Python recursion limit.

    Validates requested depth against sys.getrecursionlimit() to prevent
    RecursionError on systems with constrained stack limits. Logs warning
    if clamping occurs.

    Args:
        requested_depth: Desired maximum nesting depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)
        frames_per_level: Stack frames one nesting level is assumed to use

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(64)  # OK, within limit
        64
        >>> depth_clamp(500)  # Exceeds limit, clamped to (1000 - 50) // 10
        95
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // frames_per_level)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested nesting depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
