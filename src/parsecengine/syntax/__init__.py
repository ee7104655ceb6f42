"""Syntax layer: cursor, parse outcomes and parsers.

Dependency order (leaves first):

    cursor <- outcome <- parser.core <- parser.primitives, parser.combinators
"""

from .cursor import Cursor
from .outcome import Failed, FailureReason, Matched, ParseOutcome

__all__ = ["Cursor", "FailureReason", "Failed", "Matched", "ParseOutcome"]
