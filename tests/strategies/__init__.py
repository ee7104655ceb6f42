"""Hypothesis strategies for ParsecEngine property-based testing.

Strategies are organized by domain:

- parsers: Input text, characters and composed parser trees

Usage:
    from tests.strategies import ascii_text, consuming_parsers
    from tests.strategies.parsers import digit_strings
"""

from .parsers import (
    ALPHABET,
    ascii_text,
    consuming_parsers,
    digit_strings,
    non_digit_chars,
    parsers,
    source_positions,
)

__all__ = [
    "ALPHABET",
    "ascii_text",
    "consuming_parsers",
    "digit_strings",
    "non_digit_chars",
    "parsers",
    "source_positions",
]
