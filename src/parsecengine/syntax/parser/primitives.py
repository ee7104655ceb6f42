"""Primitive parsers.

Leaf parsers that look at one character (or none, for eof) and never
recurse. They are the only origin of UNEXPECTED_CHARACTER,
EXPECTED_DIGIT and END_OF_INPUT failures; on failure the reported cursor
is always the input cursor.

Every primitive that succeeds consumes exactly one character, except
eof(), which is zero-width.
"""

from collections.abc import Callable
from dataclasses import dataclass

from parsecengine.constants import ASCII_DIGITS, DIGIT_CLASS_LABEL, EOF_LABEL
from parsecengine.diagnostics import ErrorTemplate, GrammarDefinitionError
from parsecengine.syntax.cursor import Cursor
from parsecengine.syntax.outcome import Failed, FailureReason, Matched, ParseOutcome
from parsecengine.syntax.parser.core import ParseContext, Parser

__all__ = [
    "AnyCharParser",
    "CharParser",
    "DigitParser",
    "EofParser",
    "SatisfyParser",
    "any_char",
    "char",
    "digit",
    "eof",
    "satisfy",
]


@dataclass(frozen=True, slots=True)
class CharParser(Parser[str]):
    """Match one specific character."""

    char: str

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[str]:
        if cursor.is_eof:
            return Failed(cursor, FailureReason.END_OF_INPUT, (self.char,))
        if cursor.current == self.char:
            return Matched(self.char, cursor.advance())
        return Failed(cursor, FailureReason.UNEXPECTED_CHARACTER, (self.char,))


@dataclass(frozen=True, slots=True)
class DigitParser(Parser[str]):
    """Match one ASCII digit, or one specific digit when ``digit`` is set.

    The value is the digit character; use ``.map(int)`` for a number.
    """

    digit: str | None = None

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[str]:
        expected = (DIGIT_CLASS_LABEL,) if self.digit is None else (self.digit,)
        if cursor.is_eof:
            return Failed(cursor, FailureReason.END_OF_INPUT, expected)
        ch = cursor.current
        # ASCII only - str.isdigit() is True for '²' and other Unicode digits
        if ch in ASCII_DIGITS and (self.digit is None or ch == self.digit):
            return Matched(ch, cursor.advance())
        return Failed(cursor, FailureReason.EXPECTED_DIGIT, expected)


@dataclass(frozen=True, slots=True)
class SatisfyParser(Parser[str]):
    """Match one character accepted by predicate.

    Attributes:
        predicate: Character test; must be pure
        expected: Labels reported on failure
    """

    predicate: Callable[[str], bool]
    expected: tuple[str, ...] = ()

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[str]:
        if cursor.is_eof:
            return Failed(cursor, FailureReason.END_OF_INPUT, self.expected)
        ch = cursor.current
        if self.predicate(ch):
            return Matched(ch, cursor.advance())
        return Failed(cursor, FailureReason.UNEXPECTED_CHARACTER, self.expected)


@dataclass(frozen=True, slots=True)
class AnyCharParser(Parser[str]):
    """Match any single character; fails only at end of input."""

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[str]:
        if cursor.is_eof:
            return Failed(cursor, FailureReason.END_OF_INPUT)
        return Matched(cursor.current, cursor.advance())


@dataclass(frozen=True, slots=True)
class EofParser(Parser[None]):
    """Match the end of input without consuming anything."""

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[None]:
        if cursor.is_eof:
            return Matched(None, cursor)
        return Failed(cursor, FailureReason.EXPECTED, (EOF_LABEL,))


def char(c: str) -> Parser[str]:
    """Parser matching exactly the character c.

    Raises:
        GrammarDefinitionError: If c is not a single character
    """
    if not isinstance(c, str) or len(c) != 1:
        raise GrammarDefinitionError(ErrorTemplate.invalid_character_argument(c))
    return CharParser(c)


def digit(d: str | None = None) -> Parser[str]:
    """Parser matching one ASCII digit.

    Args:
        d: When given, only this digit matches

    Raises:
        GrammarDefinitionError: If d is given and is not one ASCII digit
    """
    if d is not None and (not isinstance(d, str) or len(d) != 1 or d not in ASCII_DIGITS):
        raise GrammarDefinitionError(ErrorTemplate.invalid_digit_argument(d))
    return DigitParser(d)


def satisfy(predicate: Callable[[str], bool], expected: str | None = None) -> Parser[str]:
    """Parser matching one character for which predicate returns True.

    Example:
        >>> vowel = satisfy(lambda ch: ch in "aeiou", "vowel")
        >>> run(vowel, "e").value
        'e'
    """
    return SatisfyParser(predicate, () if expected is None else (expected,))


def any_char() -> Parser[str]:
    """Parser matching any single character."""
    return AnyCharParser()


def eof() -> Parser[None]:
    """Parser matching only at end of input (zero-width)."""
    return EofParser()
