"""Parser combinators.

Functions that build new parsers from existing ones. Each combinator is a
concrete :class:`~parsecengine.syntax.parser.core.Parser` variant holding
references to its parts; none of them mutate their inputs.

Failure propagation:
    - Absorb: maybe(), many() never fail on a grammar mismatch
    - Propagate verbatim: skip(), and_(), many1() when the first attempt fails
    - Backtrack and retry: or_(), choice() run every alternative from the
      original cursor and report the last failure
    - Rewrite: label() replaces the reason with "expected <name>"
    - Fatal: a NESTING_DEPTH_EXCEEDED failure (Failed.is_fatal) is never
      absorbed, backtracked past or relabelled; it reaches the caller as is

Backtracking needs no undo: each alternative receives the original cursor,
and the cursor inside a Failed outcome is never threaded into the next
attempt.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from threading import Lock

from parsecengine.diagnostics import ErrorTemplate, GrammarDefinitionError
from parsecengine.syntax.cursor import Cursor
from parsecengine.syntax.outcome import Failed, FailureReason, Matched, ParseOutcome
from parsecengine.syntax.parser.core import ParseContext, Parser

__all__ = [
    "AndParser",
    "ChoiceParser",
    "LabelParser",
    "LazyParser",
    "ManyParser",
    "MapParser",
    "MaybeParser",
    "OrParser",
    "SkipParser",
    "and_",
    "choice",
    "label",
    "lazy",
    "many",
    "many1",
    "map_",
    "maybe",
    "or_",
    "skip",
    "then_maybe",
]

logger = logging.getLogger(__name__)


# =============================================================================
# Combinator variants
# =============================================================================


@dataclass(frozen=True, slots=True)
class SkipParser(Parser[None]):
    """Run parser and discard its value."""

    parser: Parser[object]

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[None]:
        outcome = self.parser.attempt(cursor, context)
        if isinstance(outcome, Failed):
            return outcome
        return Matched(None, outcome.cursor)


@dataclass(frozen=True, slots=True)
class MaybeParser[T](Parser[T | None]):
    """Run parser; on failure match None without consuming input."""

    parser: Parser[T]

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[T | None]:
        outcome = self.parser.attempt(cursor, context)
        if isinstance(outcome, Failed):
            return outcome if outcome.is_fatal else Matched(None, cursor)
        return outcome


@dataclass(frozen=True, slots=True)
class OrParser[T, U](Parser[T | U]):
    """Ordered alternative: first wins whenever it matches."""

    first: Parser[T]
    second: Parser[U]

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[T | U]:
        outcome = self.first.attempt(cursor, context)
        if isinstance(outcome, Matched) or outcome.is_fatal:
            return outcome
        return self.second.attempt(cursor, context)


@dataclass(frozen=True, slots=True)
class AndParser[T, U](Parser[tuple[T, U]]):
    """Sequence: first, then second from where first stopped."""

    first: Parser[T]
    second: Parser[U]

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[tuple[T, U]]:
        left = self.first.attempt(cursor, context)
        if isinstance(left, Failed):
            return left
        right = self.second.attempt(left.cursor, context)
        if isinstance(right, Failed):
            return right
        return Matched((left.value, right.value), right.cursor)


@dataclass(frozen=True, slots=True)
class ManyParser[T](Parser[list[T]]):
    """Repeat parser until it fails, requiring at least min_count matches.

    The failing attempt is discarded: the result cursor is the one after the
    last match. A match that consumes nothing would repeat forever, so it is
    reported as a GrammarDefinitionError instead.
    """

    parser: Parser[T]
    min_count: int = 0

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[list[T]]:
        values: list[T] = []
        current = cursor
        while True:
            outcome = self.parser.attempt(current, context)
            if isinstance(outcome, Failed):
                if outcome.is_fatal or len(values) < self.min_count:
                    return outcome
                return Matched(values, current)
            if outcome.cursor.pos == current.pos:
                raise GrammarDefinitionError(
                    ErrorTemplate.zero_width_repetition(repr(self.parser), current.pos)
                )
            values.append(outcome.value)
            current = outcome.cursor


@dataclass(frozen=True, slots=True)
class ChoiceParser[T](Parser[T]):
    """Try alternatives in order from the same cursor; first match wins."""

    parsers: tuple[Parser[T], ...]

    def __post_init__(self) -> None:
        if not self.parsers:
            raise GrammarDefinitionError(ErrorTemplate.empty_choice())

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[T]:
        first, *rest = self.parsers
        outcome = first.attempt(cursor, context)
        for parser in rest:
            if isinstance(outcome, Matched) or outcome.is_fatal:
                return outcome
            outcome = parser.attempt(cursor, context)
        return outcome


@dataclass(frozen=True, slots=True)
class MapParser[T, U](Parser[U]):
    """Apply fn to the value of a match; the cursor is unchanged."""

    parser: Parser[T]
    fn: Callable[[T], U]

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[U]:
        outcome = self.parser.attempt(cursor, context)
        if isinstance(outcome, Failed):
            return outcome
        return Matched(self.fn(outcome.value), outcome.cursor)


@dataclass(frozen=True, slots=True)
class LabelParser[T](Parser[T]):
    """Report any failure of parser as 'expected <name>' at the same position."""

    parser: Parser[T]
    name: str

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[T]:
        outcome = self.parser.attempt(cursor, context)
        if isinstance(outcome, Matched):
            return outcome
        if outcome.is_fatal:
            return outcome
        return Failed(outcome.cursor, FailureReason.EXPECTED, (self.name,))


class LazyParser[T](Parser[T]):
    """Parser built on first use, for recursive grammars.

    A grammar that refers to itself cannot be composed eagerly. The factory
    is called once, on the first attempt, and the result is cached. The
    build is guarded by a lock, so threads sharing the parser also see a
    single factory call.

    Each attempt enters one level of nesting in the ParseContext; past the
    configured limit the attempt fails with NESTING_DEPTH_EXCEEDED instead
    of recursing further.

    Example:
        >>> def group() -> Parser:
        ...     return digit() | (char("(") & lazy(group) & char(")"))
        >>> run(lazy(group), "((7))").pos
        5
    """

    __slots__ = ("_factory", "_lock", "_parser")

    def __init__(self, factory: Callable[[], Parser[T]]) -> None:
        self._factory = factory
        self._lock = Lock()
        self._parser: Parser[T] | None = None

    @property
    def parser(self) -> Parser[T]:
        """The inner parser, built on first access."""
        parser = self._parser
        if parser is None:
            with self._lock:
                if self._parser is None:
                    self._parser = self._factory()
                    logger.debug("Built deferred parser from %s", _factory_name(self._factory))
                parser = self._parser
        return parser

    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[T]:
        if context.is_depth_exceeded():
            return Failed(
                cursor,
                FailureReason.NESTING_DEPTH_EXCEEDED,
                max_depth=context.max_nesting_depth,
            )
        return self.parser.attempt(cursor, context.enter_nested())

    def __repr__(self) -> str:
        # The inner parser may contain this one; never recurse into it.
        return f"LazyParser({_factory_name(self._factory)})"


def _factory_name(factory: Callable[..., object]) -> str:
    return getattr(factory, "__qualname__", None) or repr(factory)


# =============================================================================
# Constructor functions
# =============================================================================


def skip(p: Parser[object]) -> Parser[None]:
    """Match p and discard its value."""
    return SkipParser(p)


def maybe[T](p: Parser[T]) -> Parser[T | None]:
    """Match p if possible; otherwise match None without consuming input.

    None also stands for the absent value, so maybe(p) cannot tell "p
    matched None" (e.g. maybe(eof()) or maybe(skip(p))) from "p absent".
    Compare the cursor positions, or map p to a non-None value first.
    """
    return MaybeParser(p)


def or_[T, U](p: Parser[T], q: Parser[U]) -> Parser[T | U]:
    """Match p; if p fails, match q from the original cursor.

    q's outcome is returned unchanged, success or failure.
    """
    return OrParser(p, q)


def and_[T, U](p: Parser[T], q: Parser[U]) -> Parser[tuple[T, U]]:
    """Match p then q; the value is (p_value, q_value).

    If q fails, its failure position lies after whatever p consumed.

    Example:
        >>> run(char("a") & char("b"), "ac").pos
        1
    """
    return AndParser(p, q)


def then_maybe[T, U](p: Parser[T], q: Parser[U]) -> Parser[tuple[T, U | None]]:
    """Match p, then optionally q: equivalent to and_(p, maybe(q)).

    The second value is None when q is absent, and also when q itself
    matched None; see maybe().
    """
    return AndParser(p, MaybeParser(q))


def many[T](p: Parser[T]) -> Parser[list[T]]:
    """Match p zero or more times; fails only when the nesting limit is hit."""
    return ManyParser(p)


def many1[T](p: Parser[T]) -> Parser[list[T]]:
    """Match p one or more times.

    Example:
        >>> run(many1(digit()), "123x").value
        ['1', '2', '3']
        >>> run(many1(digit()), "x").pos
        0
    """
    return ManyParser(p, min_count=1)


def choice[T](parsers: Iterable[Parser[T]]) -> Parser[T]:
    """Try each parser in order from the same cursor; first match wins.

    If every alternative fails, the last alternative's failure is returned.

    Raises:
        GrammarDefinitionError: If parsers is empty
    """
    return ChoiceParser(tuple(parsers))


def map_[T, U](p: Parser[T], fn: Callable[[T], U]) -> Parser[U]:
    """Match p and transform its value with fn."""
    return MapParser(p, fn)


def label[T](p: Parser[T], name: str) -> Parser[T]:
    """Match p; on failure report 'expected <name>' at the failure position."""
    return LabelParser(p, name)


def lazy[T](factory: Callable[[], Parser[T]]) -> Parser[T]:
    """Defer building a parser until it is first used.

    Use for grammars that refer to themselves.
    """
    return LazyParser(factory)
