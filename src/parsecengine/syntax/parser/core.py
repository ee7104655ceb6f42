"""Parser abstraction and execution entry point.

Architecture:
    Every parser is a :class:`Parser` with a single method,
    ``attempt(cursor, context)``, returning a
    :class:`~parsecengine.syntax.outcome.Matched` holding the parsed value
    and the advanced cursor, or a :class:`~parsecengine.syntax.outcome.Failed`.

    Primitives (:mod:`~parsecengine.syntax.parser.primitives`) and
    combinators (:mod:`~parsecengine.syntax.parser.combinators`) are concrete
    variants of that one interface. Composition never mutates a parser; it
    builds a new one that holds references to its parts, so parser trees
    can be shared freely and reused across inputs.

    :class:`ParseContext` carries per-run settings (the nesting limit) down
    the recursion. It is immutable: entering a nested lazy parser produces
    a new context.

Security:
    :class:`ParserRunner` enforces an input size limit and a nesting depth
    limit for recursive grammars.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from parsecengine.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from parsecengine.core import depth_clamp
from parsecengine.syntax.cursor import Cursor
from parsecengine.syntax.outcome import Failed, FailureReason, ParseOutcome

__all__ = ["ParseContext", "Parser", "ParserRunner", "run"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Explicit context for one parse run.

    Replaces global state with explicit parameter passing, so parsers stay
    pure functions of (cursor, context).

    Attributes:
        max_nesting_depth: Maximum nesting of lazy parsers
        current_depth: Current nesting depth (0 = top level)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter_nested(self) -> ParseContext:
        """Create new context with incremented depth for a nested parser."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
        )


class Parser[T](ABC):
    """A composable parsing unit.

    Subclasses implement :meth:`attempt`. Everything else is composition:

        >>> number = digit().many1().map("".join).map(int)
        >>> run(number, "42;")
        Matched(value=42, cursor=Cursor(pos=2, len=3))
        >>> run(char("a") | char("b"), "b")
        Matched(value='b', cursor=Cursor(pos=1, len=1))

    Contract:
        - attempt() is deterministic: the same cursor and context always
          give the same outcome
        - attempt() never mutates shared state
        - a Failed outcome is returned, never raised
    """

    __slots__ = ()

    @abstractmethod
    def attempt(self, cursor: Cursor, context: ParseContext) -> ParseOutcome[T]:
        """Try to consume input starting at cursor."""

    def __call__(self, cursor: Cursor, context: ParseContext | None = None) -> ParseOutcome[T]:
        return self.attempt(cursor, context if context is not None else ParseContext())

    # Chainable combinator methods. Imports are local: combinators subclass Parser.

    def skip(self) -> Parser[None]:
        """Match self and discard the value."""
        from parsecengine.syntax.parser.combinators import skip  # noqa: PLC0415 - circular

        return skip(self)

    def maybe(self) -> Parser[T | None]:
        """Match self optionally; only a nesting-limit failure gets through."""
        from parsecengine.syntax.parser.combinators import maybe  # noqa: PLC0415 - circular

        return maybe(self)

    def or_[U](self, other: Parser[U]) -> Parser[T | U]:
        """Match self, or other from the same cursor if self fails."""
        from parsecengine.syntax.parser.combinators import or_  # noqa: PLC0415 - circular

        return or_(self, other)

    def and_[U](self, other: Parser[U]) -> Parser[tuple[T, U]]:
        """Match self then other; value is the pair of both values."""
        from parsecengine.syntax.parser.combinators import and_  # noqa: PLC0415 - circular

        return and_(self, other)

    def then_maybe[U](self, other: Parser[U]) -> Parser[tuple[T, U | None]]:
        """Match self then optionally other."""
        from parsecengine.syntax.parser.combinators import then_maybe  # noqa: PLC0415

        return then_maybe(self, other)

    def many(self) -> Parser[list[T]]:
        """Match self zero or more times."""
        from parsecengine.syntax.parser.combinators import many  # noqa: PLC0415 - circular

        return many(self)

    def many1(self) -> Parser[list[T]]:
        """Match self one or more times."""
        from parsecengine.syntax.parser.combinators import many1  # noqa: PLC0415 - circular

        return many1(self)

    def map[U](self, fn: Callable[[T], U]) -> Parser[U]:
        """Transform the matched value with fn."""
        from parsecengine.syntax.parser.combinators import map_  # noqa: PLC0415 - circular

        return map_(self, fn)

    def label(self, name: str) -> Parser[T]:
        """Report failures as 'expected <name>'."""
        from parsecengine.syntax.parser.combinators import label  # noqa: PLC0415 - circular

        return label(self, name)

    def __or__[U](self, other: Parser[U]) -> Parser[T | U]:
        return self.or_(other)

    def __and__[U](self, other: Parser[U]) -> Parser[tuple[T, U]]:
        return self.and_(other)


class ParserRunner:
    """Runs parsers against source text with configured limits.

    Attributes:
        max_source_size: Maximum allowed source size in characters
        max_nesting_depth: Maximum lazy-parser nesting depth
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize runner with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MB).
                            Set to 0 to disable the size limit.
            max_nesting_depth: Maximum nesting of lazy parsers (default: 64).
                              Clamped against the interpreter recursion limit.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = depth_clamp(
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed lazy-parser nesting depth."""
        return self._max_nesting_depth

    def run[T](self, parser: Parser[T], source: str) -> ParseOutcome[T]:
        """Run parser once against source, starting at offset 0.

        The parser does not have to consume all input; compose with
        :func:`~parsecengine.syntax.parser.primitives.eof` to require it.

        Args:
            parser: Parser to run
            source: Input text

        Returns:
            The parser's outcome. If the Python stack runs out before the
            nesting limit is reached, a NESTING_DEPTH_EXCEEDED failure at
            offset 0.

        Raises:
            ValueError: If source exceeds max_source_size
            GrammarDefinitionError: If the grammar is malformed (e.g. a
                repetition over a zero-width parser)
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in ParserRunner constructor to increase limit."
            )
            raise ValueError(msg)

        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        logger.debug("Running %r on %d characters", parser, len(source))

        start = Cursor(source, 0)
        try:
            outcome = parser.attempt(start, context)
        except RecursionError:
            # Wide grammars use more stack per lazy level than depth_clamp
            # assumes; the stack ran out before max_nesting_depth did.
            logger.warning(
                "Python stack exhausted below max_nesting_depth=%d; "
                "reporting nesting depth exceeded",
                self._max_nesting_depth,
            )
            outcome = Failed(
                start,
                FailureReason.NESTING_DEPTH_EXCEEDED,
                max_depth=self._max_nesting_depth,
            )

        if isinstance(outcome, Failed):
            logger.debug("Parse failed at position %d: %s", outcome.pos, outcome.reason)
        else:
            logger.debug("Parse matched, consumed %d characters", outcome.pos)
        return outcome


_DEFAULT_RUNNER = ParserRunner()


def run[T](parser: Parser[T], source: str) -> ParseOutcome[T]:
    """Run parser against source with default limits.

    Example:
        >>> run(digit().many1(), "123x")
        Matched(value=['1', '2', '3'], cursor=Cursor(pos=3, len=4))
    """
    return _DEFAULT_RUNNER.run(parser, source)
