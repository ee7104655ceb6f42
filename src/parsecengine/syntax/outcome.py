"""Parse outcomes: the result of one parser invocation.

Every parser returns exactly one of:

- :class:`Matched` - the parsed value and the cursor after consumption
- :class:`Failed` - the cursor where matching stopped and why

Grammar mismatches are values, not exceptions. Use pattern matching or
truthiness to branch on them:

    >>> outcome = run(char("a"), "abc")
    >>> match outcome:
    ...     case Matched(value, cursor):
    ...         print(value, cursor.pos)
    ...     case Failed(cursor, reason):
    ...         print(reason, cursor.pos)
    a 1

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, NoReturn

from parsecengine.diagnostics import (
    Diagnostic,
    ErrorTemplate,
    ParsecSyntaxError,
    SourceSpan,
)
from parsecengine.syntax.cursor import Cursor

__all__ = ["FailureReason", "Failed", "Matched", "ParseOutcome"]


class FailureReason(StrEnum):
    """Why a parser did not match.

    Inherits from ``StrEnum`` so reasons compare equal to and serialize as
    plain strings.
    """

    END_OF_INPUT = "end_of_input"
    UNEXPECTED_CHARACTER = "unexpected_character"
    EXPECTED_DIGIT = "expected_digit"
    EXPECTED = "expected"  # Labelled "expected X" reason, see Failed.expected
    NESTING_DEPTH_EXCEEDED = "nesting_depth_exceeded"


@dataclass(frozen=True, slots=True)
class Matched[T]:
    """Successful parse.

    Attributes:
        value: The parsed value
        cursor: Cursor positioned after the consumed input
    """

    value: T
    cursor: Cursor

    @property
    def pos(self) -> int:
        """Offset after the consumed input."""
        return self.cursor.pos

    def unwrap(self) -> T:
        """Return the parsed value."""
        return self.value

    def __bool__(self) -> Literal[True]:
        return True


@dataclass(frozen=True, slots=True)
class Failed:
    """Failed parse.

    Attributes:
        cursor: Cursor at the point of failure. For primitives this is the
            input cursor; after a sequence it may lie past earlier matches.
        reason: Failure category
        expected: Labels of what would have matched, for error messages
        max_depth: Nesting limit, set only for NESTING_DEPTH_EXCEEDED

    Example:
        >>> failed = Failed(Cursor("ab\\nc", 3), FailureReason.UNEXPECTED_CHARACTER, ("x",))
        >>> failed.format_error()
        "2:1: Unexpected character 'c' (expected: 'x')"
    """

    cursor: Cursor
    reason: FailureReason
    expected: tuple[str, ...] = ()
    max_depth: int | None = None

    @property
    def pos(self) -> int:
        """Offset at which the failure happened."""
        return self.cursor.pos

    @property
    def is_fatal(self) -> bool:
        """True if no alternative may recover from this failure.

        A nesting limit hit inside one branch says nothing about the input,
        so combinators that backtrack or absorb failures pass it through.
        """
        return self.reason is FailureReason.NESTING_DEPTH_EXCEEDED

    def __bool__(self) -> Literal[False]:
        return False

    def to_diagnostic(self) -> Diagnostic:
        """Convert this failure into a structured Diagnostic with a span."""
        line, column = self.cursor.compute_line_col()
        found = self.cursor.peek()
        end = self.pos if found is None else self.pos + 1
        span = SourceSpan(start=self.pos, end=end, line=line, column=column)

        match self.reason:
            case FailureReason.NESTING_DEPTH_EXCEEDED:
                return ErrorTemplate.nesting_depth_exceeded(self.max_depth or 0, span)
            case FailureReason.END_OF_INPUT:
                return ErrorTemplate.unexpected_eof(self.pos, span, self.expected)
            case _ if found is None:
                return ErrorTemplate.unexpected_eof(self.pos, span, self.expected)
            case FailureReason.UNEXPECTED_CHARACTER:
                return ErrorTemplate.unexpected_character(found, span, self.expected)
            case FailureReason.EXPECTED_DIGIT:
                return ErrorTemplate.expected_digit(found, span, self.expected)
            case FailureReason.EXPECTED:
                return ErrorTemplate.expected_item(found, span, self.expected)

    def format_error(self) -> str:
        """Format the failure as ``line:column: message (expected: ...)``."""
        line, col = self.cursor.compute_line_col()
        error_msg = f"{line}:{col}: {self.to_diagnostic().message}"

        if self.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.expected)
            error_msg += f" (expected: {expected_str})"

        return error_msg

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format the failure with source context and a caret pointer.

        Args:
            context_lines: Number of lines to show before/after the failure

        Example:
            >>> failed = Failed(Cursor("12\\n3x4", 4), FailureReason.EXPECTED_DIGIT)
            >>> print(failed.format_with_context())
            2:2: Expected digit, found character 'x'
            <BLANKLINE>
               1 | 12
               2 | 3x4
                 |  ^
        """
        line, col = self.cursor.compute_line_col()
        lines = self.cursor.source.split("\n")

        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])

            if i == line:
                gutter = " " * (len(line_num_str) - 2) + "| "
                result_lines.append(gutter + " " * (col - 1) + "^")

        return "\n".join(result_lines)

    def unwrap(self) -> NoReturn:
        """Raise ParsecSyntaxError describing this failure.

        Raises:
            ParsecSyntaxError: Always
        """
        raise ParsecSyntaxError(self.to_diagnostic(), self)


type ParseOutcome[T] = Matched[T] | Failed
