"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


def _describe(found: str | None) -> str:
    """Render a found character for messages (repr keeps control chars visible)."""
    return "end of input" if found is None else f"character {found!r}"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    # =========================================================================
    # SYNTAX ERRORS (3000-3999)
    # =========================================================================

    @staticmethod
    def unexpected_eof(
        position: int,
        span: SourceSpan | None = None,
        expected: tuple[str, ...] = (),
    ) -> Diagnostic:
        """Unexpected end of input.

        Args:
            position: The position where end of input was encountered
            span: Source location, when known
            expected: What the parser expected instead

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            span=span,
            hint="The input ended before the grammar was complete",
            expected=expected,
        )

    @staticmethod
    def unexpected_character(
        found: str, span: SourceSpan | None = None, expected: tuple[str, ...] = ()
    ) -> Diagnostic:
        """Character did not match the parser.

        Args:
            found: The character at the failure position
            span: Source location, when known
            expected: What the parser expected instead

        Returns:
            Diagnostic for UNEXPECTED_CHARACTER
        """
        msg = f"Unexpected {_describe(found)}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CHARACTER,
            message=msg,
            span=span,
            expected=expected,
        )

    @staticmethod
    def expected_digit(
        found: str, span: SourceSpan | None = None, expected: tuple[str, ...] = ()
    ) -> Diagnostic:
        """A digit was required but something else was found.

        Returns:
            Diagnostic for EXPECTED_DIGIT
        """
        msg = f"Expected digit, found {_describe(found)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_DIGIT,
            message=msg,
            span=span,
            hint="Only ASCII digits 0-9 are accepted",
            expected=expected,
        )

    @staticmethod
    def expected_item(
        found: str | None, span: SourceSpan | None = None, expected: tuple[str, ...] = ()
    ) -> Diagnostic:
        """A labelled item was required but not found.

        Returns:
            Diagnostic for EXPECTED_ITEM
        """
        label = " or ".join(expected) if expected else "input"
        msg = f"Expected {label}, found {_describe(found)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_ITEM,
            message=msg,
            span=span,
            expected=expected,
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, span: SourceSpan | None = None) -> Diagnostic:
        """Recursive grammar nested deeper than the configured limit.

        Args:
            max_depth: The maximum allowed nesting depth
            span: Source location, when known

        Returns:
            Diagnostic for PARSE_NESTING_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.PARSE_NESTING_DEPTH_EXCEEDED,
            message=msg,
            span=span,
            hint="Reduce input nesting or raise max_nesting_depth on ParserRunner",
        )

    # =========================================================================
    # GRAMMAR DEFINITION ERRORS (6000-6999)
    # =========================================================================

    @staticmethod
    def empty_choice() -> Diagnostic:
        """choice() was given no alternatives.

        Returns:
            Diagnostic for EMPTY_CHOICE
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_CHOICE,
            message="choice() requires at least one parser",
            hint="Pass one or more alternatives, e.g. choice([char('a'), char('b')])",
        )

    @staticmethod
    def zero_width_repetition(parser: str, position: int) -> Diagnostic:
        """Repetition over a parser that matched without consuming input.

        Args:
            parser: repr() of the repeated parser
            position: The position where no progress was made

        Returns:
            Diagnostic for ZERO_WIDTH_REPETITION
        """
        msg = f"Repeated parser {parser} matched without consuming input at position {position}"
        return Diagnostic(
            code=DiagnosticCode.ZERO_WIDTH_REPETITION,
            message=msg,
            hint="many()/many1() need a parser that consumes input on success; "
            "do not repeat maybe(), eof() or other zero-width parsers",
        )

    @staticmethod
    def invalid_character_argument(value: object) -> Diagnostic:
        """char() was given something other than one character.

        Returns:
            Diagnostic for INVALID_CHARACTER_ARGUMENT
        """
        msg = f"char() expects exactly one character, got {value!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CHARACTER_ARGUMENT,
            message=msg,
        )

    @staticmethod
    def invalid_digit_argument(value: object) -> Diagnostic:
        """digit() was given something other than one ASCII digit.

        Returns:
            Diagnostic for INVALID_DIGIT_ARGUMENT
        """
        msg = f"digit() expects one ASCII digit 0-9, got {value!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_DIGIT_ARGUMENT,
            message=msg,
        )
