"""ParsecEngine exception hierarchy with structured diagnostics.

Grammar mismatches are never raised: parsers return a Failed outcome.
These exceptions cover misuse of the combinator API and the explicit
conversion of a failure into an exception via Failed.unwrap().

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from parsecengine.syntax.outcome import Failed

__all__ = ["GrammarDefinitionError", "ParsecError", "ParsecSyntaxError"]


class ParsecError(Exception):
    """Base exception for all ParsecEngine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ParsecError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class GrammarDefinitionError(ParsecError):
    """A parser was built or composed incorrectly.

    Examples:
    - choice() over an empty list
    - char() with a string that is not exactly one character
    - many() over a parser that succeeds without consuming input

    This is a programming error in the grammar, distinct from input that
    does not match the grammar.
    """


class ParsecSyntaxError(ParsecError):
    """Input did not match the grammar.

    Only raised on request, by Failed.unwrap(). The failed outcome is kept
    for callers that need the cursor or the failure reason.

    Attributes:
        failure: The Failed outcome that was unwrapped
    """

    def __init__(self, message: str | Diagnostic, failure: "Failed") -> None:
        super().__init__(message)
        self.failure = failure
