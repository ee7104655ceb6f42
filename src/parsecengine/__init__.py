"""ParsecEngine - parser combinators over an immutable cursor.

Build recursive-descent parsers by composing small parsers, then run the
composition once against input text:

    >>> from parsecengine import char, digit, run
    >>> number = digit().many1().map("".join).map(int)
    >>> run(number & (char("+") & number).many(), "1+2+3").value
    (1, [('+', 2), ('+', 3)])

Public API:
    run - Run a parser against source text
    ParserRunner - run() with configurable size and nesting limits
    Parser - Base class of every parser
    char, digit, satisfy, any_char, eof - Primitive parsers
    skip, maybe, or_, and_, then_maybe, many, many1, choice,
    map_, label, lazy - Combinators
    Cursor - Immutable position in the input
    Matched, Failed, FailureReason, ParseOutcome - Parse outcomes

Exceptions:
    ParsecError - Base exception class
    GrammarDefinitionError - Malformed parser construction
    ParsecSyntaxError - Raised by Failed.unwrap()

Submodules:
    parsecengine.diagnostics - Diagnostic codes, templates and formatting
    parsecengine.syntax.parser - Parser implementations
"""

from .diagnostics import GrammarDefinitionError, ParsecError, ParsecSyntaxError
from .syntax import Cursor, Failed, FailureReason, Matched, ParseOutcome
from .syntax.parser import (
    ParseContext,
    Parser,
    ParserRunner,
    and_,
    any_char,
    char,
    choice,
    digit,
    eof,
    label,
    lazy,
    many,
    many1,
    map_,
    maybe,
    or_,
    run,
    satisfy,
    skip,
    then_maybe,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("parsecengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Cursor",
    "Failed",
    "FailureReason",
    "GrammarDefinitionError",
    "Matched",
    "ParseContext",
    "ParseOutcome",
    "ParsecError",
    "ParsecSyntaxError",
    "Parser",
    "ParserRunner",
    "__version__",
    "and_",
    "any_char",
    "char",
    "choice",
    "digit",
    "eof",
    "label",
    "lazy",
    "many",
    "many1",
    "map_",
    "maybe",
    "or_",
    "run",
    "satisfy",
    "skip",
    "then_maybe",
]
