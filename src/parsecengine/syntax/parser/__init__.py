"""Parser abstraction, primitives and combinators.

Module Organization:
- core.py: Parser base class, ParseContext, ParserRunner and run()
- primitives.py: Leaf parsers (char, digit, satisfy, any_char, eof)
- combinators.py: Composition (skip, maybe, or_, and_, then_maybe, many,
  many1, choice, map_, label, lazy)
"""

from parsecengine.syntax.parser.combinators import (
    and_,
    choice,
    label,
    lazy,
    many,
    many1,
    map_,
    maybe,
    or_,
    skip,
    then_maybe,
)
from parsecengine.syntax.parser.core import ParseContext, Parser, ParserRunner, run
from parsecengine.syntax.parser.primitives import any_char, char, digit, eof, satisfy

__all__ = [
    "ParseContext",
    "Parser",
    "ParserRunner",
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
