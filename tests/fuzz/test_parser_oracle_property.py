"""Fuzz property-based tests: composed parsers against independent oracles.

Run with:
    pytest -m fuzz tests/fuzz/ -v

Python 3.13+.
"""

from __future__ import annotations

import re
from collections.abc import Callable

import pytest
from hypothesis import HealthCheck, event, example, given, settings
from hypothesis import strategies as st

from parsecengine import (
    Failed,
    FailureReason,
    Matched,
    Parser,
    ParserRunner,
    char,
    choice,
    digit,
    eof,
    lazy,
    many,
    many1,
    maybe,
    run,
)
from tests.strategies import parsers

pytestmark = pytest.mark.fuzz

_DIGIT_RUN = re.compile(r"[0-9]+", re.ASCII)
_SIGNED = re.compile(r"-?[0-9]+(?:\.[0-9]+)?", re.ASCII)


def _group() -> Parser[object]:
    return digit() | (char("(") & lazy(_group) & char(")"))


def _group_first() -> Parser[object]:
    return (char("(") & lazy(_group_first) & char(")")) | digit()


def _group_many() -> Parser[object]:
    return choice([char("(") & many(lazy(_group_many)) & char(")"), digit()])


def _signed_number() -> Parser[object]:
    digits = many1(digit()).map("".join)
    fraction = (char(".") & digits).map("".join)
    return (maybe(char("-")) & digits & maybe(fraction)).map(
        lambda v: (v[0][0] or "") + v[0][1] + (v[1] or "")
    )


# ============================================================================
# Arbitrary trees on arbitrary text
# ============================================================================


@given(parser=parsers(), source=st.text(max_size=200))
@settings(suppress_health_check=[HealthCheck.too_slow])
def test_generated_parsers_total_on_unicode(parser: Parser[object], source: str) -> None:
    """Generated parsers return an outcome for any Unicode input."""
    outcome = run(parser, source)

    event(f"outcome={type(outcome).__name__}")
    assert 0 <= outcome.pos <= len(source)
    if isinstance(outcome, Failed):
        assert outcome.format_error()
        assert outcome.format_with_context()


# ============================================================================
# Regular expression oracles
# ============================================================================


@given(source=st.text(max_size=100))
@example(source="")
@example(source="0")
@example(source="٣")
def test_digit_run_matches_regex(source: str) -> None:
    """many1(digit()) accepts exactly what [0-9]+ accepts, ASCII only."""
    outcome = run(many1(digit()).map("".join), source)
    expected = _DIGIT_RUN.match(source)

    if expected is None:
        assert isinstance(outcome, Failed)
        assert outcome.pos == 0
    else:
        assert outcome == Matched(expected.group(), outcome.cursor)
        assert outcome.pos == expected.end()


@given(source=st.text(alphabet="-.0123456789x", max_size=30))
def test_signed_number_matches_regex(source: str) -> None:
    """A number grammar with backtracking agrees with its regex."""
    outcome = run(_signed_number(), source)
    expected = _SIGNED.match(source)

    event(f"regex_matched={expected is not None}")
    if expected is None:
        assert isinstance(outcome, Failed)
    else:
        assert isinstance(outcome, Matched)
        assert outcome.value == expected.group()
        assert outcome.pos == expected.end()


@given(words=st.lists(st.sampled_from(["ab", "a", "b"]), max_size=10))
def test_choice_prefers_earlier_alternative(words: list[str]) -> None:
    """Ordered choice with a shared prefix agrees with an ordered regex."""
    ab = (char("a") & char("b")).map("".join)
    parser = many(choice([ab, char("a"), char("b")])) & eof()
    source = "".join(words)

    outcome = run(parser, source)

    assert isinstance(outcome, Matched)
    assert outcome.value[0] == re.findall(r"ab|a|b", source)


# ============================================================================
# Nesting oracle
# ============================================================================


@given(
    depth=st.integers(min_value=0, max_value=60),
    limit=st.integers(min_value=1, max_value=60),
    grammar=st.sampled_from([_group, _group_first, _group_many]),
)
def test_nesting_limit_oracle(
    depth: int, limit: int, grammar: Callable[[], Parser[object]]
) -> None:
    """Nesting parses iff depth + 1 lazy levels fit under the limit.

    Holds wherever the recursive branch sits among the alternatives.
    """
    source = "(" * depth + "7" + ")" * depth

    outcome = ParserRunner(max_nesting_depth=limit).run(lazy(grammar) & eof(), source)

    if depth < limit:
        event("within_limit")
        assert isinstance(outcome, Matched)
    else:
        event("over_limit")
        assert isinstance(outcome, Failed)
        assert outcome.reason is FailureReason.NESTING_DEPTH_EXCEEDED
        assert outcome.pos == limit
