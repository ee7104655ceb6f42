"""Tests for ParserRunner and the module-level run() entry point.

Covers size limits, nesting depth configuration and clamping, debug logging,
and reuse of one parser across inputs.
"""

from __future__ import annotations

import logging
import sys

import pytest

from parsecengine import Failed, Matched, ParserRunner, char, digit, eof, many1, run
from parsecengine.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from parsecengine.syntax.cursor import Cursor

_RUNNER_LOGGER = "parsecengine.syntax.parser.core"


class TestParserRunnerConstruction:
    """Constructor keywords and defaults."""

    def test_defaults(self) -> None:
        """Defaults come from constants."""
        runner = ParserRunner()

        assert runner.max_source_size == MAX_SOURCE_SIZE
        assert runner.max_nesting_depth == MAX_DEPTH

    def test_custom_limits(self) -> None:
        """Both limits are configurable."""
        runner = ParserRunner(max_source_size=10, max_nesting_depth=5)

        assert runner.max_source_size == 10
        assert runner.max_nesting_depth == 5

    def test_keyword_only(self) -> None:
        """Limits cannot be passed positionally."""
        with pytest.raises(TypeError):
            ParserRunner(10)  # type: ignore[misc]

    def test_depth_clamped_to_recursion_limit(self, caplog: pytest.LogCaptureFixture) -> None:
        """An excessive nesting depth is clamped with a warning."""
        requested = sys.getrecursionlimit() * 10

        with caplog.at_level(logging.WARNING):
            runner = ParserRunner(max_nesting_depth=requested)

        assert runner.max_nesting_depth < requested
        assert any("Clamping" in r.getMessage() for r in caplog.records)


class TestSourceSizeLimit:
    """max_source_size guards run()."""

    def test_within_limit(self) -> None:
        """Input at the limit is accepted."""
        runner = ParserRunner(max_source_size=3)

        assert runner.run(many1(digit()), "123") == Matched(["1", "2", "3"], Cursor("123", 3))

    def test_over_limit_raises(self) -> None:
        """Input over the limit raises ValueError before parsing."""
        runner = ParserRunner(max_source_size=3)

        with pytest.raises(ValueError, match="exceeds maximum"):
            runner.run(many1(digit()), "1234")

    def test_zero_disables_limit(self) -> None:
        """max_source_size=0 disables the check."""
        runner = ParserRunner(max_source_size=0)
        source = "1" * 5000

        outcome = runner.run(many1(digit()), source)

        assert isinstance(outcome, Matched)
        assert outcome.pos == 5000


class TestRun:
    """Module-level run()."""

    def test_starts_at_offset_zero(self) -> None:
        """The parser sees the whole input."""
        assert run(char("a"), "abc") == Matched("a", Cursor("abc", 1))

    def test_need_not_consume_everything(self) -> None:
        """Trailing input is left unconsumed."""
        outcome = run(digit(), "12")

        assert isinstance(outcome, Matched)
        assert outcome.pos == 1

    def test_eof_requires_full_consumption(self) -> None:
        """Composing with eof() rejects trailing input."""
        outcome = run(digit() & eof(), "12")

        assert isinstance(outcome, Failed)
        assert outcome.pos == 1

    def test_empty_input(self) -> None:
        """Empty input is valid."""
        assert run(eof(), "") == Matched(None, Cursor("", 0))
        assert not run(digit(), "")

    def test_reuse_across_inputs(self) -> None:
        """One parser value can be run many times."""
        number = many1(digit()).map("".join).map(int)

        results = [run(number, s) for s in ("1", "22", "x", "333y")]

        assert [r.value for r in results if isinstance(r, Matched)] == [1, 22, 333]
        assert [r.pos for r in results if isinstance(r, Failed)] == [0]


class TestRunLogging:
    """run() logs at debug level only."""

    def test_logs_match(self, caplog: pytest.LogCaptureFixture) -> None:
        """Start and match are logged."""
        with caplog.at_level(logging.DEBUG, logger=_RUNNER_LOGGER):
            run(digit(), "1")

        messages = [r.getMessage() for r in caplog.records if r.name == _RUNNER_LOGGER]
        assert any(m.startswith("Running") for m in messages)
        assert any("matched, consumed 1" in m for m in messages)

    def test_logs_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """Failure position and reason are logged."""
        with caplog.at_level(logging.DEBUG, logger=_RUNNER_LOGGER):
            run(digit(), "x")

        messages = [r.getMessage() for r in caplog.records if r.name == _RUNNER_LOGGER]
        assert any("failed at position 0: expected_digit" in m for m in messages)

    def test_silent_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        """Nothing is emitted above debug level."""
        with caplog.at_level(logging.INFO, logger=_RUNNER_LOGGER):
            run(digit(), "x")

        assert [r for r in caplog.records if r.name == _RUNNER_LOGGER] == []
