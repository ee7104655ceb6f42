"""Fuzz testing infrastructure for ParsecEngine.

This package contains:
- test_parser_oracle_property: differential tests of composed parsers
  against regular expressions and a hand-counted nesting oracle

Python 3.13+.
"""
