"""Tests for the top-level package interface."""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError
from unittest.mock import MagicMock, patch

import pytest

import parsecengine
import parsecengine.diagnostics
import parsecengine.syntax
import parsecengine.syntax.parser


class TestPublicApi:
    """__all__ lists exactly the importable public names."""

    @pytest.mark.parametrize(
        "module",
        [
            parsecengine,
            parsecengine.diagnostics,
            parsecengine.syntax,
            parsecengine.syntax.parser,
        ],
    )
    def test_all_names_importable(self, module: object) -> None:
        """Every name in __all__ resolves."""
        for name in module.__all__:  # type: ignore[attr-defined]
            assert hasattr(module, name), f"{module.__name__}.{name}"  # type: ignore[attr-defined]

    def test_no_duplicates(self) -> None:
        """__all__ has no duplicate entries."""
        assert len(parsecengine.__all__) == len(set(parsecengine.__all__))

    def test_combinators_exported(self) -> None:
        """Every constructor is exported at top level."""
        for name in (
            "char", "digit", "satisfy", "any_char", "eof",
            "skip", "maybe", "or_", "and_", "then_maybe",
            "many", "many1", "choice", "map_", "label", "lazy", "run",
        ):
            assert name in parsecengine.__all__

    def test_docstring_example(self) -> None:
        """The package docstring example evaluates as shown."""
        from parsecengine import char, digit, run

        number = digit().many1().map("".join).map(int)
        outcome = run(number & (char("+") & number).many(), "1+2+3")

        assert outcome.unwrap() == (1, [("+", 2), ("+", 3)])


class TestVersion:
    """__version__ comes from package metadata."""

    def test_version_is_string(self) -> None:
        """A version string is always present."""
        assert isinstance(parsecengine.__version__, str)
        assert parsecengine.__version__

    def test_version_fallback(self) -> None:
        """Uninstalled packages report the development version."""
        saved_modules = {
            name: module
            for name, module in sys.modules.items()
            if name == "parsecengine" or name.startswith("parsecengine.")
        }

        try:
            for module_name in saved_modules:
                del sys.modules[module_name]

            mock_version = MagicMock(side_effect=PackageNotFoundError("parsecengine"))
            with patch("importlib.metadata.version", mock_version):
                import parsecengine as reimported

                assert reimported.__version__ == "0.0.0+dev"
        finally:
            for module_name in [
                name
                for name in sys.modules
                if name == "parsecengine" or name.startswith("parsecengine.")
            ]:
                del sys.modules[module_name]
            sys.modules.update(saved_modules)
