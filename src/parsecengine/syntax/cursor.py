"""Immutable cursor over parser input.

Implements the immutable cursor pattern that backtracking relies on.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns a NEW cursor; the old one stays valid, so a
      combinator backtracks by reusing it
    - Line:column computed on-demand (O(n) only for errors)

Line Ending Support:
    ``\\n`` is the line delimiter. CRLF input works because the ``\\n`` is
    still present; CR-only input reports every character on line 1.
"""

from dataclasses import dataclass

from parsecengine.diagnostics import ErrorTemplate

__all__ = ["Cursor"]


@dataclass(frozen=True, slots=True, repr=False)
class Cursor:
    """Immutable source position tracker.

    Invariant: 0 <= pos <= len(source).

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> new_cursor = cursor.advance()
        >>> new_cursor.current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).current
        Traceback (most recent call last):
        ...
        EOFError: Unexpected EOF at position 2
    """

    source: str
    pos: int = 0

    def __post_init__(self) -> None:
        """Validate the offset invariant.

        Raises:
            ValueError: If pos lies outside 0..len(source)
        """
        if not 0 <= self.pos <= len(self.source):
            msg = f"Cursor position {self.pos} outside 0..{len(self.source)}"
            raise ValueError(msg)

    @property
    def is_eof(self) -> bool:
        """True when no input remains."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Returns:
            Current character at position

        Raises:
            EOFError: If at end of input

        Note:
            Check is_eof first, or use peek() when a missing character is
            an expected case.
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    @property
    def remaining(self) -> int:
        """Number of characters left to parse."""
        return len(self.source) - self.pos

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        Advancing past the end clamps to the end of input.

        Example:
            >>> cursor = Cursor("hello", 0)
            >>> cursor.advance().pos
            1
            >>> cursor.pos  # Original unchanged
            0
            >>> cursor.advance(10).pos
            5
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos.

        Useful for recovering the text a parser consumed:

            >>> start = Cursor("123x", 0)
            >>> end = Cursor("123x", 3)
            >>> start.slice_to(end.pos)
            '123'
        """
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Get up to n characters without advancing cursor."""
        return self.source[self.pos : self.pos + n]

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting.

        Example:
            >>> source = "line1\\nline2\\nline3"
            >>> Cursor(source, 0).compute_line_col()
            (1, 1)
            >>> Cursor(source, 8).compute_line_col()  # Middle of line2
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, len={len(self.source)})"
