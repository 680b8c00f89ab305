"""Cursor infrastructure for hand-written recursive-descent parsers.

Implements the owned (source, pos) pair every parser instance carries.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - One cursor per parse, exclusively owned by one parser instance
    - Positions are character offsets (code points), never byte offsets
    - Lookahead never mutates; only advance_* and restore move the cursor
    - Backtracking is explicit: save() a Checkpoint, restore() it on failure
    - Line:column computed on-demand (O(n) only for errors)

Line Ending Support:
    - LF (Unix, \\n): Fully supported
    - CRLF (Windows, \\r\\n): Supported (\\n is the line delimiter)
    - CR-only (Classic Mac, \\r): NOT supported for line numbering

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
"""

from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["Checkpoint", "Cursor", "LineOffsetCache"]


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Saved cursor position for backtracking.

    Obtained from Cursor.save(); pass to Cursor.restore() to rewind.

    Example:
        >>> cursor = Cursor("abc")
        >>> mark = cursor.save()
        >>> cursor.advance_many(2)
        'ab'
        >>> cursor.restore(mark)
        >>> cursor.pos
        0
    """

    pos: int


class Cursor:
    """Mutable source position tracker.

    Key Design Decisions:
        1. Mutable position - advancing is an in-place step, like the index
           field of a hand-written parser struct
        2. Slots - Memory efficiency
        3. Simple position - Just an integer offset into a str
        4. EOF is a property - peek_one() returns None at EOF

    Invariant:
        0 <= pos <= len(source)

    Example:
        >>> cursor = Cursor("hello")
        >>> cursor.peek_one()
        'h'
        >>> cursor.advance_one()
        'h'
        >>> cursor.peek_many(3)
        'ell'
        >>> cursor.pos
        1
    """

    __slots__ = ("_pos", "_source")

    def __init__(self, source: str, pos: int = 0) -> None:
        """Create a cursor over source.

        Args:
            source: The complete input
            pos: Initial position (default: 0)

        Raises:
            ValueError: If pos is outside [0, len(source)]
        """
        if not 0 <= pos <= len(source):
            msg = f"Cursor position {pos} outside source of length {len(source)}"
            raise ValueError(msg)
        self._source = source
        self._pos = pos

    @property
    def source(self) -> str:
        """The complete input (fixed for the lifetime of the cursor)."""
        return self._source

    @property
    def pos(self) -> int:
        """Current character offset."""
        return self._pos

    @property
    def is_eof(self) -> bool:
        """Check if at end of input.

        Returns:
            True if position >= source length
        """
        return self._pos >= len(self._source)

    def remaining(self) -> bool:
        """Return True while there is input left to read."""
        return self._pos < len(self._source)

    def peek_one(self) -> str | None:
        """Inspect the next character without consuming it.

        Returns:
            Character at the current position, or None at end of input
        """
        if self._pos >= len(self._source):
            return None
        return self._source[self._pos]

    def peek_many(self, n: int) -> str:
        """Inspect the next n characters without consuming them.

        Args:
            n: Number of characters to look at

        Returns:
            Up to n characters starting at the current position.
            Shorter if fewer remain.

        Example:
            >>> cursor = Cursor("hello")
            >>> cursor.peek_many(10)
            'hello'
            >>> cursor.pos  # Unchanged
            0
        """
        return self._source[self._pos : self._pos + max(n, 0)]

    def advance_one(self) -> str:
        """Consume the next character.

        Calling this at end of input is a contract violation. It is checked
        with assert (active in tests and debug runs); callers check
        peek_one() or remaining() first.

        Returns:
            The consumed character
        """
        assert self._pos < len(self._source), f"advance_one() at end of input (pos {self._pos})"
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def advance_many(self, n: int) -> str:
        """Consume up to n characters.

        Args:
            n: Number of characters to consume

        Returns:
            The consumed text (shorter than n near end of input)
        """
        text = self.peek_many(n)
        self._pos += len(text)
        return text

    def starts_with(self, text: str) -> bool:
        """Check if the upcoming input starts with text, without consuming."""
        return self._source.startswith(text, self._pos)

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume all contiguous characters matching predicate.

        Args:
            predicate: Character test

        Returns:
            The consumed run (possibly empty)

        Example:
            >>> cursor = Cursor("abc123")
            >>> cursor.take_while(str.isalpha)
            'abc'
            >>> cursor.take_while(str.isalpha)
            ''
        """
        source = self._source
        start = end = self._pos
        length = len(source)
        while end < length and predicate(source[end]):
            end += 1
        self._pos = end
        return source[start:end]

    def save(self) -> Checkpoint:
        """Capture the current position."""
        return Checkpoint(self._pos)

    def restore(self, checkpoint: Checkpoint) -> None:
        """Rewind (or fast-forward) to a saved position.

        Args:
            checkpoint: Position previously returned by save()

        Raises:
            ValueError: If checkpoint lies outside this cursor's source
        """
        if not 0 <= checkpoint.pos <= len(self._source):
            msg = (
                f"Checkpoint position {checkpoint.pos} outside source "
                f"of length {len(self._source)}"
            )
            raise ValueError(msg)
        self._pos = checkpoint.pos

    def slice_from(self, start: int) -> str:
        """Extract source text from start up to the current position.

        Usage:
            >>> cursor = Cursor("hello world")
            >>> start = cursor.pos
            >>> _ = cursor.take_while(lambda c: c != " ")
            >>> cursor.slice_from(start)
            'hello'
        """
        return self._source[start : self._pos]

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position.
            Use LineOffsetCache for many lookups in the same source.

        Example:
            >>> cursor = Cursor("line1\\nline2", 8)
            >>> cursor.compute_line_col()
            (2, 3)
        """
        line = self._source.count("\n", 0, self._pos) + 1
        last_newline = self._source.rfind("\n", 0, self._pos)
        col = self._pos - last_newline if last_newline >= 0 else self._pos + 1
        return (line, col)

    def __repr__(self) -> str:
        return f"Cursor(pos={self._pos}, length={len(self._source)})"


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in O(n) single pass, then provides
    O(log n) lookups using binary search. Use this when you need to
    compute line:column for multiple positions in the same source.

    Example:
        >>> cache = LineOffsetCache("line1\\nline2\\nline3")
        >>> cache.get_line_col(0)   # Start of line 1
        (1, 1)
        >>> cache.get_line_col(8)   # Third char of line 2
        (2, 3)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        """Build line offset cache from source.

        Args:
            source: Source text to index
        """
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    @property
    def line_count(self) -> int:
        """Number of lines (a trailing newline starts a final empty line)."""
        return len(self._offsets)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get line and column for position using binary search.

        Args:
            pos: Character position in source (0-indexed, clamped)

        Returns:
            (line, column) tuple (1-indexed, like text editors)
        """
        pos = max(0, min(pos, self._source_len))

        # Line number = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)
