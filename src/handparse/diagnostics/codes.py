"""Diagnostic codes and data structures.

Defines failure codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Failure codes with unique identifiers.

    Organized by category:
        1000-1999: Token-level failures (literal, name, number, character)
        2000-2999: Quoted literal failures (strings, escapes)
        3000-3999: Structural failures (end of input, nesting)
        9000-9999: Grammar-defined failures
    """

    # Token-level failures (1000-1999)
    EXPECTED_LITERAL = 1001
    EXPECTED_NAME = 1002
    EXPECTED_NUMBER = 1003
    INVALID_NUMBER = 1004
    EXPECTED_CHARACTER = 1005

    # Quoted literal failures (2000-2999)
    UNTERMINATED_STRING = 2001
    INVALID_ESCAPE = 2002

    # Structural failures (3000-3999)
    EXPECTED_EOF = 3001
    NESTING_DEPTH_EXCEEDED = 3002

    # Grammar-defined failures (9000-9999)
    CUSTOM = 9000


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, line is
                less than 1 (lines are 1-indexed), or column is less than 1
                (columns are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Provides failure information for both humans and tools.

    Attributes:
        code: Unique failure code
        message: Human-readable description ("expected X, found Y")
        span: Source location of the failure
        expected: What the parser expected at that point
        found: Preview of what was actually there (None at end of input)
        label: Name of the parsed input (file name or "<input>")
        hint: Suggestion for fixing the input
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    expected: str | None = None
    found: str | None = None
    label: str | None = None
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable failure description."""
        return self.message
