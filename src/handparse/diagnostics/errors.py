"""handparse exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
ParseFailure is the single failure kind raised by the primitive parsers;
exception propagation short-circuits enclosing grammar methods the way a
monadic bind would.

Python 3.13+. Zero external dependencies.
"""

import logging

from handparse.constants import DEFAULT_LABEL, FOUND_PREVIEW_LENGTH

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .templates import ErrorTemplate

__all__ = ["DepthLimitExceededError", "HandparseError", "ParseFailure", "preview_at"]

logger = logging.getLogger(__name__)


class HandparseError(Exception):
    """Base exception for all handparse errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize HandparseError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self._diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self._diagnostic = None
            super().__init__(message)

    @property
    def diagnostic(self) -> Diagnostic | None:
        """Structured diagnostic, if one was provided."""
        return self._diagnostic


class DepthLimitExceededError(HandparseError):
    """Raised by DepthGuard when the maximum nesting depth is exceeded.

    Parser.nested() reports the same condition as a ParseFailure at the
    cursor position; this error surfaces only when DepthGuard is used
    directly.
    """


def preview_at(source: str, position: int, length: int = FOUND_PREVIEW_LENGTH) -> str | None:
    """Extract a short preview of the input at position.

    The preview stops at the first line break (a line break at position
    itself is kept, so the preview is never empty before end of input).

    Args:
        source: Complete input text
        position: Character offset of the preview
        length: Maximum number of characters

    Returns:
        Preview text, or None at end of input

    Example:
        >>> preview_at("foo bar baz qux", 4, 3)
        'bar'
        >>> preview_at("ab\\ncd", 1)
        'b'
        >>> preview_at("ab", 2) is None
        True
    """
    if position >= len(source):
        return None
    text = source[position : position + length]
    newline = text.find("\n")
    if newline > 0:
        text = text[:newline]
    elif newline == 0:
        text = "\n"
    return text


class ParseFailure(HandparseError):
    """Parse failure with location and context.

    Raised by primitive parsers on mismatch. Grammar code propagates it by
    simply not catching it; alternation catches it after restoring a saved
    checkpoint.

    Attributes are read-only after construction.

    Example:
        >>> failure = ParseFailure("(x y", 4, ")", code=DiagnosticCode.EXPECTED_LITERAL)
        >>> str(failure)
        "expected ')', found end of input"
        >>> (failure.line, failure.column)
        (1, 5)
    """

    def __init__(
        self,
        source: str,
        position: int,
        expected: str,
        found: str | None = None,
        *,
        code: DiagnosticCode = DiagnosticCode.CUSTOM,
        label: str = DEFAULT_LABEL,
        hint: str | None = None,
    ) -> None:
        """Initialize ParseFailure.

        Args:
            source: The complete input being parsed
            position: Character offset where the failure occurred
            expected: Human-readable description of what was expected
            found: Preview of the input at position (None at end of input)
            code: Failure code
            label: Name of the input for diagnostics
            hint: Optional suggestion for fixing the input
        """
        if not 0 <= position <= len(source):
            msg = f"Failure position {position} outside source of length {len(source)}"
            raise ValueError(msg)
        self._source = source
        self._position = position
        self._expected = expected
        self._found = found
        self._code = code
        self._label = label
        self._hint = hint
        # Line and column are computed lazily (O(n) only for reported failures)
        self._line_col: tuple[int, int] | None = None
        super().__init__(ErrorTemplate.failure_message(code, expected, found))

    @classmethod
    def from_template(
        cls,
        template: Diagnostic,
        source: str,
        position: int,
        *,
        label: str = DEFAULT_LABEL,
    ) -> "ParseFailure":
        """Complete an ErrorTemplate diagnostic with position and preview.

        Args:
            template: Span-less diagnostic from ErrorTemplate
            source: The complete input being parsed
            position: Character offset of the failure
            label: Name of the input for diagnostics

        Returns:
            New ParseFailure
        """
        failure = cls(
            source,
            position,
            template.expected if template.expected is not None else template.message,
            preview_at(source, position),
            code=template.code,
            label=label,
            hint=template.hint,
        )
        # args[0] is the message already built by HandparseError
        logger.debug("Parse failure at %s:%d: %s", label, position, failure.args[0])
        return failure

    @property
    def source(self) -> str:
        """The complete input being parsed."""
        return self._source

    @property
    def position(self) -> int:
        """Character offset where the failure occurred."""
        return self._position

    @property
    def expected(self) -> str:
        """What the parser expected at position."""
        return self._expected

    @property
    def found(self) -> str | None:
        """Preview of the input at position (None at end of input)."""
        return self._found

    @property
    def code(self) -> DiagnosticCode:
        """Failure code."""
        return self._code

    @property
    def label(self) -> str:
        """Name of the input for diagnostics."""
        return self._label

    @property
    def hint(self) -> str | None:
        """Suggestion for fixing the input, if any."""
        return self._hint

    @property
    def message(self) -> str:
        """One-line message: "expected X, found Y"."""
        return ErrorTemplate.failure_message(self._code, self._expected, self._found)

    @property
    def line(self) -> int:
        """1-based line of position."""
        return self._compute_line_col()[0]

    @property
    def column(self) -> int:
        """1-based column of position."""
        return self._compute_line_col()[1]

    @property
    def span(self) -> SourceSpan:
        """Source span covering the failing character (empty at end of input)."""
        line, column = self._compute_line_col()
        end = min(self._position + 1, len(self._source))
        return SourceSpan(start=self._position, end=end, line=line, column=column)

    @property
    def diagnostic(self) -> Diagnostic:
        """Structured diagnostic for this failure."""
        return Diagnostic(
            code=self._code,
            message=self.message,
            span=self.span,
            expected=self._expected,
            found=self._found,
            label=self._label,
            hint=self._hint,
        )

    def with_label(self, label: str) -> "ParseFailure":
        """Return a copy of this failure reported under a different label."""
        return ParseFailure(
            self._source,
            self._position,
            self._expected,
            self._found,
            code=self._code,
            label=label,
            hint=self._hint,
        )

    def render(self, *, context_lines: int = 0, color: bool = False) -> str:
        """Render this failure as a human-readable diagnostic.

        Args:
            context_lines: Lines of source shown before and after the failure
            color: Enable ANSI color codes

        Returns:
            "<label>:<line>:<column>: expected X, found Y" followed by the
            source line and a caret under the failing column
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        formatter = DiagnosticFormatter(context_lines=context_lines, color=color)
        return formatter.format_failure(self)

    def _compute_line_col(self) -> tuple[int, int]:
        if self._line_col is None:
            from handparse.syntax.position import column_offset, line_offset  # noqa: PLC0415

            self._line_col = (
                line_offset(self._source, self._position) + 1,
                column_offset(self._source, self._position) + 1,
            )
        return self._line_col

    def __repr__(self) -> str:
        return (
            f"ParseFailure(position={self._position}, expected={self._expected!r}, "
            f"found={self._found!r}, code={self._code.name})"
        )
