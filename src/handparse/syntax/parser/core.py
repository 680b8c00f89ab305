"""Parser base class for hand-written recursive-descent grammars.

Grammar authors subclass Parser and add their own parsing methods. A parser
instance owns one Cursor over one input; the primitives below read and
advance it.

Architecture:
    - Every primitive skips trivia first (except parse_char, peek_is and
      peek_one_is), then matches or raises ParseFailure.
    - Raising is the short-circuit: a grammar method that calls primitives
      stops at the first failure without any explicit checks.
    - On failure the cursor is left at failure.position. Primitives do not
      rewind; alternation is the caller's job::

          mark = self.save()
          try:
              return self.parse_call()
          except ParseFailure:
              self.restore(mark)
          return self.parse_name()

Liveness:
    Every primitive either advances the cursor or fails. No primitive loops
    without consuming input.

Security:
    Includes a configurable input size limit and a nesting depth limit for
    recursive grammar methods (see nested()).
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import ClassVar

from handparse.constants import (
    DEFAULT_LABEL,
    DEFAULT_NAME_SYMBOLS,
    I64_MAX,
    I64_MIN,
    MAX_DEPTH,
    MAX_SOURCE_SIZE,
    U64_MAX,
)
from handparse.core.depth_guard import DepthGuard
from handparse.diagnostics import Diagnostic, ErrorTemplate, ParseFailure
from handparse.syntax.cursor import Checkpoint, Cursor
from handparse.syntax.parser.primitives import (
    SIMPLE_ESCAPES,
    convert_float,
    convert_integer,
    is_name_char,
    scan_digits,
    scan_float_text,
    scan_radix_prefix,
    scan_unicode_escape,
)
from handparse.syntax.trivia import DEFAULT_TRIVIA, TriviaPolicy, skip_trivia, skip_whitespace

__all__ = ["Parser"]

logger = logging.getLogger(__name__)


class Parser:
    """Base class owning an input buffer and a cursor.

    Subclass it and attach grammar methods::

        class ListParser(Parser):
            def parse_list(self) -> list[int]:
                self.consume("[")
                items = []
                self.skip_trivia()
                while not self.peek_one_is("]"):
                    if items:
                        self.consume(",")
                    items.append(self.parse_i64())
                    self.skip_trivia()
                self.consume("]")
                return items

    Per-type configuration:
        TRIVIA: Trivia policy applied by the primitives
        NAME_SYMBOLS: Symbols accepted in names besides ASCII alphanumerics
        is_name_char(): Override for a fully custom name predicate

    Attributes:
        cursor: The owned cursor
        label: Name of the input in diagnostics
        trivia: Effective trivia policy
    """

    TRIVIA: ClassVar[TriviaPolicy] = DEFAULT_TRIVIA
    NAME_SYMBOLS: ClassVar[str] = DEFAULT_NAME_SYMBOLS

    __slots__ = ("_cursor", "_depth_guard", "_label", "_trivia")

    def __init__(
        self,
        source: str,
        *,
        label: str = DEFAULT_LABEL,
        trivia: TriviaPolicy | None = None,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize the parser with its cursor at position 0.

        Args:
            source: The complete input
            label: Name of the input in diagnostics (e.g. a file name)
            trivia: Trivia policy overriding the class TRIVIA
            max_source_size: Maximum source size in characters (default: 10 MiB).
                            Set to 0 to disable the limit (not recommended).
            max_nesting_depth: Maximum depth for nested() (default: 100)

        Raises:
            ValueError: If source exceeds max_source_size
        """
        size_limit = max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        if size_limit > 0 and len(source) > size_limit:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({size_limit:,} characters). "
                "Configure max_source_size in the Parser constructor to increase limit."
            )
            raise ValueError(msg)

        self._cursor = Cursor(source)
        self._label = label
        self._trivia = trivia if trivia is not None else self.TRIVIA
        self._depth_guard = DepthGuard(
            max_depth=max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )
        logger.debug(
            "Created %s over %d characters (label=%s)", type(self).__name__, len(source), label
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> Cursor:
        """The owned cursor."""
        return self._cursor

    @property
    def source(self) -> str:
        """The complete input."""
        return self._cursor.source

    @property
    def index(self) -> int:
        """Current character offset."""
        return self._cursor.pos

    @property
    def label(self) -> str:
        """Name of the input in diagnostics."""
        return self._label

    @property
    def trivia(self) -> TriviaPolicy:
        """Effective trivia policy."""
        return self._trivia

    @property
    def max_nesting_depth(self) -> int:
        """Maximum depth allowed by nested()."""
        return self._depth_guard.max_depth

    @property
    def is_eof(self) -> bool:
        """Check if the cursor is at end of input (trivia not skipped)."""
        return self._cursor.is_eof

    # ------------------------------------------------------------------
    # Cursor operations
    # ------------------------------------------------------------------

    def peek_one(self) -> str | None:
        """Inspect the next character without consuming it."""
        return self._cursor.peek_one()

    def peek_many(self, n: int) -> str:
        """Inspect up to n upcoming characters without consuming them."""
        return self._cursor.peek_many(n)

    def advance_one(self) -> str:
        """Consume one character (the caller checks for end of input first)."""
        return self._cursor.advance_one()

    def advance_many(self, n: int) -> str:
        """Consume up to n characters."""
        return self._cursor.advance_many(n)

    def remaining(self) -> bool:
        """Return True while there is input left to read."""
        return self._cursor.remaining()

    def save(self) -> Checkpoint:
        """Capture the cursor position for backtracking."""
        return self._cursor.save()

    def restore(self, checkpoint: Checkpoint) -> None:
        """Return the cursor to a saved position."""
        self._cursor.restore(checkpoint)

    def starts_with(self, text: str) -> bool:
        """Check if the upcoming input starts with text (trivia not skipped)."""
        return self._cursor.starts_with(text)

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume all contiguous characters matching predicate."""
        return self._cursor.take_while(predicate)

    def peek_is(self, predicate: Callable[[str], bool]) -> bool:
        """Test the next character without consuming it or skipping trivia."""
        ch = self._cursor.peek_one()
        return ch is not None and predicate(ch)

    def peek_one_is(self, char: str) -> bool:
        """Check the next character without consuming it or skipping trivia."""
        return self._cursor.peek_one() == char

    # ------------------------------------------------------------------
    # Failures
    # ------------------------------------------------------------------

    def fail(self, expected: str | Diagnostic, *, hint: str | None = None) -> ParseFailure:
        """Build a ParseFailure at the current position.

        The failure is returned, not raised, so call sites read
        ``raise self.fail("an expression")``.

        Args:
            expected: Description of what was expected, or an ErrorTemplate
                diagnostic
            hint: Optional suggestion (custom descriptions only)

        Returns:
            ParseFailure with a preview of the input at the cursor
        """
        template = expected if isinstance(expected, Diagnostic) else ErrorTemplate.custom(expected, hint)
        return ParseFailure.from_template(template, self.source, self.index, label=self._label)

    def _fail_at(self, checkpoint: Checkpoint, template: Diagnostic) -> ParseFailure:
        """Move the cursor to checkpoint and build a failure there."""
        self._cursor.restore(checkpoint)
        return self.fail(template)

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Bound the recursion depth of a grammar method.

        Usage:
            def parse_term(self) -> Term:
                with self.nested():
                    ...

        Raises:
            ParseFailure: If entering would exceed max_nesting_depth
        """
        if self._depth_guard.is_exceeded():
            raise self.fail(ErrorTemplate.nesting_depth_exceeded(self._depth_guard.max_depth))
        with self._depth_guard:
            yield

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def skip_whitespace(self) -> None:
        """Skip whitespace (no comments) per the trivia policy."""
        skip_whitespace(self._cursor, self._trivia)

    def skip_trivia(self) -> None:
        """Skip whitespace and comments per the trivia policy. Never fails."""
        skip_trivia(self._cursor, self._trivia)

    def consume(self, literal: str) -> None:
        """Consume literal text after trivia.

        Raises:
            ParseFailure: If the input does not start with literal; the
                failure and the cursor sit at the first significant character
        """
        self.skip_trivia()
        if not self._cursor.starts_with(literal):
            raise self.fail(ErrorTemplate.expected_literal(literal))
        self._cursor.advance_many(len(literal))

    def is_name_char(self, ch: str) -> bool:
        """Name predicate: ASCII alphanumerics plus NAME_SYMBOLS."""
        return is_name_char(ch, self.NAME_SYMBOLS)

    def parse_name(self) -> str:
        """Parse a maximal non-empty run of name characters after trivia.

        Raises:
            ParseFailure: If the first character is not a name character
        """
        self.skip_trivia()
        name = self._cursor.take_while(self.is_name_char)
        if not name:
            raise self.fail(ErrorTemplate.expected_name())
        return name

    def _parse_integer(self, *, signed: bool, low: int, high: int, kind: str) -> int:
        self.skip_trivia()
        start = self.save()
        negative = False
        if signed and self.peek_one() in ("+", "-"):
            negative = self.advance_one() == "-"
        radix = scan_radix_prefix(self._cursor)
        digits = scan_digits(self._cursor, radix)
        if not digits:
            raise self.fail(ErrorTemplate.expected_number())
        value = convert_integer(("-" if negative else "") + digits, radix, low, high)
        if value is None:
            text = self._cursor.slice_from(start.pos)
            raise self._fail_at(start, ErrorTemplate.invalid_number(text, kind))
        return value

    def parse_u64(self) -> int:
        """Parse an unsigned 64-bit integer after trivia.

        Supports decimal, hex (0xNUM) and binary (0bNUM), with `_` digit
        separators.

        Raises:
            ParseFailure: "a number" without digits; "a valid number" on
                overflow (reported at the start of the number)
        """
        return self._parse_integer(signed=False, low=0, high=U64_MAX, kind="u64")

    def parse_i64(self) -> int:
        """Parse a signed 64-bit integer after trivia (optional + or -).

        Raises:
            ParseFailure: "a number" without digits; "a valid number" when
                the value is outside the i64 range
        """
        return self._parse_integer(signed=True, low=I64_MIN, high=I64_MAX, kind="i64")

    def parse_f64(self) -> float:
        """Parse a floating point number after trivia.

        Accepts an optional sign, digits, an optional fraction and an
        optional exponent: -12, 3.5, .5, 6.02e23.

        Raises:
            ParseFailure: "a number" without digits; "a valid number" when
                the value overflows to infinity
        """
        self.skip_trivia()
        start = self.save()
        if self.peek_one() in ("+", "-"):
            self.advance_one()
        if not scan_float_text(self._cursor):
            raise self.fail(ErrorTemplate.expected_number())
        text = self._cursor.slice_from(start.pos)
        value = convert_float(text)
        if value is None:
            raise self._fail_at(start, ErrorTemplate.invalid_number(text, "f64"))
        return value

    def parse_char(self, quote: str | None = None) -> str:
        """Parse one character, decoding an escape sequence if present.

        Does not skip trivia. Escapes: \\n \\r \\t \\0 \\\\ \\" \\' \\u{HEX},
        plus the quote character when given.

        Raises:
            ParseFailure: "a character" at end of input; "valid escape"
                (reported at the backslash) for unknown escapes
        """
        ch = self._cursor.peek_one()
        if ch is None:
            raise self.fail(ErrorTemplate.expected_character())
        if ch != "\\":
            return self._cursor.advance_one()

        start = self.save()
        self._cursor.advance_one()
        escape = self._cursor.peek_one()
        if escape is None:
            raise self._fail_at(start, ErrorTemplate.invalid_escape("\\"))
        self._cursor.advance_one()
        if escape in SIMPLE_ESCAPES:
            return SIMPLE_ESCAPES[escape]
        if escape == quote:
            return escape
        if escape == "u":
            decoded = scan_unicode_escape(self._cursor)
            if decoded is not None:
                return decoded
        sequence = self._cursor.slice_from(start.pos)
        raise self._fail_at(start, ErrorTemplate.invalid_escape(sequence))

    def parse_quoted_string(self, quote: str = '"') -> str:
        """Parse a quoted string after trivia, like "foo\\tbar".

        Args:
            quote: Single quote character delimiting the string

        Returns:
            The decoded contents (quotes removed, escapes decoded)

        Raises:
            ParseFailure: the opening quote is missing; "closing quote" at
                end of input; "valid escape" for unknown escapes
        """
        if len(quote) != 1:
            msg = f"Quote must be a single character, got {quote!r}"
            raise ValueError(msg)
        self.consume(quote)
        chars: list[str] = []
        while True:
            ch = self._cursor.peek_one()
            if ch is None:
                raise self.fail(ErrorTemplate.unterminated_string(quote))
            if ch == quote:
                self._cursor.advance_one()
                return "".join(chars)
            if ch == "\\" and self._cursor.peek_many(2) == "\\":
                # Backslash is the last character of the input
                self._cursor.advance_one()
                raise self.fail(ErrorTemplate.unterminated_string(quote))
            chars.append(self.parse_char(quote))

    def parse_quoted_char(self, quote: str = "'") -> str:
        """Parse a quoted character after trivia, like 'x' or '\\n'.

        Raises:
            ParseFailure: missing quotes, an empty literal, or a bad escape
        """
        self.consume(quote)
        if self.peek_one_is(quote):
            raise self.fail(ErrorTemplate.expected_character())
        ch = self.parse_char(quote)
        if not self.peek_one_is(quote):
            raise self.fail(ErrorTemplate.expected_literal(quote))
        self._cursor.advance_one()
        return ch

    def expect_eof(self) -> None:
        """Require that only trivia remains.

        Raises:
            ParseFailure: "end of input" at the first significant character
        """
        self.skip_trivia()
        if self._cursor.remaining():
            raise self.fail(ErrorTemplate.expected_eof())
