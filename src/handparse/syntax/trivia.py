"""Trivia handling: whitespace and comments skipped between tokens.

The trivia policy is configuration, not state. A parser type picks one
(Parser.TRIVIA) or a parser instance receives one at construction.
"""

from dataclasses import dataclass, field

from handparse.syntax.cursor import Cursor

__all__ = ["ASCII_WHITESPACE", "TriviaPolicy", "skip_trivia", "skip_whitespace"]

ASCII_WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")


@dataclass(frozen=True, slots=True)
class TriviaPolicy:
    """Which characters and sequences count as trivia.

    Default: ASCII whitespace, `//` line comments and `/* ... */` block
    comments.

    Attributes:
        whitespace: Characters skipped as whitespace
        line_comments: Prefixes that start a comment running to end of line
        block_comments: (start, end) delimiter pairs; not nestable

    Example:
        >>> lisp = TriviaPolicy(line_comments=(";",), block_comments=(("#|", "|#"),))
        >>> cursor = Cursor("  ; note\\n#| block |# x")
        >>> skip_trivia(cursor, lisp)
        >>> cursor.peek_one()
        'x'
    """

    whitespace: frozenset[str] = ASCII_WHITESPACE
    line_comments: tuple[str, ...] = ("//",)
    block_comments: tuple[tuple[str, str], ...] = (("/*", "*/"),)
    # First characters of all comment openers, for a cheap pre-check
    _comment_starts: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate delimiters.

        Raises:
            ValueError: If any comment delimiter is empty (an empty
                delimiter would match without consuming input)
        """
        for prefix in self.line_comments:
            if not prefix:
                msg = "Line comment prefix must be non-empty"
                raise ValueError(msg)
        for start, end in self.block_comments:
            if not start or not end:
                msg = f"Block comment delimiters must be non-empty, got ({start!r}, {end!r})"
                raise ValueError(msg)
        starts = {p[0] for p in self.line_comments} | {s[0] for s, _ in self.block_comments}
        object.__setattr__(self, "_comment_starts", frozenset(starts))

    @classmethod
    def none(cls) -> "TriviaPolicy":
        """Policy that skips nothing."""
        return cls(whitespace=frozenset(), line_comments=(), block_comments=())

    @classmethod
    def whitespace_only(cls, whitespace: frozenset[str] = ASCII_WHITESPACE) -> "TriviaPolicy":
        """Policy that skips whitespace but recognizes no comments."""
        return cls(whitespace=whitespace, line_comments=(), block_comments=())


DEFAULT_TRIVIA = TriviaPolicy()


def skip_whitespace(cursor: Cursor, policy: TriviaPolicy = DEFAULT_TRIVIA) -> None:
    """Skip a run of whitespace characters (no comments).

    Args:
        cursor: Cursor to advance in place
        policy: Trivia policy supplying the whitespace set
    """
    cursor.take_while(policy.whitespace.__contains__)


def _skip_comment(cursor: Cursor, policy: TriviaPolicy) -> bool:
    """Skip one comment at the cursor; return False if none starts here."""
    for prefix in policy.line_comments:
        if cursor.starts_with(prefix):
            cursor.advance_many(len(prefix))
            cursor.take_while(lambda c: c != "\n")
            if cursor.remaining():
                cursor.advance_one()  # Skip the newline as well
            return True
    for start, end in policy.block_comments:
        if cursor.starts_with(start):
            source = cursor.source
            close = source.find(end, cursor.pos + len(start))
            # Unterminated block comment runs to end of input
            stop = len(source) if close == -1 else close + len(end)
            cursor.advance_many(stop - cursor.pos)
            return True
    return False


def skip_trivia(cursor: Cursor, policy: TriviaPolicy = DEFAULT_TRIVIA) -> None:
    """Skip whitespace and comments.

    Repeats until the cursor is neither at a whitespace character nor at a
    comment opener. Always succeeds and is idempotent.

    Args:
        cursor: Cursor to advance in place
        policy: Trivia policy to apply

    Design:
        Every iteration consumes at least one character (delimiters are
        non-empty), so the loop is bounded by input length.

    Example:
        >>> cursor = Cursor("  // comment\\n  /* block */ x")
        >>> skip_trivia(cursor)
        >>> cursor.peek_one()
        'x'
    """
    while True:
        ch = cursor.peek_one()
        if ch is None:
            return
        if ch in policy.whitespace:
            skip_whitespace(cursor, policy)
            continue
        if ch in policy._comment_starts and _skip_comment(cursor, policy):
            continue
        return
