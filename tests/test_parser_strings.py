"""Tests for character and quoted-literal primitives.

parse_char, parse_quoted_string and parse_quoted_char, including escape
decoding and the failure positions for malformed literals.
"""

from __future__ import annotations

import pytest
from hypothesis import given

from handparse import DiagnosticCode, Parser, ParseFailure
from tests.strategies import escaped_strings, plain_string_content

# ============================================================================
# PARSE_CHAR
# ============================================================================


class TestParseChar:
    """One possibly-escaped character, no trivia skipping."""

    def test_plain_character(self) -> None:
        """A plain character is returned as-is."""
        parser = Parser("ab")

        assert parser.parse_char() == "a"
        assert parser.index == 1

    def test_does_not_skip_trivia(self) -> None:
        """Whitespace is a character like any other."""
        assert Parser("  x").parse_char() == " "

    def test_non_ascii(self) -> None:
        """A code point outside ASCII is one character."""
        parser = Parser("λx")

        assert parser.parse_char() == "λ"
        assert parser.index == 1

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("\\n", "\n"),
            ("\\r", "\r"),
            ("\\t", "\t"),
            ("\\0", "\0"),
            ("\\\\", "\\"),
            ('\\"', '"'),
            ("\\'", "'"),
            ("\\u{3bb}", "λ"),
            ("\\u{1F600}", "\U0001f600"),
            ("\\u{0}", "\0"),
            ("\\u{10FFFF}", "\U0010ffff"),
        ],
    )
    def test_escapes(self, source: str, expected: str) -> None:
        """Supported escapes decode and consume the whole sequence."""
        parser = Parser(source)

        assert parser.parse_char() == expected
        assert parser.is_eof

    def test_quote_character_is_escapable(self) -> None:
        """The quote passed in can be escaped even if not a standard escape."""
        assert Parser("\\`").parse_char("`") == "`"

    def test_eof(self) -> None:
        """End of input fails with 'a character'."""
        parser = Parser("")

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_char()

        assert exc_info.value.expected == "a character"
        assert exc_info.value.code is DiagnosticCode.EXPECTED_CHARACTER
        assert exc_info.value.found is None

    @pytest.mark.parametrize(
        "source",
        [
            "\\q",
            "\\",
            "\\`",
            "\\u3bb",
            "\\u{}",
            "\\u{3bb",
            "\\u{D800}",
            "\\u{110000}",
            "\\u{1234567}",
            "\\u{xyz}",
        ],
    )
    def test_invalid_escape_fails_at_backslash(self, source: str) -> None:
        """Unknown or malformed escapes fail at the backslash."""
        parser = Parser("ab" + source)
        parser.advance_many(2)

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_char()

        failure = exc_info.value
        assert failure.expected == "valid escape"
        assert failure.code is DiagnosticCode.INVALID_ESCAPE
        assert failure.position == 2
        assert failure.found is not None
        assert failure.found.startswith("\\")
        assert parser.index == 2


# ============================================================================
# PARSE_QUOTED_STRING
# ============================================================================


class TestParseQuotedString:
    """Double-quoted strings by default, any single quote character allowed."""

    def test_decodes_escape(self) -> None:
        """The written-out escape \\n decodes to a newline."""
        parser = Parser('"hi\\n"')

        assert parser.parse_quoted_string() == "hi\n"
        assert parser.is_eof

    def test_skips_leading_trivia(self) -> None:
        """Trivia before the opening quote is skipped."""
        parser = Parser('  /* s */ "a\\"b" rest')

        assert parser.parse_quoted_string() == 'a"b'
        assert parser.peek_many(5) == " rest"

    def test_empty_string(self) -> None:
        """Two quotes make the empty string."""
        assert Parser('""').parse_quoted_string() == ""

    def test_raw_newlines_allowed(self) -> None:
        """Literal line breaks inside the quotes are kept."""
        assert Parser('"a\nb"').parse_quoted_string() == "a\nb"

    def test_comment_markers_inside_are_content(self) -> None:
        """Trivia is not skipped inside the literal."""
        assert Parser('"// not a comment"').parse_quoted_string() == "// not a comment"

    def test_custom_quote(self) -> None:
        """Single quotes with an escaped single quote."""
        assert Parser("'it\\'s'").parse_quoted_string("'") == "it's"

    def test_other_quote_needs_no_escape(self) -> None:
        """Inside double quotes a single quote is plain content."""
        assert Parser('"it\'s"').parse_quoted_string() == "it's"

    def test_multi_character_quote_rejected(self) -> None:
        """The quote must be a single character."""
        with pytest.raises(ValueError, match="single character"):
            Parser('""').parse_quoted_string('""')

    def test_missing_opening_quote(self) -> None:
        """Without the opening quote the literal expectation fails."""
        parser = Parser("  abc")

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_quoted_string()

        assert exc_info.value.expected == '"'
        assert exc_info.value.code is DiagnosticCode.EXPECTED_LITERAL
        assert exc_info.value.position == 2

    def test_unterminated_fails_at_eof(self) -> None:
        """A missing closing quote fails at end of input."""
        source = '"abc'
        parser = Parser(source)

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_quoted_string()

        failure = exc_info.value
        assert failure.expected == "closing quote"
        assert failure.code is DiagnosticCode.UNTERMINATED_STRING
        assert failure.position == len(source)
        assert failure.found is None
        assert parser.is_eof

    def test_trailing_backslash_is_unterminated(self) -> None:
        """A backslash at the very end cannot close the string."""
        source = '"ab\\'
        parser = Parser(source)

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_quoted_string()

        assert exc_info.value.expected == "closing quote"
        assert exc_info.value.position == len(source)
        assert parser.is_eof

    def test_escaped_quote_at_end_is_unterminated(self) -> None:
        """An escaped quote does not close the string."""
        parser = Parser('"ab\\"')

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_quoted_string()

        assert exc_info.value.expected == "closing quote"

    def test_invalid_escape(self) -> None:
        """An unknown escape fails at its backslash."""
        parser = Parser('"a\\qb"')

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_quoted_string()

        failure = exc_info.value
        assert failure.expected == "valid escape"
        assert failure.position == 2
        assert failure.hint is not None
        assert "'\\\\q'" in failure.hint
        assert parser.index == 2

    @given(content=plain_string_content)
    def test_plain_content_is_returned_verbatim(self, content: str) -> None:
        """PROPERTY: text with no quote or backslash needs no decoding."""
        parser = Parser(f'"{content}"')

        assert parser.parse_quoted_string() == content
        assert parser.is_eof

    @given(pair=escaped_strings())
    def test_escaped_text_decodes(self, pair: tuple[str, str]) -> None:
        """PROPERTY: escaping then parsing yields the original text."""
        decoded, literal = pair

        assert Parser(literal).parse_quoted_string() == decoded


# ============================================================================
# PARSE_QUOTED_CHAR
# ============================================================================


class TestParseQuotedChar:
    """Single-quoted characters like 'x'."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [("'x'", "x"), ("'λ'", "λ"), ("'\\n'", "\n"), ("'\\''", "'"), ("'\"'", '"'), (" 'a'", "a")],
    )
    def test_valid(self, source: str, expected: str) -> None:
        """One character or escape between quotes."""
        parser = Parser(source)

        assert parser.parse_quoted_char() == expected
        assert parser.is_eof

    def test_empty_literal(self) -> None:
        """'' has no character."""
        parser = Parser("''")

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_quoted_char()

        assert exc_info.value.expected == "a character"
        assert exc_info.value.position == 1

    def test_too_many_characters(self) -> None:
        """A second character where the closing quote belongs fails."""
        parser = Parser("'ab'")

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_quoted_char()

        failure = exc_info.value
        assert failure.expected == "'"
        assert failure.code is DiagnosticCode.EXPECTED_LITERAL
        assert failure.position == 2
        assert failure.found == "b'"
        assert str(failure) == "expected '\\'', found 'b\\''"

    def test_unterminated(self) -> None:
        """An opening quote at end of input has no character."""
        parser = Parser("'")

        with pytest.raises(ParseFailure) as exc_info:
            parser.parse_quoted_char()

        assert exc_info.value.expected == "a character"
        assert exc_info.value.found is None
