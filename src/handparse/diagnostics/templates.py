"""Error message templates.

Centralized failure templates for testable, consistent diagnostics.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]

_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
    "'": "\\'",
}

# Bare descriptions are not quoted, so only line-breaking characters are
# escaped; messages stay on one line.
_DESCRIPTION_ESCAPES: dict[str, str] = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


class ErrorTemplate:
    """Centralized failure templates.

    Every failure the primitives can produce is described here. Each template
    returns a span-less Diagnostic carrying the code, the expectation and an
    optional hint; ParseFailure completes it with position and preview.
    """

    @staticmethod
    def quote(text: str) -> str:
        """Quote text for display, escaping control characters.

        Example:
            >>> ErrorTemplate.quote("a\\nb")
            "'a\\\\nb'"
        """
        return "'" + "".join(_ESCAPES.get(ch, ch) for ch in text) + "'"

    @staticmethod
    def describe_expected(code: DiagnosticCode, expected: str) -> str:
        """Render an expectation: literals quoted, descriptions bare.

        Example:
            >>> ErrorTemplate.describe_expected(DiagnosticCode.CUSTOM, "a\\nb")
            'a\\\\nb'
        """
        if code is DiagnosticCode.EXPECTED_LITERAL:
            return ErrorTemplate.quote(expected)
        return "".join(_DESCRIPTION_ESCAPES.get(ch, ch) for ch in expected)

    @staticmethod
    def describe_found(found: str | None) -> str:
        """Render the found preview, or 'end of input' when absent."""
        if found is None:
            return "end of input"
        return ErrorTemplate.quote(found)

    @staticmethod
    def failure_message(code: DiagnosticCode, expected: str, found: str | None) -> str:
        """Build the one-line failure message.

        Example:
            >>> ErrorTemplate.failure_message(DiagnosticCode.EXPECTED_LITERAL, ")", None)
            "expected ')', found end of input"
        """
        return (
            f"expected {ErrorTemplate.describe_expected(code, expected)}, "
            f"found {ErrorTemplate.describe_found(found)}"
        )

    @staticmethod
    def _template(code: DiagnosticCode, expected: str, hint: str | None = None) -> Diagnostic:
        return Diagnostic(
            code=code,
            message=f"expected {ErrorTemplate.describe_expected(code, expected)}",
            expected=expected,
            hint=hint,
        )

    @staticmethod
    def expected_literal(literal: str) -> Diagnostic:
        """Literal text did not match.

        Args:
            literal: The text that was required

        Returns:
            Diagnostic for EXPECTED_LITERAL
        """
        return ErrorTemplate._template(DiagnosticCode.EXPECTED_LITERAL, literal)

    @staticmethod
    def expected_name() -> Diagnostic:
        """No name characters at the cursor.

        Returns:
            Diagnostic for EXPECTED_NAME
        """
        return ErrorTemplate._template(DiagnosticCode.EXPECTED_NAME, "a name")

    @staticmethod
    def expected_number() -> Diagnostic:
        """No digits at the cursor.

        Returns:
            Diagnostic for EXPECTED_NUMBER
        """
        return ErrorTemplate._template(DiagnosticCode.EXPECTED_NUMBER, "a number")

    @staticmethod
    def invalid_number(text: str, kind: str) -> Diagnostic:
        """Digits were found but do not convert to the requested kind.

        Args:
            text: The consumed numeric text
            kind: Target numeric kind ("u64", "i64", "f64")

        Returns:
            Diagnostic for INVALID_NUMBER
        """
        return ErrorTemplate._template(
            DiagnosticCode.INVALID_NUMBER,
            "a valid number",
            hint=f"'{text}' does not fit in {kind}",
        )

    @staticmethod
    def expected_character() -> Diagnostic:
        """End of input where a character was required.

        Returns:
            Diagnostic for EXPECTED_CHARACTER
        """
        return ErrorTemplate._template(DiagnosticCode.EXPECTED_CHARACTER, "a character")

    @staticmethod
    def unterminated_string(quote: str) -> Diagnostic:
        """End of input inside a quoted literal.

        Args:
            quote: The quote character that opened the literal

        Returns:
            Diagnostic for UNTERMINATED_STRING
        """
        return ErrorTemplate._template(
            DiagnosticCode.UNTERMINATED_STRING,
            "closing quote",
            hint=f"Add a closing {quote} before the end of input",
        )

    @staticmethod
    def invalid_escape(sequence: str) -> Diagnostic:
        """Unrecognized or malformed escape sequence.

        Args:
            sequence: The escape text as written (e.g. "\\q")

        Returns:
            Diagnostic for INVALID_ESCAPE
        """
        return ErrorTemplate._template(
            DiagnosticCode.INVALID_ESCAPE,
            "valid escape",
            hint=(
                f"{ErrorTemplate.quote(sequence)} is not supported; use one of "
                "\\n \\r \\t \\0 \\\\ \\\" \\' \\u{HEX}"
            ),
        )

    @staticmethod
    def expected_eof() -> Diagnostic:
        """Input remained after a complete parse.

        Returns:
            Diagnostic for EXPECTED_EOF
        """
        return ErrorTemplate._template(DiagnosticCode.EXPECTED_EOF, "end of input")

    @staticmethod
    def nesting_depth_exceeded(max_depth: int) -> Diagnostic:
        """Grammar recursion went deeper than the configured limit.

        Args:
            max_depth: The configured nesting limit

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        return ErrorTemplate._template(
            DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            f"at most {max_depth} levels of nesting",
            hint="Configure max_nesting_depth in the Parser constructor to raise the limit",
        )

    @staticmethod
    def custom(expected: str, hint: str | None = None) -> Diagnostic:
        """Grammar-defined expectation.

        Args:
            expected: Description of what the grammar expected
            hint: Optional suggestion

        Returns:
            Diagnostic for CUSTOM
        """
        return ErrorTemplate._template(DiagnosticCode.CUSTOM, expected, hint)
