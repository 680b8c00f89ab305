"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options. This is
the error reporter: it turns a ParseFailure and its source into the terminal
string shown to a human reader.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from .errors import ParseFailure

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_BOLD = "\033[1m"
_BOLD_RED = "\033[1;31m"
_RESET = "\033[0m"


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    TEXT = "text"  # "<label>:<line>:<column>: expected X, found Y" (default)
    RUST = "rust"  # Rust compiler-style output
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (text, rust, json)
        context_lines: Source lines shown before/after the failing line
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> failure = ParseFailure.from_template(
        ...     ErrorTemplate.expected_literal(")"), "(f x", 4
        ... )
        >>> print(DiagnosticFormatter().format_failure(failure))
        <input>:1:5: expected ')', found end of input
        (f x
            ^

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.RUST)
        >>> print(formatter.format_failure(failure))
        error[EXPECTED_LITERAL]: expected ')', found end of input
          --> <input>:1:5
         1 | (f x
           |     ^
    """

    output_format: OutputFormat = OutputFormat.TEXT
    context_lines: int = 0
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic without a source snippet.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.TEXT:
                return self._format_text(diagnostic)
            case OutputFormat.RUST:
                return "\n".join(self._rust_parts(diagnostic))
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_failure(self, failure: "ParseFailure") -> str:
        """Format a parse failure with its source snippet and caret marker.

        Args:
            failure: The failure to render

        Returns:
            Header line followed by the snippet (JSON output has no snippet)
        """
        from handparse.syntax.position import get_error_context  # noqa: PLC0415 - circular

        diagnostic = failure.diagnostic
        if self.output_format is OutputFormat.JSON:
            return self._format_json(diagnostic)

        gutter = self.output_format is OutputFormat.RUST or self.context_lines > 0
        snippet = get_error_context(
            failure.source,
            failure.position,
            context_lines=self.context_lines,
            marker=self._paint("^", _BOLD_RED),
            gutter=gutter,
        )
        if self.output_format is OutputFormat.RUST:
            # Error and location lines above the snippet, help line below.
            parts = self._rust_parts(diagnostic)
            parts.insert(2, snippet)
            return "\n".join(parts)
        return f"{self._format_text(diagnostic)}\n{snippet}"

    def _format_text(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as a single location-prefixed line.

        Example output:
            grammar.txt:3:7: expected a name, found ')'
        """
        label = diagnostic.label or "<input>"
        if diagnostic.span:
            location = f"{label}:{diagnostic.span.line}:{diagnostic.span.column}"
        else:
            location = label
        return f"{self._paint(location, _BOLD)}: {diagnostic.message}"

    def _rust_parts(self, diagnostic: Diagnostic) -> list[str]:
        """Lines of the Rust compiler style layout, without a snippet.

        Example output:
            error[EXPECTED_NAME]: expected a name, found ')'
              --> grammar.txt:3:7
              = help: ...
        """
        severity = self._paint("error", _BOLD_RED)
        parts = [f"{severity}[{diagnostic.code.name}]: {diagnostic.message}"]

        label = diagnostic.label or "<input>"
        if diagnostic.span:
            parts.append(f"  --> {label}:{diagnostic.span.line}:{diagnostic.span.column}")
        else:
            parts.append(f"  --> {label}")

        if diagnostic.hint:
            parts.append(f"  = help: {diagnostic.hint}")

        return parts

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "EXPECTED_NAME", "code_value": 1002, "message": "...", ...}
        """
        import json  # noqa: PLC0415

        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "expected": diagnostic.expected,
            "found": diagnostic.found,
        }

        if diagnostic.label:
            data["label"] = diagnostic.label

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        if diagnostic.hint:
            data["hint"] = diagnostic.hint

        return json.dumps(data, ensure_ascii=False)

    def _paint(self, text: str, style: str) -> str:
        if not self.color:
            return text
        return f"{style}{text}{_RESET}"
