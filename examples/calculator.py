"""Calculator Example - A Hand-Written Expression Grammar.

Demonstrates writing a recursive-descent grammar on top of handparse:

1. Subclass Parser and add grammar methods
2. Use primitives (consume, parse_f64, peek_one_is) for tokens
3. Bound recursion with nested()
4. Report failures with render() in text and Rust style

Grammar:
    expr   ::= term (("+" | "-") term)*
    term   ::= factor (("*" | "/") factor)*
    factor ::= number | "(" expr ")" | "-" factor

Python 3.13+.
"""

from __future__ import annotations

import sys

from handparse import DiagnosticFormatter, OutputFormat, Parser, ParseFailure


class CalcParser(Parser):
    """Evaluates arithmetic while parsing."""

    def parse_expr(self) -> float:
        value = self.parse_term()
        while True:
            self.skip_trivia()
            if self.peek_one_is("+"):
                self.advance_one()
                value += self.parse_term()
            elif self.peek_one_is("-"):
                self.advance_one()
                value -= self.parse_term()
            else:
                return value

    def parse_term(self) -> float:
        value = self.parse_factor()
        while True:
            self.skip_trivia()
            if self.peek_one_is("*"):
                self.advance_one()
                value *= self.parse_factor()
            elif self.peek_one_is("/") and not self.starts_with("//"):
                self.advance_one()
                mark = self.save()
                divisor = self.parse_factor()
                if divisor == 0:
                    self.restore(mark)
                    raise self.fail("a non-zero divisor")
                value /= divisor
            else:
                return value

    def parse_factor(self) -> float:
        with self.nested():
            self.skip_trivia()
            if self.peek_one_is("("):
                self.consume("(")
                value = self.parse_expr()
                self.consume(")")
                return value
            if self.peek_one_is("-"):
                self.advance_one()
                return -self.parse_factor()
            return self.parse_f64()

    def evaluate(self) -> float:
        value = self.parse_expr()
        self.expect_eof()
        return value


def example_1_evaluate() -> None:
    """Evaluate well-formed expressions."""
    print("=" * 60)
    print("Example 1: Evaluation")
    print("=" * 60)

    for source in ["1 + 2 * 3", "(1 + 2) * 3", "-(4 - 6) / 0.5", "2 * /* inline */ 21"]:
        print(f"{source:<24} = {CalcParser(source).evaluate()}")
    print()


def example_2_failures() -> None:
    """Render parse failures."""
    print("=" * 60)
    print("Example 2: Failures")
    print("=" * 60)

    source = "1 +\n  (2 * 3\n"
    try:
        CalcParser(source, label="calc.txt").evaluate()
    except ParseFailure as failure:
        print(failure.render(context_lines=1))
        print()
        rust = DiagnosticFormatter(output_format=OutputFormat.RUST)
        print(rust.format_failure(failure))
    print()

    try:
        CalcParser("10 / (5 - 5)").evaluate()
    except ParseFailure as failure:
        print(failure.render())
    print()


def main() -> int:
    """Run the examples, or evaluate the expression given on the command line."""
    if len(sys.argv) > 1:
        source = " ".join(sys.argv[1:])
        try:
            print(CalcParser(source, label="<argv>").evaluate())
        except ParseFailure as failure:
            print(failure.render(color=sys.stderr.isatty()), file=sys.stderr)
            return 1
        return 0

    example_1_evaluate()
    example_2_failures()
    return 0


if __name__ == "__main__":
    sys.exit(main())
