"""End-to-end tests for the lambda-term grammar in tests/helpers."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from handparse import DiagnosticCode, ParseFailure
from tests.helpers.lambda_term import App, Lam, Term, TermParser, Var, show


def _parse(source: str) -> Term:
    return TermParser(source).parse()


class TestLambdaTermGrammar:
    """term ::= "λ" name term | "(" term term ")" | name."""

    def test_nested_structure(self) -> None:
        """The reference term parses to the exact nested structure."""
        term = _parse("λx(λy(x y) λz z)")

        assert term == Lam(
            "x",
            App(
                Lam("y", App(Var("x"), Var("y"))),
                Lam("z", Var("z")),
            ),
        )
        assert show(term) == "λx (λy (x y) λz z)"

    def test_missing_closing_parenthesis(self) -> None:
        """Dropping the final ')' fails at end of input."""
        with pytest.raises(ParseFailure) as exc_info:
            _parse("λx(λy(x y) λz z")

        failure = exc_info.value
        assert failure.expected == ")"
        assert failure.code is DiagnosticCode.EXPECTED_LITERAL
        assert failure.position == 15
        assert failure.found is None
        assert (failure.line, failure.column) == (1, 16)
        assert str(failure) == "expected ')', found end of input"

    def test_whitespace_and_comments(self) -> None:
        """Trivia may appear between any two tokens."""
        term = _parse("  λ f /* body */ ( f\n  // apply\n x )  ")

        assert term == Lam("f", App(Var("f"), Var("x")))

    def test_missing_variable(self) -> None:
        """A binder without a name fails with 'a name'."""
        with pytest.raises(ParseFailure) as exc_info:
            _parse("λ(x y)")

        assert exc_info.value.expected == "a name"
        assert exc_info.value.position == 1

    def test_trailing_input(self) -> None:
        """A complete term followed by more input fails at the extra token."""
        with pytest.raises(ParseFailure) as exc_info:
            _parse("x y")

        assert exc_info.value.expected == "end of input"
        assert exc_info.value.position == 2

    def test_render_points_at_failure(self) -> None:
        """The rendered diagnostic locates the failure on its line."""
        parser = TermParser("λx\n(x\n", label="term.lc")
        with pytest.raises(ParseFailure) as exc_info:
            parser.parse()

        assert exc_info.value.render().splitlines() == [
            "term.lc:3:1: expected a name, found end of input",
            "",
            "^",
        ]

    def test_deep_nesting_is_bounded(self) -> None:
        """Pathological nesting fails with a diagnostic, not RecursionError."""
        source = "λa " * 1000 + "a"

        with pytest.raises(ParseFailure) as exc_info:
            TermParser(source, max_nesting_depth=50).parse()

        assert exc_info.value.code is DiagnosticCode.NESTING_DEPTH_EXCEEDED

    @given(names=st.lists(st.sampled_from(["a", "b", "f", "x1"]), min_size=1, max_size=8))
    def test_show_parses_back(self, names: list[str]) -> None:
        """PROPERTY: show() output of a parsed term parses to the same term."""
        term: Term = Var(names[0])
        for index, name in enumerate(names[1:]):
            term = Lam(name, term) if index % 2 else App(term, Var(name))

        assert _parse(show(term)) == term
