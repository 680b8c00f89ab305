"""handparse - primitives for hand-written recursive-descent parsers.

Provides the cursor machinery every hand-written parser needs (position
tracking, lookahead, consumption, trivia skipping, literal parsing) and
structured, human-readable parse failures. Grammar logic stays in ordinary
Python methods on a Parser subclass; a raised ParseFailure short-circuits
every enclosing grammar method.

Defining a parser:
```
class TermParser(Parser):
    def parse_term(self) -> Term:
        self.skip_trivia()
        if self.peek_one_is("("):
            self.consume("(")
            func = self.parse_term()
            argm = self.parse_term()
            self.consume(")")
            return App(func, argm)
        return Var(self.parse_name())
```

Using it:
```
try:
    term = TermParser(source, label="main.lc").parse_term()
except ParseFailure as failure:
    print(failure.render())
```

Public API:
    Parser - Base class owning the input and the cursor
    Cursor - The (source, pos) pair with lookahead and consumption
    Checkpoint - Saved cursor position for manual backtracking
    TriviaPolicy - Whitespace and comment configuration
    ParseFailure - The single failure kind raised by primitives
    DiagnosticFormatter - Error reporter (text, rust and json output)

Submodules:
    handparse.syntax - Cursor, trivia, positions and the Parser base
    handparse.diagnostics - Failure codes, templates and formatting
    handparse.core - Recursion depth limiting
"""

from .diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    HandparseError,
    OutputFormat,
    ParseFailure,
)
from .core import DepthGuard
from .syntax import Checkpoint, Cursor, LineOffsetCache, Parser, TriviaPolicy

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("handparse")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Checkpoint",
    "Cursor",
    "DepthGuard",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "HandparseError",
    "LineOffsetCache",
    "OutputFormat",
    "ParseFailure",
    "Parser",
    "TriviaPolicy",
    "__version__",
]
