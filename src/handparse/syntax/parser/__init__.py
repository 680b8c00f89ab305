"""Parser module.

Module Organization:
- core.py: Parser base class with cursor delegation and all primitives
- primitives.py: Character classes and lexical helpers (digits, escapes)

Public API:
    Parser: Base class for hand-written grammars
"""

from handparse.syntax.parser.core import Parser

__all__ = ["Parser"]
