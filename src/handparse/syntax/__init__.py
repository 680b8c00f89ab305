"""Parsing machinery: cursor, trivia handling, positions and the Parser base.

Python 3.13+.
"""

from .cursor import Checkpoint, Cursor, LineOffsetCache
from .parser import Parser
from .position import column_offset, format_position, get_error_context, line_offset
from .trivia import TriviaPolicy, skip_trivia, skip_whitespace

__all__ = [
    "Checkpoint",
    "Cursor",
    "LineOffsetCache",
    "Parser",
    "TriviaPolicy",
    "column_offset",
    "format_position",
    "get_error_context",
    "line_offset",
    "skip_trivia",
    "skip_whitespace",
]
