"""Diagnostic system for parse failures.

Provides structured failure diagnostics with codes, spans, hints, and
human-readable rendering with source snippets.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import DepthLimitExceededError, HandparseError, ParseFailure, preview_at
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "HandparseError",
    "OutputFormat",
    "ParseFailure",
    "SourceSpan",
    "preview_at",
]
