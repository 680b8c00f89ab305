"""Shared constants for handparse.

Centralized configuration defaults used by the cursor, the primitive
parsers, and the diagnostics layer. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for hand-written grammars
- Input limits: DoS prevention via size constraints
- Primitive defaults: Identifier and numeric conventions
- Diagnostics: Preview and snippet sizes

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Primitive defaults
    "DEFAULT_NAME_SYMBOLS",
    "U64_MAX",
    "I64_MIN",
    "I64_MAX",
    # Diagnostics
    "FOUND_PREVIEW_LENGTH",
    "SNIPPET_WIDTH",
    "DEFAULT_LABEL",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth for Parser.nested().
# Grammar methods recurse on the Python call stack; 100 levels keeps a wide
# margin below the default interpreter recursion limit (1000).
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MiB).
# The whole input is held as a single buffer, so this bounds memory use.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# PRIMITIVE DEFAULTS
# ============================================================================

# Symbol characters accepted in names besides ASCII alphanumerics.
DEFAULT_NAME_SYMBOLS: str = "_.-/$"

# Numeric bounds for the fixed-width integer primitives.
U64_MAX: int = 2**64 - 1
I64_MIN: int = -(2**63)
I64_MAX: int = 2**63 - 1

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Characters of input shown as "found" in a failure message.
FOUND_PREVIEW_LENGTH: int = 10

# Half-width of the source window shown around very long lines.
SNIPPET_WIDTH: int = 40

# Label used in diagnostics when the caller does not name the input.
DEFAULT_LABEL: str = "<input>"
