"""Character classes and lexical helpers for the primitive parsers.

These helpers scan or convert text on a Cursor without producing failures;
Parser methods decide what counts as a failure and report it.
"""

import math

from handparse.constants import DEFAULT_NAME_SYMBOLS
from handparse.syntax.cursor import Cursor

# ASCII digits only. str.isdigit() accepts Unicode digits like ² which
# int() rejects.
DECIMAL_DIGITS: frozenset[str] = frozenset("0123456789")
BINARY_DIGITS: frozenset[str] = frozenset("01")
HEX_DIGITS: frozenset[str] = DECIMAL_DIGITS | frozenset("abcdefABCDEF")

# Radix prefixes accepted by the integer primitives.
RADIX_PREFIXES: dict[str, int] = {"0x": 16, "0b": 2}

_DIGITS_BY_RADIX: dict[int, frozenset[str]] = {
    2: BINARY_DIGITS,
    10: DECIMAL_DIGITS,
    16: HEX_DIGITS,
}

# Single-character escapes understood inside quoted literals. The quote
# character of the literal being parsed is always escapable as well.
SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

# Maximum valid Unicode code point and the UTF-16 surrogate range, which is
# invalid in isolation.
_MAX_UNICODE_CODE_POINT: int = 0x10FFFF
_SURROGATE_RANGE_START: int = 0xD800
_SURROGATE_RANGE_END: int = 0xDFFF
_MAX_HEX_ESCAPE_DIGITS: int = 6


def is_name_char(ch: str, symbols: str = DEFAULT_NAME_SYMBOLS) -> bool:
    """Default name predicate: ASCII alphanumerics plus symbols.

    Example:
        >>> is_name_char("a"), is_name_char("_"), is_name_char("(")
        (True, True, False)
    """
    return (ch.isascii() and ch.isalnum()) or ch in symbols


def scan_radix_prefix(cursor: Cursor) -> int:
    """Consume a 0x/0b prefix if present and return the radix (10 otherwise)."""
    radix = RADIX_PREFIXES.get(cursor.peek_many(2))
    if radix is None:
        return 10
    cursor.advance_many(2)
    return radix


def scan_digits(cursor: Cursor, radix: int = 10, *, separators: bool = True) -> str:
    """Consume a digit run for radix and return it without separators.

    The run must start with a digit; `_` separators are accepted after the
    first digit when separators is True. Returns "" (consuming nothing)
    when the cursor is not at a digit.

    Example:
        >>> scan_digits(Cursor("1_000x"))
        '1000'
        >>> scan_digits(Cursor("_1"))
        ''
    """
    digits = _DIGITS_BY_RADIX[radix]
    first = cursor.peek_one()
    if first is None or first not in digits:
        return ""
    if separators:
        run = cursor.take_while(lambda c: c in digits or c == "_")
        return run.replace("_", "")
    return cursor.take_while(digits.__contains__)


def convert_integer(digits: str, radix: int, low: int, high: int) -> int | None:
    """Convert a digit string and check it against [low, high].

    Decimal text is stripped of leading zeros and, when it has more digits
    than the wider bound, rejected without conversion: int() refuses
    decimal strings beyond sys.get_int_max_str_digits().

    Returns:
        The integer, or None when it falls outside the bounds

    Example:
        >>> convert_integer("0" * 5000 + "7", 10, 0, 255)
        7
        >>> convert_integer("9" * 5000, 10, 0, 255) is None
        True
    """
    if radix == 10:
        sign = "-" if digits.startswith("-") else ""
        significant = digits.removeprefix("-").lstrip("0") or "0"
        if len(significant) > len(str(max(abs(low), abs(high)))):
            return None
        digits = sign + significant
    value = int(digits, radix)
    if not low <= value <= high:
        return None
    return value


def scan_float_text(cursor: Cursor) -> str:
    """Consume the unsigned body of a float: digits, fraction, exponent.

    Consumes nothing and returns "" when no mantissa digit is present.
    A dangling exponent marker ("1e", "2ex") is left unconsumed.

    Example:
        >>> scan_float_text(Cursor("3.25e-2)"))
        '3.25e-2'
        >>> scan_float_text(Cursor("1else"))
        '1'
    """
    start = cursor.pos
    integer_part = scan_digits(cursor, separators=False)
    fraction_part = ""
    if cursor.peek_one() == "." and _digit_after(cursor, 1):
        cursor.advance_one()
        fraction_part = scan_digits(cursor, separators=False)
    if not integer_part and not fraction_part:
        return ""

    if cursor.peek_one() in ("e", "E"):
        mark = cursor.save()
        cursor.advance_one()
        if cursor.peek_one() in ("+", "-"):
            cursor.advance_one()
        if not scan_digits(cursor, separators=False):
            cursor.restore(mark)
    return cursor.slice_from(start)


def convert_float(text: str) -> float | None:
    """Convert float text; None when the value is not finite (overflow)."""
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def _digit_after(cursor: Cursor, offset: int) -> bool:
    lookahead = cursor.peek_many(offset + 1)
    return len(lookahead) > offset and lookahead[offset] in DECIMAL_DIGITS


def scan_unicode_escape(cursor: Cursor) -> str | None:
    """Decode the `{HEX}` part of a `\\u{HEX}` escape.

    Expects the cursor just after the `u`. Consumes the braces and digits on
    success.

    Returns:
        The decoded character, or None for a malformed or invalid code point
        (cursor position is then unspecified; callers restore it)
    """
    if cursor.peek_one() != "{":
        return None
    cursor.advance_one()
    hex_digits = cursor.take_while(HEX_DIGITS.__contains__)
    if not hex_digits or len(hex_digits) > _MAX_HEX_ESCAPE_DIGITS:
        return None
    if cursor.peek_one() != "}":
        return None
    cursor.advance_one()
    code_point = int(hex_digits, 16)
    if code_point > _MAX_UNICODE_CODE_POINT:
        return None
    if _SURROGATE_RANGE_START <= code_point <= _SURROGATE_RANGE_END:
        return None
    return chr(code_point)

