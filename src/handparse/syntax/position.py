"""Position utilities for error reporting.

Provides helper functions for converting character offsets to line/column
positions and for extracting source context around a failure.

Offsets are Python string indices (code points). Lines are delimited by
LF; CRLF input works because the LF is still present, and the trailing CR
is dropped from displayed lines.
"""

from handparse.constants import SNIPPET_WIDTH


def line_offset(source: str, pos: int) -> int:
    """Get 0-based line number from character offset.

    Args:
        source: Complete source text
        pos: Character offset in source

    Returns:
        0-based line number

    Example:
        >>> source = "line1\\nline2\\nline3"
        >>> line_offset(source, 0)   # Start of file
        0
        >>> line_offset(source, 6)   # Start of line2
        1
        >>> line_offset(source, 12)  # Start of line3
        2
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))  # Clamp to source length

    # O(1) memory: count in range instead of creating substring
    return source.count("\n", 0, pos)


def column_offset(source: str, pos: int) -> int:
    """Get 0-based column number from character offset.

    Args:
        source: Complete source text
        pos: Character offset in source

    Returns:
        0-based column number (characters from line start)

    Example:
        >>> source = "hello\\nworld"
        >>> column_offset(source, 0)   # 'h' in "hello"
        0
        >>> column_offset(source, 6)   # 'w' in "world"
        0
        >>> column_offset(source, 10)  # 'd' in "world"
        4
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))  # Clamp to source length

    line_start = source.rfind("\n", 0, pos)

    # If no newline found, column is from start of file
    if line_start == -1:
        return pos

    return pos - line_start - 1


def format_position(source: str, pos: int, zero_based: bool = False) -> str:
    """Format position as human-readable line:column string.

    Args:
        source: Complete source text
        pos: Character offset in source
        zero_based: If True, use 0-based indexing; if False, use 1-based

    Returns:
        Position string like "line:col" (e.g., "2:1")

    Example:
        >>> source = "hello\\nworld\\ntest"
        >>> format_position(source, 6)
        '2:1'
        >>> format_position(source, 6, zero_based=True)
        '1:0'
    """
    line = line_offset(source, pos)
    col = column_offset(source, pos)

    if not zero_based:
        line += 1
        col += 1

    return f"{line}:{col}"


def get_line_content(source: str, line_number: int, zero_based: bool = True) -> str:
    """Extract the content of a specific line.

    Args:
        source: Complete source text
        line_number: Line number to extract
        zero_based: If True, line_number is 0-based; if False, 1-based

    Returns:
        Content of the line (without line terminator)

    Example:
        >>> source = "hello\\nworld\\ntest"
        >>> get_line_content(source, 0)
        'hello'
        >>> get_line_content(source, 2, zero_based=False)
        'world'
    """
    if not zero_based:
        line_number -= 1

    if line_number < 0:
        msg = f"Line number must be >= 0, got {line_number}"
        raise ValueError(msg)

    # split("\n") keeps a final empty line, so end-of-input after a
    # trailing newline still has a line to point at.
    lines = source.split("\n")

    if line_number >= len(lines):
        msg = f"Line {line_number} out of range (source has {len(lines)} lines)"
        raise ValueError(msg)

    return lines[line_number].removesuffix("\r")


def _clip(line: str, col: int) -> tuple[str, int]:
    """Window a long line around col; returns (text, caret column)."""
    if len(line) <= 2 * SNIPPET_WIDTH:
        return line, col
    start = max(0, col - SNIPPET_WIDTH)
    return line[start : start + 2 * SNIPPET_WIDTH], col - start


def get_error_context(
    source: str,
    pos: int,
    context_lines: int = 0,
    marker: str = "^",
    gutter: bool = False,
) -> str:
    """Get formatted error context showing position in source.

    Creates a multi-line string showing the failing line with optional
    surrounding context lines and a marker under the failing column.

    Args:
        source: Complete source text
        pos: Character offset of the failure
        context_lines: Number of lines to show before/after the failing line
        marker: Text placed under the failing column
        gutter: Prefix each line with its 1-based line number

    Returns:
        Formatted error context string

    Example:
        >>> source = "line1\\nline2\\nerror here\\nline4\\nline5"
        >>> print(get_error_context(source, 12, context_lines=1))
        line2
        error here
        ^
        line4
        >>> print(get_error_context(source, 14, gutter=True))
         3 | error here
           |   ^
    """
    line_num = line_offset(source, pos)
    col_num = column_offset(source, pos)

    lines = source.split("\n")

    start_line = max(0, line_num - context_lines)
    end_line = min(len(lines), line_num + context_lines + 1)
    width = len(str(end_line))

    context: list[str] = []
    for i in range(start_line, end_line):
        text = lines[i].removesuffix("\r")
        caret_col = col_num
        if i == line_num:
            text, caret_col = _clip(text, col_num)
        elif len(text) > 2 * SNIPPET_WIDTH:
            text = text[: 2 * SNIPPET_WIDTH]
        if gutter:
            context.append(f" {i + 1:>{width}} | {text}".rstrip())
        else:
            context.append(text)
        # Marker line directly below the failing line
        if i == line_num:
            pad = " " * caret_col
            if gutter:
                context.append(f" {'':>{width}} | {pad}{marker}")
            else:
                context.append(f"{pad}{marker}")

    return "\n".join(context)
