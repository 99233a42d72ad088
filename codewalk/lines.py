"""Line and byte offset conversion helpers.

Contains pure functions that translate between 1-based line numbers and byte offsets within a buffer. No I/O, no
address parsing, and no display logic should be included here.

Both directions clamp instead of failing: a line number past the end of the buffer maps to ``len(data)``, and an offset
past the end maps to the line following the last newline.
"""


def line_count(data: bytes) -> int:
    """Return the number of lines in *data*.

    A final line without a trailing newline still counts; an empty buffer has no lines.

    Examples:
        >>> line_count(b"a\\nb\\n")      # 2
        >>> line_count(b"a\\nb")         # 2
        >>> line_count(b"")             # 0
    """
    if not data:
        return 0
    newlines = data.count(b"\n")
    return newlines if data.endswith(b"\n") else newlines + 1


def line_of(data: bytes, offset: int) -> int:
    """Return the 1-based number of the line containing the byte at *offset*.

    Counts the newline bytes strictly before *offset* and adds one, so
    ``offset == len(data)`` is well defined: it belongs to the line after the last newline.

    Args:
        data: Buffer contents
        offset: Byte offset into *data*

    Returns:
        Line number, starting at 1

    Examples:
        >>> line_of(b"line1\\nline2\\n", 0)    # 1
        >>> line_of(b"line1\\nline2\\n", 6)    # 2
        >>> line_of(b"line1\\nline2\\n", 12)   # 3
    """
    if offset <= 0:
        return 1
    return data.count(b"\n", 0, offset) + 1


def byte_offset_of_line(data: bytes, line: int) -> int:
    """Return the byte offset of the first byte of *line*.

    Args:
        data: Buffer contents
        line: 1-based line number; values below 1 are treated as line 1

    Returns:
        Offset just after the ``(line - 1)``-th newline, or ``len(data)`` when the
        buffer has fewer newlines than that

    Examples:
        >>> byte_offset_of_line(b"line1\\nline2\\n", 1)    # 0
        >>> byte_offset_of_line(b"line1\\nline2\\n", 2)    # 6
        >>> byte_offset_of_line(b"line1\\nline2\\n", 99)   # 12
    """
    if line <= 1:
        return 0

    offset = 0
    for _ in range(line - 1):
        newline = data.find(b"\n", offset)
        if newline < 0:
            return len(data)
        offset = newline + 1
    return offset
