"""Snippet helpers: whole-line expansion and leading context.

Pure functions used to present a resolved range: widen it to complete lines, find where a few lines of context before
it begin, and report which line numbers it covers.
"""

from codewalk.lines import line_of
from codewalk.stepper import NEWLINE, Range

DEFAULT_CONTEXT_LINES = 4


def expand_to_lines(data: bytes, span: Range) -> Range:
    """Widen *span* so it starts and ends on line boundaries.

    ``lo`` moves back to just after the preceding newline (or the start of the buffer) and ``hi`` moves forward through
    the next newline (or the end of the buffer).  An empty range grows to the whole line it sits on.  Applying the
    function to its own result changes nothing.

    Examples:
        >>> expand_to_lines(b"ab\\ncd\\nef\\n", Range(4, 4))   # Range(lo=3, hi=6)
        >>> expand_to_lines(b"ab\\ncd\\nef\\n", Range(1, 4))   # Range(lo=0, hi=6)
    """
    lo, hi = span
    lo = data.rfind(b"\n", 0, lo) + 1
    if hi == lo or (hi > 0 and data[hi - 1] != NEWLINE):
        newline = data.find(b"\n", hi)
        hi = len(data) if newline < 0 else newline + 1
    return Range(lo, hi)


def context_start(data: bytes, offset: int, max_lines: int = DEFAULT_CONTEXT_LINES) -> int:
    """Return where a window showing context before *offset* should begin.

    Scans backward from *offset* over at most *max_lines* newline bytes; the result sits just after the last one
    counted, or at 0 if the buffer starts first.  When *offset* is a line start the newline ending the previous line is
    the first one counted, so ``max_lines - 1`` full lines of context are shown.

    Args:
        data: Buffer contents
        offset: Start of the highlighted region
        max_lines: Number of newline boundaries to cross

    Returns:
        Offset of the first byte of the context window
    """
    mark = offset
    remaining = max_lines
    while mark > 0 and remaining > 0:
        if data[mark - 1] == NEWLINE:
            remaining -= 1
            if remaining == 0:
                break
        mark -= 1
    return mark


def line_span(data: bytes, span: Range) -> tuple[int, int]:
    """Return the first and last 1-based line numbers covered by a whole-line *span*.

    An empty span reports the same line twice.
    """
    first = line_of(data, span.lo)
    last = line_of(data, span.hi - 1) if span.hi > span.lo else first
    return first, last
