"""Numeric and pattern stepping over a byte buffer.

A *step* moves a ``Range`` by a number of lines or runes in a direction, or to the next match of a regular expression.
Every function here is pure: it reads the buffer, never keeps it, and either returns a fresh ``Range`` or raises an
:class:`~codewalk.exceptions.AddressError`.

See https://9p.io/sys/doc/sam/sam.html (Table II) for the addressing model.
"""

import re
from enum import Enum
from typing import NamedTuple

from codewalk.exceptions import AddressOutOfRange, InvalidPattern, NoMatch, UnsupportedDirection

NEWLINE = 0x0A


class Range(NamedTuple):
    """Half-open byte interval ``[lo, hi)`` within a buffer."""

    lo: int
    hi: int


class Direction(Enum):
    """Pending stepping direction while an address is evaluated."""

    NONE = ""
    FORWARD = "+"
    BACKWARD = "-"


# ---------------------------------------------------------------------------
# UTF-8 helpers
# ---------------------------------------------------------------------------


def _rune_length(data: bytes, pos: int) -> int:
    """Return the byte length of the rune starting at *pos*.

    Invalid or truncated sequences count as a single one-byte rune, so stepping always makes progress.
    """
    lead = data[pos]
    if lead < 0x80:
        return 1
    if lead >= 0xF0:
        width = 4
    elif lead >= 0xE0:
        width = 3
    elif lead >= 0xC0:
        width = 2
    else:
        return 1

    try:
        data[pos : pos + width].decode("utf-8")
    except UnicodeDecodeError:
        return 1
    return width


def _is_rune_start(byte: int) -> bool:
    """True unless *byte* is a UTF-8 continuation byte (``10xxxxxx``)."""
    return byte & 0xC0 != 0x80


# ---------------------------------------------------------------------------
# Numeric stepping
# ---------------------------------------------------------------------------


def _forward_runes(data: bytes, hi: int, count: int) -> Range:
    pos = hi
    for _ in range(count):
        if pos >= len(data):
            raise AddressOutOfRange(f"address out of range: +#{count} runs past end of buffer")
        pos += _rune_length(data, pos)
    return Range(pos, pos)


def _backward_runes(data: bytes, lo: int, count: int) -> Range:
    pos = lo
    remaining = count
    while remaining > 0:
        if pos == 0:
            raise AddressOutOfRange(f"address out of range: -#{count} runs past start of buffer")
        pos -= 1
        if _is_rune_start(data[pos]):
            remaining -= 1
    return Range(pos, pos)


def _forward_lines(data: bytes, hi: int, count: int) -> Range:
    # Snap to the start of the next line unless already there
    if hi > 0 and data[hi - 1] != NEWLINE:
        newline = data.find(b"\n", hi)
        hi = len(data) if newline < 0 else newline + 1
    lo = hi
    if count == 0:
        return Range(lo, hi)

    remaining = count
    pos = hi
    while True:
        newline = data.find(b"\n", pos)
        if newline < 0:
            break
        remaining -= 1
        if remaining == 0:
            return Range(lo, newline + 1)
        lo = pos = newline + 1

    # An unterminated last line still counts as a line
    if remaining == 1 and lo < len(data):
        return Range(lo, len(data))
    raise AddressOutOfRange(f"address out of range: +{count} runs past end of buffer")


def _backward_lines(data: bytes, lo: int, count: int) -> Range:
    lo = data.rfind(b"\n", 0, lo) + 1
    hi = lo
    if count == 0:
        return Range(lo, hi)

    remaining = count
    start = lo
    while True:
        remaining -= 1
        if remaining == 1:
            hi = start
        elif remaining == 0:
            return Range(start, hi)
        if start == 0:
            raise AddressOutOfRange(f"address out of range: -{count} runs past start of buffer")
        start = data.rfind(b"\n", 0, start - 1) + 1


def step(data: bytes, lo: int, hi: int, direction: Direction, count: int, char_offset: bool = False) -> Range:
    """Apply a numeric step to the range ``[lo, hi)``.

    Applying ``+n`` (or ``+#n``) advances *n* lines (or runes) after *hi*; applying ``-n`` (or ``-#n``) backs up *n*
    lines (or runes) before *lo*.  With no direction the range first resets to the start of the buffer, which makes a
    bare ``n`` an absolute line number.

    Args:
        data: Buffer contents
        lo: Current range start
        hi: Current range end
        direction: Stepping direction
        count: Number of lines or runes to move
        char_offset: Count runes instead of lines

    Returns:
        The stepped range; line steps select whole lines, rune steps return an empty range

    Raises:
        AddressOutOfRange: If the step runs past either end of the buffer
    """
    if direction is Direction.NONE:
        lo, hi = 0, 0
        direction = Direction.FORWARD

    if direction is Direction.FORWARD:
        if char_offset:
            return _forward_runes(data, hi, count)
        return _forward_lines(data, hi, count)

    if char_offset:
        return _backward_runes(data, lo, count)
    return _backward_lines(data, lo, count)


# ---------------------------------------------------------------------------
# Pattern stepping
# ---------------------------------------------------------------------------


def _byte_offset(text: str, index: int) -> int:
    """Return the UTF-8 byte length of the first *index* characters of *text*."""
    return len(text[:index].encode("utf-8", "surrogateescape"))


def _search_text(regex: re.Pattern, data: bytes, origin: int) -> Range | None:
    """Search the decoded bytes from *origin* onwards; return absolute byte offsets of the first match."""
    text = data[origin:].decode("utf-8", "surrogateescape")
    found = regex.search(text)
    if not found:
        return None
    return Range(origin + _byte_offset(text, found.start()), origin + _byte_offset(text, found.end()))


def search(data: bytes, hi: int, pattern: str, direction: Direction = Direction.FORWARD) -> Range:
    """Find the next match of *pattern* at or after *hi*, wrapping around once.

    Args:
        data: Buffer contents
        hi: Offset where the search starts
        pattern: Regular expression (Python ``re`` syntax), matched against whole UTF-8 characters;
            bytes that are not valid UTF-8 match as single characters
        direction: Only forward searches are supported

    Returns:
        Absolute range of the first match

    Raises:
        UnsupportedDirection: If *direction* is backward
        InvalidPattern: If *pattern* does not compile
        NoMatch: If nothing matches after *hi* nor, when wrapping, anywhere in *data*
    """
    if direction is Direction.BACKWARD:
        raise UnsupportedDirection(f"reverse search not implemented: -/{pattern}/")

    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise InvalidPattern(f"invalid pattern /{pattern}/: {e}") from e

    found = _search_text(regex, data, hi)
    if found:
        return found

    if hi > 0:
        found = _search_text(regex, data, 0)
        if found:
            return found

    raise NoMatch(f"no match for /{pattern}/")
