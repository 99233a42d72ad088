"""Address tokenizer and evaluator.

An address is a sam-style expression such as ``12,20``, ``/func main/``, ``/start/+#5`` or ``$``.  It is split into a
flat list of typed tokens and then evaluated left to right against a byte buffer, dispatching numbers to
:func:`codewalk.stepper.step` and patterns to :func:`codewalk.stepper.search`.

Grammar, one token at a time:

- ``123``      count, applied in the pending direction (an absolute line when none is pending)
- ``+`` ``-``  pending direction for the next count or pattern
- ``#``        the next count is in runes rather than lines
- ``/re/``     forward regular expression search, ``\\`` escapes the next character
- ``$``        end of the buffer
- ``,``        range from the start of the left address to the end of the right one
"""

import logging
import sys
from enum import Enum
from typing import NamedTuple

from codewalk.exceptions import AddressOutOfRange, AddressParseError, InvalidAddress
from codewalk.stepper import Direction, Range, search, step

DIGITS = "0123456789"


class TokenKind(Enum):
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    HASH = "#"
    PATTERN = "pattern"
    COMMA = ","
    DOLLAR = "$"


_SINGLE_CHAR_TOKENS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "#": TokenKind.HASH,
    ",": TokenKind.COMMA,
    "$": TokenKind.DOLLAR,
}

_DIRECTIONS = {
    TokenKind.PLUS: Direction.FORWARD,
    TokenKind.MINUS: Direction.BACKWARD,
}


class Token(NamedTuple):
    """A lexical element of an address; *value* holds the count or the pattern text."""

    kind: TokenKind
    value: int | str | None = None
    position: int = 0


# =============================================================================
# Tokenizer
# =============================================================================


def _parse_count(text: str, position: int) -> int:
    count = int(text)
    if count > sys.maxsize:
        raise AddressParseError(f"count {text} at position {position} is out of range")
    return count


def _scan_pattern(expression: str, start: int) -> tuple[str, int]:
    """Return the pattern opened by the ``/`` at *start* and the position after its closing ``/``.

    A backslash protects the following character, including ``/``; the backslash itself is kept so the regular
    expression engine sees ``\\/``.  An unterminated pattern runs to the end of the expression.
    """
    end = start + 1
    while end < len(expression) and expression[end] != "/":
        if expression[end] == "\\":
            end += 1
        end += 1
    return expression[start + 1 : end], end + 1


def tokenize(expression: str) -> list[Token]:
    """Split *expression* into tokens.

    Args:
        expression: Address text, e.g. ``"/main/,+3"``

    Returns:
        Tokens in source order

    Raises:
        InvalidAddress: On a character outside the address grammar
        AddressParseError: On a count too large to represent
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(expression):
        char = expression[pos]
        if char in DIGITS:
            end = pos + 1
            while end < len(expression) and expression[end] in DIGITS:
                end += 1
            tokens.append(Token(TokenKind.NUMBER, _parse_count(expression[pos:end], pos), pos))
            pos = end
        elif char == "/":
            pattern, end = _scan_pattern(expression, pos)
            tokens.append(Token(TokenKind.PATTERN, pattern, pos))
            pos = end
        elif char in _SINGLE_CHAR_TOKENS:
            tokens.append(Token(_SINGLE_CHAR_TOKENS[char], None, pos))
            pos += 1
        else:
            raise InvalidAddress(f"invalid address syntax near {char!r} in {expression!r}")
    return tokens


# =============================================================================
# Evaluator
# =============================================================================


class _State(NamedTuple):
    """Evaluation state threaded through one sub-address."""

    lo: int
    hi: int
    direction: Direction = Direction.NONE
    char_offset: bool = False


def _apply_count(state: _State, data: bytes, count: int) -> _State:
    stepped = step(data, state.lo, state.hi, state.direction, count, state.char_offset)
    return _State(stepped.lo, stepped.hi)


def _finalize(state: _State, data: bytes) -> _State:
    """Turn a direction left pending without a count into a step of one."""
    if state.direction is Direction.NONE:
        return state
    return _apply_count(state, data, 1)


def _evaluate_simple(tokens: list[Token], data: bytes, start: Range) -> Range:
    """Evaluate a comma-free run of tokens starting from *start*."""
    state = _State(start.lo, start.hi)
    previous: Token | None = None

    for index, token in enumerate(tokens):
        if token.kind is TokenKind.NUMBER:
            state = _apply_count(state, data, token.value)
        elif token.kind in _DIRECTIONS:
            if previous is not None and previous.kind in _DIRECTIONS:
                # A pending "#" also applies to the count that follows
                state = _finalize(state, data)._replace(char_offset=state.char_offset)
            state = state._replace(direction=_DIRECTIONS[token.kind])
        elif token.kind is TokenKind.DOLLAR:
            end = len(data)
            direction = Direction.FORWARD if index + 1 < len(tokens) else state.direction
            state = _State(end, end, direction, state.char_offset)
        elif token.kind is TokenKind.HASH:
            state = state._replace(char_offset=True)
        elif token.kind is TokenKind.PATTERN:
            found = search(data, state.hi, token.value, state.direction)
            state = _State(found.lo, found.hi)
        previous = token

    state = _finalize(state, data)
    return Range(state.lo, state.hi)


def _evaluate(tokens: list[Token], data: bytes, start: Range) -> Range:
    """Evaluate *tokens*, splitting on the first comma and recursing into the right-hand side."""
    for index, token in enumerate(tokens):
        if token.kind is TokenKind.COMMA:
            break
    else:
        return _evaluate_simple(tokens, data, start)

    left = _evaluate_simple(tokens[:index], data, start)
    rest = tokens[index + 1 :]
    if not rest:
        return Range(left.lo, len(data))

    right = _evaluate(rest, data, Range(left.hi, left.hi))
    if right.hi < left.lo:
        raise AddressOutOfRange(f"address out of range: range end {right.hi} precedes start {left.lo}")
    return Range(left.lo, right.hi)


class Address:
    """A parsed address that can be resolved against any number of buffers."""

    def __init__(self, expression: str, tokens: list[Token]):
        self.expression = expression
        self.tokens = tokens

    @classmethod
    def parse(cls, expression: str) -> "Address":
        return cls(expression, tokenize(expression))

    def __repr__(self) -> str:
        return f"Address({self.expression!r})"

    def resolve(self, data: bytes, initial: Range = Range(0, 0)) -> Range:
        """Resolve this address against *data* starting from *initial*.

        Raises:
            AddressError: Any of its subclasses, depending on what failed
        """
        if not 0 <= initial.lo <= initial.hi <= len(data):
            raise AddressOutOfRange(f"address out of range: initial range {tuple(initial)} outside buffer")
        result = _evaluate(self.tokens, data, initial)
        logging.debug(f"Resolved address {self.expression!r} to bytes {result.lo}-{result.hi}")
        return result


def resolve(expression: str, data: bytes, initial: Range = Range(0, 0)) -> Range:
    """Resolve the address *expression* to a byte range within *data*.

    Args:
        expression: Address text
        data: Buffer contents
        initial: Range the evaluation starts from, normally ``(0, 0)``

    Returns:
        The resolved ``Range``

    Raises:
        AddressError: On invalid syntax, out-of-range steps, bad or unmatched patterns, or backward searches

    Examples:
        >>> resolve("2", b"line1\\nline2\\nline3\\n")     # Range(lo=6, hi=12)
        >>> resolve("0,$", b"line1\\nline2\\nline3\\n")   # Range(lo=0, hi=18)
    """
    return Address.parse(expression).resolve(data, initial)
