"""
Literal Scanner

Parses a numeric literal at a given offset under the session's encoding.

Literal forms:
    123, -123          decimal integer (sign only for signed encodings)
    1.5, -.5, 2e10     decimal float (f32/f64 only), also inf / nan
    xff, x3f800000     hex bit pattern, any encoding, 'x' prefix (not 0x)

When no literal starts at the offset, parse_literal returns INVALID_VALUE so
the caller can try an operator or parenthesis instead.
"""

import math
import re
from fractions import Fraction
from typing import Tuple

import numpy as np

from .encoding import Encoding
from .errors import RangeError
from .operators import skip_whitespace
from .values import INVALID_VALUE, Value

HEX_DIGITS = '0123456789abcdefABCDEF'

_DECIMAL_INT = re.compile(r'-?[0-9]+')
_DECIMAL_FLOAT = re.compile(
    r'-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'
    r'|-?(?:infinity|inf|nan)(?![A-Za-z0-9_])',
    re.IGNORECASE,
)


def parse_literal(text: str, pos: int, encoding: Encoding) -> Tuple[Value, int]:
    """
    Parse a literal starting at pos (after optional whitespace)

    Args:
        text: Input line
        pos: Offset to start at
        encoding: Encoding the literal is read under

    Returns:
        (value, offset past the literal), or (INVALID_VALUE, pos) with pos
        placed after any whitespace when no literal is present

    Raises:
        RangeError: If the literal does not fit the encoding; pos is the
            literal's first character
    """
    pos = skip_whitespace(text, pos)
    if text.startswith('x', pos):
        return _parse_hex(text, pos, encoding)
    if encoding.is_float:
        return _parse_float(text, pos, encoding)
    return _parse_int(text, pos, encoding)


def _parse_int(text: str, pos: int, encoding: Encoding) -> Tuple[Value, int]:
    """Parse a decimal integer literal with an exact range check"""
    if text.startswith('-', pos) and not encoding.is_signed:
        if pos + 1 < len(text) and text[pos + 1].isdigit():
            raise RangeError(f"Negative literal in unsigned encoding {encoding.name}", pos)
        return INVALID_VALUE, pos

    match = _DECIMAL_INT.match(text, pos)
    if not match:
        return INVALID_VALUE, pos

    number = int(match.group())
    if not encoding.min <= number <= encoding.max:
        raise RangeError(
            f"{match.group()} is outside {encoding.name} range [{encoding.min}, {encoding.max}]",
            pos,
        )
    return Value(encoding, number), match.end()


def _parse_float(text: str, pos: int, encoding: Encoding) -> Tuple[Value, int]:
    """Parse a decimal floating literal, saturating to infinity"""
    match = _DECIMAL_FLOAT.match(text, pos)
    if not match:
        return INVALID_VALUE, pos
    number = float(match.group())
    if encoding.dtype == np.float32:
        return Value.from_float(encoding, _round_to_single(match.group(), number)), match.end()
    return Value.from_float(encoding, number), match.end()


def _round_to_single(literal: str, number: float) -> np.float32:
    """
    Round a decimal literal to float32 as strtof does

    float() has already rounded to double. Rounding that double to float32
    gives the correctly rounded result except when the double landed
    precisely halfway between two float32 neighbours; the exact decimal
    then decides which neighbour wins.
    """
    with np.errstate(over='ignore'):
        single = np.float32(number)
    if not math.isfinite(number) or float(single) == number:
        return single

    toward = np.float32(np.inf) if number > float(single) else np.float32(-np.inf)
    other = np.nextafter(single, toward)
    if np.isinf(single):
        # Overflow threshold: FLT_MAX plus half its own ulp
        below = np.nextafter(other, np.float32(0))
        midpoint = float(other) + (float(other) - float(below)) / 2
    else:
        midpoint = (float(single) + float(other)) / 2
    if number != midpoint:
        return single

    exact = Fraction(literal)
    if exact == Fraction(number):
        return single
    if exact > Fraction(number):
        return max(single, other)
    return min(single, other)


def _parse_hex(text: str, pos: int, encoding: Encoding) -> Tuple[Value, int]:
    """
    Parse an 'x'-prefixed hex literal into a raw bit pattern

    Leading zeros are free; at most encoding.hex_digits significant digits
    may follow them.
    """
    start = pos
    cursor = pos + 1
    if cursor >= len(text) or text[cursor] not in HEX_DIGITS:
        return INVALID_VALUE, start

    while cursor < len(text) and text[cursor] == '0':
        cursor += 1

    digits_start = cursor
    while cursor < len(text) and text[cursor] in HEX_DIGITS:
        cursor += 1

    digits = text[digits_start:cursor]
    if len(digits) > encoding.hex_digits:
        raise RangeError(
            f"x{digits} needs more than {encoding.hex_digits} hex digits for {encoding.name}",
            start,
        )
    bits = int(digits, 16) if digits else 0
    return Value.from_bits(encoding, bits), cursor


__all__ = ['parse_literal', 'HEX_DIGITS']
