"""
Value Model - tagged fixed-width values

A Value pairs an Encoding with a payload of exactly that representation:
a Python int already reduced into the encoding's range for integer
encodings, or a numpy float32/float64 scalar for floating encodings.
Values are immutable; every operation produces a new one.

INVALID_VALUE is the "nothing parsed here" sentinel. It has no encoding and
must never reach arithmetic or formatting.

Formatting:
    format_decimal(Value(s16, -1))  -> "-1"
    format_hex(Value(s16, -1))      -> "xffff"
    format_hex(Value(f32, 1.0))     -> "x3f800000"   (IEEE bit pattern)
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

import numpy as np

from .encoding import Encoding


@dataclass(frozen=True, eq=False)
class Value:
    """A payload tagged with its encoding"""
    encoding: Optional[Encoding]
    payload: Any = None

    @property
    def is_valid(self) -> bool:
        return self.encoding is not None

    @property
    def bits(self) -> int:
        """Raw bit pattern as an unsigned integer"""
        enc = self._require_encoding()
        if enc.is_float:
            return int(np.array(self.payload, dtype=enc.dtype).view(enc.bits_dtype)[()])
        return self.payload & enc.mask

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_int(cls, encoding: Encoding, number: int) -> 'Value':
        """Build an integer value, wrapping modulo 2**bits"""
        if encoding.is_float:
            return cls.from_float(encoding, number)
        return cls(encoding, wrap_int(encoding, number))

    @classmethod
    def from_float(cls, encoding: Encoding, number: Union[float, np.floating]) -> 'Value':
        """Build a floating value, rounding to the encoding's precision"""
        if not encoding.is_float:
            raise ValueError(f"{encoding.name} is not a floating-point encoding")
        # Magnitudes beyond the width saturate to infinity
        with np.errstate(over='ignore'):
            return cls(encoding, encoding.dtype.type(number))

    @classmethod
    def from_bits(cls, encoding: Encoding, bits: int) -> 'Value':
        """Reinterpret a raw bit pattern as a value of the given encoding"""
        bits &= encoding.mask
        if encoding.is_float:
            raw = np.array(bits, dtype=encoding.bits_dtype)
            return cls(encoding, raw.view(encoding.dtype)[()])
        return cls(encoding, wrap_int(encoding, bits))

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if not (self.is_valid and other.is_valid):
            return self.encoding is other.encoding
        return self.encoding == other.encoding and self.bits == other.bits

    def __hash__(self) -> int:
        if not self.is_valid:
            return hash(None)
        return hash((self.encoding.name, self.bits))

    def __repr__(self) -> str:
        if not self.is_valid:
            return "Value(<invalid>)"
        return f"Value({self.encoding.name}, {format_decimal(self)})"

    def _require_encoding(self) -> Encoding:
        if self.encoding is None:
            raise ValueError("The invalid value has no payload")
        return self.encoding


INVALID_VALUE = Value(None)


def wrap_int(encoding: Encoding, number: int) -> int:
    """Reduce an integer modulo 2**bits into the encoding's range"""
    number &= encoding.mask
    if encoding.is_signed and number >> (encoding.bits - 1):
        number -= 1 << encoding.bits
    return number


# ============================================================================
# Formatting
# ============================================================================

def format_decimal(value: Value) -> str:
    """
    Render the natural numeric value of a Value

    Integers print as plain signed/unsigned decimal. Floats print in C "%f"
    style: fixed point with six fractional digits, or inf/-inf/nan. As with C
    printf, a NaN with its sign bit set prints as -nan.
    """
    enc = value._require_encoding()
    if enc.is_float:
        if np.isnan(value.payload) and np.signbit(value.payload):
            return "-nan"
        return "%f" % float(value.payload)
    return str(value.payload)


def format_hex(value: Value) -> str:
    """
    Render the raw bit pattern of a Value

    The pattern is prefixed with 'x' and zero-padded to the encoding's full
    width (2/4/8/16 digits). Floats expose their IEEE encoding rather than
    their numeric value.
    """
    enc = value._require_encoding()
    return f"x{value.bits:0{enc.hex_digits}x}"


def format_result(value: Value) -> str:
    """Render a final result as "<decimal> (<hex>)" """
    return f"{format_decimal(value)} ({format_hex(value)})"


__all__ = [
    'Value', 'INVALID_VALUE', 'wrap_int',
    'format_decimal', 'format_hex', 'format_result',
]
