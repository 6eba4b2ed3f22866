"""
Numeric encodings supported by bincalc.

Each encoding is a fixed-width machine representation backed by a numpy
dtype. Width, signedness and integer range all derive from the dtype.

    s8  s16 s32 s64    two's complement signed integers
    u8  u16 u32 u64    unsigned integers
    f32 f64            IEEE-754 single / double
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np


@dataclass(frozen=True)
class Encoding:
    """A fixed-width numeric representation"""
    name: str
    dtype: np.dtype
    description: str

    @property
    def bits(self) -> int:
        return self.dtype.itemsize * 8

    @property
    def hex_digits(self) -> int:
        """Digits needed to spell the full bit pattern in hex"""
        return self.dtype.itemsize * 2

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def is_float(self) -> bool:
        return self.dtype.kind == 'f'

    @property
    def is_signed(self) -> bool:
        return self.dtype.kind in ('i', 'f')

    @property
    def is_integer(self) -> bool:
        return self.dtype.kind in ('i', 'u')

    @property
    def bits_dtype(self) -> np.dtype:
        """Unsigned integer dtype of the same width, for bit reinterpretation"""
        return np.dtype(f'uint{self.bits}')

    @property
    def min(self) -> int:
        if not self.is_integer:
            raise ValueError(f"{self.name} has no integer range")
        return int(np.iinfo(self.dtype).min)

    @property
    def max(self) -> int:
        if not self.is_integer:
            raise ValueError(f"{self.name} has no integer range")
        return int(np.iinfo(self.dtype).max)

    def __str__(self) -> str:
        return self.name


# ============================================================================
# Encoding Table
# ============================================================================

S8 = Encoding('s8', np.dtype(np.int8), "8 bit signed")
S16 = Encoding('s16', np.dtype(np.int16), "16 bit signed")
S32 = Encoding('s32', np.dtype(np.int32), "32 bit signed")
S64 = Encoding('s64', np.dtype(np.int64), "64 bit signed")
U8 = Encoding('u8', np.dtype(np.uint8), "8 bit unsigned")
U16 = Encoding('u16', np.dtype(np.uint16), "16 bit unsigned")
U32 = Encoding('u32', np.dtype(np.uint32), "32 bit unsigned")
U64 = Encoding('u64', np.dtype(np.uint64), "64 bit unsigned")
F32 = Encoding('f32', np.dtype(np.float32), "32 bit floating-point")
F64 = Encoding('f64', np.dtype(np.float64), "64 bit floating-point")

ENCODINGS: Tuple[Encoding, ...] = (S8, S16, S32, S64, U8, U16, U32, U64, F32, F64)

ENCODING_BY_NAME: Dict[str, Encoding] = {enc.name: enc for enc in ENCODINGS}

ENCODING_NAMES: Tuple[str, ...] = tuple(ENCODING_BY_NAME)


def get_encoding(name: str) -> Encoding:
    """
    Look up an encoding by its short name

    Args:
        name: One of s8, s16, s32, s64, u8, u16, u32, u64, f32, f64

    Returns:
        The matching Encoding

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return ENCODING_BY_NAME[name]
    except KeyError:
        raise ValueError(
            f"Unknown encoding '{name}' (expected one of: {', '.join(ENCODING_NAMES)})"
        ) from None


__all__ = [
    'Encoding', 'ENCODINGS', 'ENCODING_BY_NAME', 'ENCODING_NAMES', 'get_encoding',
    'S8', 'S16', 'S32', 'S64', 'U8', 'U16', 'U32', 'U64', 'F32', 'F64',
]
