"""
Test suite for the value model

Tests:
- Construction with wraparound and bit reinterpretation
- Decimal and hex formatting across widths
- Float bit patterns and IEEE special values
- The invalid sentinel
"""

import math

import numpy as np
import pytest

from bincalc import (
    INVALID_VALUE, Value, format_decimal, format_hex, format_result,
    S8, S16, S32, S64, U8, U16, U32, U64, F32, F64,
)


class TestConstruction:
    """Test Value construction helpers"""

    def test_from_int_in_range(self):
        assert Value.from_int(S16, -5).payload == -5

    def test_from_int_wraps_signed(self):
        assert Value.from_int(S8, 128).payload == -128
        assert Value.from_int(S8, 255).payload == -1
        assert Value.from_int(S16, 65536 + 7).payload == 7

    def test_from_int_wraps_unsigned(self):
        assert Value.from_int(U8, -1).payload == 255
        assert Value.from_int(U64, 2**64).payload == 0

    def test_from_bits_signed(self):
        assert Value.from_bits(S32, 0xffffffff).payload == -1
        assert Value.from_bits(S8, 0x80).payload == -128

    def test_from_bits_float(self):
        value = Value.from_bits(F32, 0x3f800000)
        assert isinstance(value.payload, np.float32)
        assert float(value.payload) == 1.0

    def test_from_float_rounds_to_single(self):
        value = Value.from_float(F32, 0.1)
        assert value.payload == np.float32(0.1)
        assert value.bits == 0x3dcccccd

    def test_from_float_saturates(self):
        value = Value.from_float(F32, 1e39)
        assert math.isinf(value.payload)

    def test_from_float_rejects_integer_encoding(self):
        with pytest.raises(ValueError):
            Value.from_float(S32, 1.0)

    def test_values_are_immutable(self):
        value = Value(S32, 1)
        with pytest.raises(AttributeError):
            value.payload = 2


class TestEquality:
    """Values compare by encoding and bit pattern"""

    def test_same_bits_equal(self):
        assert Value(S16, -1) == Value.from_bits(S16, 0xffff)

    def test_different_encoding_not_equal(self):
        assert Value(S16, 5) != Value(U16, 5)

    def test_nan_with_same_bits_equal(self):
        nan = Value.from_bits(F32, 0x7fc00000)
        assert nan == Value.from_bits(F32, 0x7fc00000)

    def test_hashable(self):
        assert len({Value(S8, 1), Value.from_int(S8, 257), Value(U8, 1)}) == 2


class TestDecimalFormat:
    """Test format_decimal"""

    def test_signed(self):
        assert format_decimal(Value(S8, -128)) == '-128'
        assert format_decimal(Value(S64, -9223372036854775808)) == '-9223372036854775808'

    def test_unsigned(self):
        assert format_decimal(Value(U16, 65535)) == '65535'
        assert format_decimal(Value(U64, 18446744073709551615)) == '18446744073709551615'

    def test_float_fixed_point(self):
        assert format_decimal(Value.from_float(F32, 1.5)) == '1.500000'
        assert format_decimal(Value.from_float(F64, -0.25)) == '-0.250000'

    def test_float_specials(self):
        assert format_decimal(Value.from_float(F64, float('inf'))) == 'inf'
        assert format_decimal(Value.from_float(F64, float('-inf'))) == '-inf'
        assert format_decimal(Value.from_bits(F32, 0x7fc00000)) == 'nan'

    def test_negative_nan(self):
        assert format_decimal(Value.from_bits(F64, 0xfff8000000000000)) == '-nan'
        assert format_decimal(Value.from_bits(F32, 0xffc00000)) == '-nan'
        assert format_result(Value.from_bits(F64, 0xfff8000000000000)) == \
            '-nan (xfff8000000000000)'


class TestHexFormat:
    """Test format_hex"""

    def test_widths(self):
        assert format_hex(Value(U8, 1)) == 'x01'
        assert format_hex(Value(U16, 1)) == 'x0001'
        assert format_hex(Value(U32, 1)) == 'x00000001'
        assert format_hex(Value(U64, 1)) == 'x0000000000000001'

    def test_signed_shows_twos_complement(self):
        assert format_hex(Value(S16, -5)) == 'xfffb'
        assert format_hex(Value(S32, 255)) == 'x000000ff'

    def test_float_shows_ieee_bits(self):
        assert format_hex(Value.from_float(F32, 1.0)) == 'x3f800000'
        assert format_hex(Value.from_float(F64, 1.0)) == 'x3ff0000000000000'
        assert format_hex(Value.from_float(F64, -0.0)) == 'x8000000000000000'

    def test_result_line(self):
        assert format_result(Value(S32, 14)) == '14 (x0000000e)'


class TestInvalidValue:
    """The invalid sentinel carries no payload"""

    def test_not_valid(self):
        assert not INVALID_VALUE.is_valid
        assert Value(S32, 0).is_valid

    def test_formatting_rejected(self):
        with pytest.raises(ValueError):
            format_decimal(INVALID_VALUE)
        with pytest.raises(ValueError):
            format_hex(INVALID_VALUE)

    def test_not_equal_to_valid(self):
        assert INVALID_VALUE != Value(S32, 0)
        assert INVALID_VALUE == Value(None)

    def test_repr(self):
        assert repr(INVALID_VALUE) == 'Value(<invalid>)'
        assert repr(Value(U32, 7)) == 'Value(u32, 7)'
