"""
Typed Arithmetic Dispatch

Applies operators to Values under their encoding's exact semantics.

Integer encodings compute on Python ints and reduce the result modulo
2**bits, which reproduces two's-complement wraparound for every width.
Division and remainder truncate toward zero as in C. Faults the hardware
would raise (division by zero, shifting by the width or more) are explicit
errors instead.

Floating encodings compute on numpy scalars of the encoding's own width, so
float32 results are rounded exactly as single precision arithmetic would
round them. IEEE special cases (x/0 -> inf, 0/0 -> nan) are results, not
errors.
"""

import operator
from typing import Callable, Dict, Optional

import numpy as np

from .encoding import Encoding
from .errors import DivisionByZeroError, InvalidShiftError, ParseError, TypeMismatchError
from .operators import (
    ADD, AND, DIVIDE, LEFT_SHIFT, MODULUS, MULTIPLY, NEGATE, NOT, OR,
    RIGHT_SHIFT, SUBTRACT, XOR, Operator,
)
from .values import Value, format_decimal, format_hex

TraceFn = Callable[[str], None]


# ============================================================================
# Integer Semantics
# ============================================================================

def _truncating_divide(left: int, right: int) -> int:
    """C-style division: quotient rounded toward zero"""
    if right == 0:
        raise DivisionByZeroError("Integer division by zero")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _truncating_modulus(left: int, right: int) -> int:
    """C-style remainder: takes the sign of the dividend"""
    if right == 0:
        raise DivisionByZeroError("Integer modulus by zero")
    return left - right * _truncating_divide(left, right)


def _shift_amount(encoding: Encoding, amount: int) -> int:
    if not 0 <= amount < encoding.bits:
        raise InvalidShiftError(
            f"Shift amount {amount} outside [0, {encoding.bits}) for {encoding.name}"
        )
    return amount


_INTEGER_UNARY: Dict[Operator, Callable[[int], int]] = {
    NOT: operator.invert,
    NEGATE: operator.neg,
}

_INTEGER_BINARY: Dict[Operator, Callable[[int, int], int]] = {
    ADD: operator.add,
    SUBTRACT: operator.sub,
    MULTIPLY: operator.mul,
    DIVIDE: _truncating_divide,
    MODULUS: _truncating_modulus,
    AND: operator.and_,
    XOR: operator.xor,
    OR: operator.or_,
}

# Payloads are already in range: signed values shift arithmetically,
# unsigned ones logically.
_SHIFTS: Dict[Operator, Callable[[int, int], int]] = {
    LEFT_SHIFT: operator.lshift,
    RIGHT_SHIFT: operator.rshift,
}


# ============================================================================
# Floating Semantics
# ============================================================================

_FLOAT_UNARY: Dict[Operator, Callable] = {
    NEGATE: operator.neg,
}

_FLOAT_BINARY: Dict[Operator, Callable] = {
    ADD: operator.add,
    SUBTRACT: operator.sub,
    MULTIPLY: operator.mul,
    DIVIDE: operator.truediv,
}


# ============================================================================
# Dispatch
# ============================================================================

def apply_unary(op: Operator, value: Value, trace: Optional[TraceFn] = None) -> Value:
    """
    Apply a prefix operator

    Args:
        op: NOT or NEGATE
        value: Operand
        trace: Called with one trace line after a successful application

    Returns:
        New Value of the operand's encoding

    Raises:
        ParseError: If the operator is not defined for the encoding
    """
    enc = _encoding_of(value)
    if enc.is_float:
        func = _FLOAT_UNARY.get(op)
        if func is None:
            raise _unsupported(op, enc)
        result = Value.from_float(enc, func(value.payload))
    else:
        func = _INTEGER_UNARY.get(op)
        if func is None:
            raise _unsupported(op, enc)
        result = Value.from_int(enc, func(value.payload))

    if trace is not None:
        trace(f"{op.identifier}({format_decimal(value)}) = {format_decimal(result)} "
              f"({op.identifier}{format_hex(value)} = {format_hex(result)})")
    return result


def apply_binary(op: Operator, left: Value, right: Value,
                 trace: Optional[TraceFn] = None) -> Value:
    """
    Apply an infix operator to two same-encoding operands

    Args:
        op: Any INFIX operator
        left: Left operand
        right: Right operand
        trace: Called with one trace line after a successful application

    Returns:
        New Value of the operands' encoding

    Raises:
        TypeMismatchError: If the operands' encodings differ
        ParseError: If the operator is not defined for the encoding
        DivisionByZeroError: Integer division or modulus by zero
        InvalidShiftError: Shift amount outside [0, bits)
    """
    enc = _encoding_of(left)
    if _encoding_of(right) != enc:
        raise TypeMismatchError(
            f"Mixed encodings not supported: {enc.name} {op.identifier} {right.encoding.name}"
        )

    if enc.is_float:
        func = _FLOAT_BINARY.get(op)
        if func is None:
            raise _unsupported(op, enc)
        with np.errstate(all='ignore'):
            result = Value.from_float(enc, func(left.payload, right.payload))
    elif op in _SHIFTS:
        amount = _shift_amount(enc, right.payload)
        result = Value.from_int(enc, _SHIFTS[op](left.payload, amount))
    else:
        func = _INTEGER_BINARY.get(op)
        if func is None:
            raise _unsupported(op, enc)
        result = Value.from_int(enc, func(left.payload, right.payload))

    if trace is not None:
        trace(f"{format_decimal(left)} {op.identifier} {format_decimal(right)} = "
              f"{format_decimal(result)} "
              f"({format_hex(left)} {op.identifier} {format_hex(right)} = {format_hex(result)})")
    return result


def _encoding_of(value: Value) -> Encoding:
    if not value.is_valid:
        raise ValueError("Arithmetic on the invalid value")
    return value.encoding


def _unsupported(op: Operator, encoding: Encoding) -> ParseError:
    return ParseError(f"Operator '{op.identifier}' is not supported for {encoding.name}")


__all__ = ['apply_unary', 'apply_binary', 'TraceFn']
