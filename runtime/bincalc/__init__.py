"""
bincalc - Fixed-Width Binary Calculator

Evaluates C-style arithmetic expressions under one fixed numeric encoding
and reports each result in decimal and hexadecimal.

**Encodings:**
- s8, s16, s32, s64: two's complement signed integers
- u8, u16, u32, u64: unsigned integers
- f32, f64: IEEE-754 floating point

**Operators** (tightest first):
- unary ~ -, parentheses
- * / %
- + -
- << >>
- &
- ^
- |

**Literals:**
- Decimal: 42, -42, 1.5 (sign only for signed and float encodings)
- Hex bit pattern: x2a, x3f800000 ('x' prefix, up to the encoding's width)

Version: 1.0.0
"""

__version__ = '1.0.0'

# ============================================================================
# Value Layer
# ============================================================================

from .encoding import (
    Encoding, ENCODINGS, ENCODING_BY_NAME, ENCODING_NAMES, get_encoding,
    S8, S16, S32, S64, U8, U16, U32, U64, F32, F64,
)

from .values import (
    Value, INVALID_VALUE,
    format_decimal, format_hex, format_result,
)

# ============================================================================
# Parsing and Evaluation
# ============================================================================

from .operators import Arity, Operator, OPERATOR_TABLE, scan_operator

from .scanner import parse_literal

from .arithmetic import apply_unary, apply_binary

from .evaluator import Evaluator, EvaluatorConfig, evaluate, DEFAULT_MAX_DEPTH

# ============================================================================
# Errors
# ============================================================================

from .errors import (
    E_PARSE, E_NESTING_DEPTH, E_RANGE, E_TYPE_MISMATCH,
    E_DIVISION_BY_ZERO, E_INVALID_SHIFT,
    BincalcError, ParseError, NestingDepthError, RangeError,
    TypeMismatchError, DivisionByZeroError, InvalidShiftError,
)

# ============================================================================
# Session Driver
# ============================================================================

from .repl import Session, format_error

# ============================================================================
# Exports
# ============================================================================

__all__ = [
    # Version
    '__version__',

    # Encodings
    'Encoding', 'ENCODINGS', 'ENCODING_BY_NAME', 'ENCODING_NAMES', 'get_encoding',
    'S8', 'S16', 'S32', 'S64', 'U8', 'U16', 'U32', 'U64', 'F32', 'F64',

    # Values
    'Value', 'INVALID_VALUE', 'format_decimal', 'format_hex', 'format_result',

    # Parsing and evaluation
    'Arity', 'Operator', 'OPERATOR_TABLE', 'scan_operator',
    'parse_literal',
    'apply_unary', 'apply_binary',
    'Evaluator', 'EvaluatorConfig', 'evaluate', 'DEFAULT_MAX_DEPTH',

    # Errors
    'BincalcError', 'ParseError', 'NestingDepthError', 'RangeError',
    'TypeMismatchError', 'DivisionByZeroError', 'InvalidShiftError',
    'E_PARSE', 'E_NESTING_DEPTH', 'E_RANGE', 'E_TYPE_MISMATCH',
    'E_DIVISION_BY_ZERO', 'E_INVALID_SHIFT',

    # Session
    'Session', 'format_error',
]
