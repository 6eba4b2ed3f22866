"""
Error taxonomy for bincalc.

Every failure while evaluating a line is a BincalcError carrying an error
code, a message and (once known) the input offset where parsing stopped.
All of them are local to one expression: the REPL reports them and moves on.
"""

from typing import Optional


# ============================================================================
# Error Codes
# ============================================================================

E_PARSE = "E_PARSE"
E_NESTING_DEPTH = "E_NESTING_DEPTH"
E_RANGE = "E_RANGE"
E_TYPE_MISMATCH = "E_TYPE_MISMATCH"
E_DIVISION_BY_ZERO = "E_DIVISION_BY_ZERO"
E_INVALID_SHIFT = "E_INVALID_SHIFT"


# ============================================================================
# Exceptions
# ============================================================================

class BincalcError(Exception):
    """Base exception for expression evaluation errors"""

    kind = "Error"

    def __init__(self, code: str, message: str, pos: Optional[int] = None):
        self.code = code
        self.message = message
        self.pos = pos
        super().__init__(f"[{code}] {message}")

    def at(self, pos: int) -> "BincalcError":
        """Record the offset where parsing stopped, unless already known"""
        if self.pos is None:
            self.pos = pos
        return self


class ParseError(BincalcError):
    """Malformed syntax, unknown token or unsupported operator"""

    kind = "Parse error"

    def __init__(self, message: str, pos: Optional[int] = None, code: str = E_PARSE):
        super().__init__(code, message, pos)


class NestingDepthError(ParseError):
    """Expression nested deeper than the configured limit or the interpreter stack"""

    def __init__(self, limit: int, pos: Optional[int] = None, message: Optional[str] = None):
        self.limit = limit
        super().__init__(message or f"Nesting deeper than {limit} levels", pos,
                         code=E_NESTING_DEPTH)


class RangeError(BincalcError):
    """A literal's magnitude exceeds its encoding's representable range"""

    kind = "Value out of range"

    def __init__(self, message: str, pos: Optional[int] = None):
        super().__init__(E_RANGE, message, pos)


class TypeMismatchError(BincalcError):
    """Binary operands carry different encodings"""

    kind = "Type mismatch"

    def __init__(self, message: str, pos: Optional[int] = None):
        super().__init__(E_TYPE_MISMATCH, message, pos)


class DivisionByZeroError(BincalcError):
    """Integer division or modulus by zero"""

    kind = "Division by zero"

    def __init__(self, message: str, pos: Optional[int] = None):
        super().__init__(E_DIVISION_BY_ZERO, message, pos)


class InvalidShiftError(BincalcError):
    """Shift amount outside [0, bit width)"""

    kind = "Invalid shift"

    def __init__(self, message: str, pos: Optional[int] = None):
        super().__init__(E_INVALID_SHIFT, message, pos)


__all__ = [
    'E_PARSE', 'E_NESTING_DEPTH', 'E_RANGE', 'E_TYPE_MISMATCH',
    'E_DIVISION_BY_ZERO', 'E_INVALID_SHIFT',
    'BincalcError', 'ParseError', 'NestingDepthError', 'RangeError',
    'TypeMismatchError', 'DivisionByZeroError', 'InvalidShiftError',
]
