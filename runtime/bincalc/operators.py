"""
Operator Table

Static registry of every syntactic operator: identifier, precedence (higher
binds tighter) and arity. The table is scanned in declaration order.

Arity:
- PREFIX:   unary operators in operand position (~, -)
- GROUPING: the open parenthesis, also found in operand position
- INFIX:    binary operators between operands
- SENTINEL: close parenthesis and end of input; they only end a recursion

'-' appears twice (PREFIX and INFIX). Which one matches is decided by where
the scan happens, not by table order: operand position scans PREFIX and
GROUPING entries, operator position scans INFIX entries plus the active
sentinel.
"""

from dataclasses import dataclass
from typing import Collection, Optional, Tuple

from .errors import ParseError


class Arity:
    """Operator arity constants"""
    PREFIX = "PREFIX"
    INFIX = "INFIX"
    GROUPING = "GROUPING"
    SENTINEL = "SENTINEL"


@dataclass(frozen=True)
class Operator:
    """Operator descriptor"""
    identifier: str
    precedence: int
    arity: str
    name: str

    @property
    def display(self) -> str:
        return self.identifier or "end of input"

    def __str__(self) -> str:
        return self.display


# ============================================================================
# Operator Table
# ============================================================================

OPEN_PAREN = Operator('(', 8, Arity.GROUPING, 'OPEN_PAREN')
NOT = Operator('~', 7, Arity.PREFIX, 'NOT')
NEGATE = Operator('-', 7, Arity.PREFIX, 'NEGATE')
MULTIPLY = Operator('*', 6, Arity.INFIX, 'MULTIPLY')
DIVIDE = Operator('/', 6, Arity.INFIX, 'DIVIDE')
MODULUS = Operator('%', 6, Arity.INFIX, 'MODULUS')
ADD = Operator('+', 5, Arity.INFIX, 'ADD')
SUBTRACT = Operator('-', 5, Arity.INFIX, 'SUBTRACT')
LEFT_SHIFT = Operator('<<', 4, Arity.INFIX, 'LEFT_SHIFT')
RIGHT_SHIFT = Operator('>>', 4, Arity.INFIX, 'RIGHT_SHIFT')
AND = Operator('&', 3, Arity.INFIX, 'AND')
XOR = Operator('^', 2, Arity.INFIX, 'XOR')
OR = Operator('|', 1, Arity.INFIX, 'OR')
CLOSE_PAREN = Operator(')', 0, Arity.SENTINEL, 'CLOSE_PAREN')
END_EXPRESSION = Operator('', 0, Arity.SENTINEL, 'END_EXPRESSION')

OPERATOR_TABLE: Tuple[Operator, ...] = (
    OPEN_PAREN, NOT, NEGATE,
    MULTIPLY, DIVIDE, MODULUS,
    ADD, SUBTRACT,
    LEFT_SHIFT, RIGHT_SHIFT,
    AND, XOR, OR,
    CLOSE_PAREN, END_EXPRESSION,
)

OPERAND_POSITION = (Arity.PREFIX, Arity.GROUPING)
OPERATOR_POSITION = (Arity.INFIX,)


# ============================================================================
# Scanning
# ============================================================================

def skip_whitespace(text: str, pos: int) -> int:
    """Advance past whitespace"""
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def scan_operator(text: str, pos: int, arities: Collection[str],
                  sentinel: Optional[Operator] = None,
                  table: Tuple[Operator, ...] = OPERATOR_TABLE) -> Tuple[Operator, int]:
    """
    Match the next operator token

    Args:
        text: Input line
        pos: Offset to start scanning at (whitespace is skipped)
        arities: Arity classes acceptable at this position
        sentinel: The one sentinel operator acceptable here, if any
        table: Operator table to scan

    Returns:
        (operator, offset just past its identifier)

    Raises:
        ParseError: If nothing acceptable matches; pos is the offending offset
    """
    pos = skip_whitespace(text, pos)
    for op in table:
        if op.arity not in arities and op is not sentinel:
            continue
        if op is END_EXPRESSION:
            if pos == len(text):
                return op, pos
        elif text.startswith(op.identifier, pos):
            return op, pos + len(op.identifier)

    if pos >= len(text):
        raise ParseError("Unexpected end of input", pos)
    raise ParseError(f"Unexpected '{text[pos]}'", pos)


__all__ = [
    'Arity', 'Operator', 'OPERATOR_TABLE', 'OPERAND_POSITION', 'OPERATOR_POSITION',
    'OPEN_PAREN', 'NOT', 'NEGATE', 'MULTIPLY', 'DIVIDE', 'MODULUS',
    'ADD', 'SUBTRACT', 'LEFT_SHIFT', 'RIGHT_SHIFT', 'AND', 'XOR', 'OR',
    'CLOSE_PAREN', 'END_EXPRESSION',
    'skip_whitespace', 'scan_operator',
]
