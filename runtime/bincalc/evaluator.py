"""
Precedence-Climbing Evaluator

Parses and evaluates an expression in a single pass. No syntax tree is
built: each recursive step consumes tokens and folds them into a Value
straight away.

The recursion carries (offset, threshold, sentinel) and hands back
(value, next operator, offset). An operator binds into the current call
only while its precedence exceeds the threshold; otherwise it is returned
so an enclosing call can look at it. Parentheses restart at threshold 0
with ')' as their sentinel; the top level uses end of input.

Right-hand operands of a tighter tier recurse just as parentheses do.
Each recursion costs one level of depth, so max_depth bounds the real
call depth rather than only the visible nesting.

Example:
    >>> evaluator = Evaluator(EvaluatorConfig('s32'))
    >>> format_result(evaluator.evaluate('2 + 3 * 4'))
    '14 (x0000000e)'
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .arithmetic import TraceFn, apply_binary, apply_unary
from .encoding import Encoding, get_encoding
from .errors import BincalcError, NestingDepthError, ParseError
from .operators import (
    CLOSE_PAREN, END_EXPRESSION, OPEN_PAREN, OPERAND_POSITION, OPERATOR_POSITION,
    OPERATOR_TABLE, Operator, scan_operator, skip_whitespace,
)
from .scanner import parse_literal
from .values import Value

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger("bincalc.trace")

DEFAULT_MAX_DEPTH = 200


@dataclass(frozen=True)
class EvaluatorConfig:
    """Session configuration, fixed for the evaluator's lifetime"""
    encoding: Union[Encoding, str]
    verbose: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self):
        if isinstance(self.encoding, str):
            object.__setattr__(self, 'encoding', get_encoding(self.encoding))
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive (got {self.max_depth})")


class Evaluator:
    """Evaluate expressions under one fixed encoding"""

    def __init__(self, config: EvaluatorConfig, trace: Optional[TraceFn] = None,
                 table: Tuple[Operator, ...] = OPERATOR_TABLE):
        """
        Args:
            config: Encoding, verbosity and nesting limit
            trace: Sink for per-step trace lines when config.verbose is set;
                defaults to the "bincalc.trace" logger at INFO
            table: Operator table to scan
        """
        self.config = config
        self.table = table
        if config.verbose:
            self.trace = trace if trace is not None else trace_logger.info
        else:
            self.trace = None

    @property
    def encoding(self) -> Encoding:
        return self.config.encoding

    def evaluate(self, text: str) -> Value:
        """
        Evaluate one expression

        Args:
            text: Expression line, without its line terminator

        Returns:
            The resulting Value

        Raises:
            BincalcError: On the first parse, range or arithmetic error; its
                pos is the offset where evaluation stopped
        """
        logger.debug("evaluating %r as %s", text, self.encoding.name)
        try:
            value, _, _ = self._compute_expression(text, 0, END_EXPRESSION, 0, 0)
        except BincalcError as e:
            logger.debug("evaluation failed at %s: %s", e.pos, e)
            raise
        except RecursionError:
            # A max_depth above what the interpreter stack allows
            logger.debug("interpreter stack exhausted below max_depth=%d", self.config.max_depth)
            raise NestingDepthError(
                self.config.max_depth, 0, "Nesting too deep for the interpreter stack",
            ) from None
        return value

    # ------------------------------------------------------------------
    # Recursive descent
    # ------------------------------------------------------------------

    def _compute_expression(self, text: str, pos: int, sentinel: Operator,
                            min_precedence: int, depth: int) -> Tuple[Value, Operator, int]:
        """Fold operators binding tighter than min_precedence; return the first that doesn't"""
        value, pos = self._compute_value(text, pos, depth)
        op, pos = self._scan_binary(text, pos, sentinel)
        while op.precedence > min_precedence:
            right, next_op, pos = self._compute_expression(text, pos, sentinel, op.precedence,
                                                          depth + 1)
            try:
                value = apply_binary(op, value, right, self.trace)
            except BincalcError as e:
                raise e.at(pos)
            op = next_op
        return value, op, pos

    def _compute_value(self, text: str, pos: int, depth: int) -> Tuple[Value, int]:
        """Primary production: literal, parenthesized expression or prefix operator"""
        value, pos = parse_literal(text, pos, self.encoding)
        if value.is_valid:
            return value, pos

        op, pos = scan_operator(text, pos, OPERAND_POSITION, table=self.table)
        if depth >= self.config.max_depth:
            raise NestingDepthError(self.config.max_depth, pos)

        if op is OPEN_PAREN:
            value, _, pos = self._compute_expression(text, pos, CLOSE_PAREN, 0, depth + 1)
            return value, pos

        operand, pos = self._compute_value(text, pos, depth + 1)
        try:
            return apply_unary(op, operand, self.trace), pos
        except BincalcError as e:
            raise e.at(pos)

    def _scan_binary(self, text: str, pos: int, sentinel: Operator) -> Tuple[Operator, int]:
        """Scan an infix operator or the active sentinel"""
        try:
            return scan_operator(text, pos, OPERATOR_POSITION, sentinel, table=self.table)
        except ParseError:
            at = skip_whitespace(text, pos)
            if sentinel is CLOSE_PAREN and at == len(text):
                raise ParseError("Unmatched '('", at) from None
            if sentinel is END_EXPRESSION and text.startswith(')', at):
                raise ParseError("Unmatched ')'", at) from None
            raise


def evaluate(text: str, encoding: Union[Encoding, str], verbose: bool = False) -> Value:
    """
    Evaluate an expression (convenience function)

    Args:
        text: Expression
        encoding: Encoding or its name, e.g. 's16'
        verbose: Emit trace lines on the "bincalc.trace" logger

    Returns:
        The resulting Value

    Example:
        >>> format_decimal(evaluate('32767 + 1', 's16'))
        '-32768'
    """
    return Evaluator(EvaluatorConfig(encoding, verbose=verbose)).evaluate(text)


__all__ = ['Evaluator', 'EvaluatorConfig', 'evaluate', 'DEFAULT_MAX_DEPTH']
