"""
Pytest configuration and fixtures for bincalc tests.
"""

import logging
import os
import sys

import pytest

# Add grandparent directory to path for imports (to find bincalc package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from bincalc import Evaluator, EvaluatorConfig, format_decimal, format_hex


@pytest.fixture
def make_evaluator():
    """Build an evaluator for an encoding name."""
    def _make(mode, **kwargs):
        return Evaluator(EvaluatorConfig(mode, **kwargs))
    return _make


@pytest.fixture
def calc(make_evaluator):
    """
    Evaluate an expression and return (decimal, hex) strings.

    Usage: calc('s16', '32767 + 1') -> ('-32768', 'x8000')
    """
    def _calc(mode, text):
        value = make_evaluator(mode).evaluate(text)
        return format_decimal(value), format_hex(value)
    return _calc


@pytest.fixture(autouse=True)
def reset_trace_logger():
    """Undo handlers the CLI attaches to the trace logger."""
    trace = logging.getLogger("bincalc.trace")
    saved = (list(trace.handlers), trace.propagate, trace.level)
    yield
    trace.handlers[:] = saved[0]
    trace.propagate = saved[1]
    trace.setLevel(saved[2])
