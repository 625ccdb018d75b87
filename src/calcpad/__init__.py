"""
calcpad - keypad arithmetic without eval().

A safe arithmetic expression evaluator, a debounced dispatcher for input
storms, and a keypad calculator session built on both.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.dispatch import Dispatcher, DispatchPolicy
from .core.errors import CalcpadError, ExpressionSyntaxError, MathError
from .core.expression_lang import calculate, evaluate, format_result
from .core.session import Calculator

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "evaluate",
    "calculate",
    "format_result",
    "Dispatcher",
    "DispatchPolicy",
    "Calculator",
    "CalcpadError",
    "ExpressionSyntaxError",
    "MathError",
]
