"""
calcpad arithmetic expression language.

Tokenizer, parser, evaluator, and result formatting for keypad-style
arithmetic. Text is never executed as code.

Usage:
    from calcpad.core.expression_lang import calculate, evaluate

    evaluate("2+3*4")       # 14.0
    calculate("(2+3)*4")    # "20"
"""

from calcpad.core.expression_lang.evaluator import evaluate, interpret
from calcpad.core.expression_lang.formatting import calculate, format_result
from calcpad.core.expression_lang.parser import parse_expr

__all__ = ["calculate", "evaluate", "format_result", "interpret", "parse_expr"]
