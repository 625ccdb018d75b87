"""
Display formatting for evaluation results.
"""

from __future__ import annotations

from calcpad.core.expression_lang.evaluator import evaluate

DEFAULT_PRECISION = 8


def format_result(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Render a result for display.

    Integral values have no fractional part; other values are rounded to
    ``precision`` decimals with trailing zeros trimmed.

    Examples:
        >>> format_result(14.0)
        '14'
        >>> format_result(0.1 + 0.2)
        '0.3'
        >>> format_result(1 / 3)
        '0.33333333'
    """
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))

    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def calculate(text: str, precision: int = DEFAULT_PRECISION) -> str:
    """Evaluate ``text`` and return the formatted result."""
    return format_result(evaluate(text), precision)
