"""
Expression evaluator for the calcpad arithmetic language.

Pure evaluation over the closed AST, with no I/O and no side effects.
Does NOT use Python's eval(); input text is never executed as code.
"""

from __future__ import annotations

import logging
import math

from calcpad.core.errors import MathError
from calcpad.core.expression_lang.parser import parse_expr
from calcpad.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Literal,
    UnaryExpr,
    UnaryOp,
)

logger = logging.getLogger("calcpad.core.expression_lang")


def evaluate(text: str) -> float:
    """Parse and evaluate an arithmetic expression.

    Args:
        text: Expression text using digits, ``.``, ``+ - * / %`` and parentheses.

    Returns:
        The result as an IEEE double.

    Raises:
        ExpressionSyntaxError: If the text is not a valid expression.
        MathError: On division/modulo by zero or a non-finite result.
    """
    expr = parse_expr(text)
    result = interpret(expr)
    logger.debug("Evaluated %r -> %r", text, result)
    return result


def interpret(expr: Expr) -> float:
    """Post-order walk of an expression tree.

    Walks with an explicit stack, so operator chains of any length
    stay off the Python call stack.
    """
    values: list[float] = []
    stack: list[tuple[Expr, bool]] = [(expr, False)]

    while stack:
        node, children_done = stack.pop()

        if isinstance(node, Literal):
            values.append(node.value)
        elif isinstance(node, UnaryExpr):
            if children_done:
                values.append(_apply_unary(node.op, values.pop()))
            else:
                stack.append((node, True))
                stack.append((node.operand, False))
        elif isinstance(node, BinaryExpr):
            if children_done:
                right = values.pop()
                left = values.pop()
                values.append(_apply_binary(node.op, left, right))
            else:
                # Left operand is evaluated first
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
        else:
            raise TypeError(f"Unknown expression type: {type(node).__name__}")

    return values.pop()


def _apply_unary(op: UnaryOp, value: float) -> float:
    if op == UnaryOp.NEG:
        return -value
    raise TypeError(f"Unknown unary op: {op}")


def _apply_binary(op: BinaryOp, left: float, right: float) -> float:
    """Apply a binary operator, rejecting non-finite results."""
    try:
        result = _apply(op, left, right)
    except OverflowError as e:
        raise MathError("Result is not finite") from e

    if not math.isfinite(result):
        raise MathError("Result is not finite")
    return result


def _apply(op: BinaryOp, left: float, right: float) -> float:
    if op == BinaryOp.ADD:
        result = left + right
    elif op == BinaryOp.SUB:
        result = left - right
    elif op == BinaryOp.MUL:
        result = left * right
    elif op == BinaryOp.DIV:
        if right == 0:
            raise MathError("Division by zero")
        result = left / right
    elif op == BinaryOp.MOD:
        if right == 0:
            raise MathError("Modulo by zero")
        # Sign follows the dividend
        result = math.fmod(left, right)
    else:
        raise TypeError(f"Unknown binary op: {op}")
    return result
