"""
Keypad calculator session.

Owns the expression being typed, the last result, and keypad validation.
Rendering is delegated to a ``renderer`` callable that receives the
display text after every change; pass a Dispatcher to coalesce renders.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from calcpad.core.errors import ExpressionSyntaxError, MathError
from calcpad.core.expression_lang import formatting
from calcpad.core.expression_lang.formatting import DEFAULT_PRECISION

logger = logging.getLogger(__name__)

OPERATORS = "+-*/%"
DIGITS = frozenset("0123456789")
KEYPAD_CHARS = DIGITS | frozenset(".()" + OPERATORS)

CALCULATE = "="
ALL_CLEAR = "AC"

_KEY_ALIASES: dict[str, str] = {
    "Enter": CALCULATE,
    "Escape": ALL_CLEAR,
}


class Calculator:
    """Stateful keypad calculator."""

    def __init__(
        self,
        renderer: Callable[[str], Any] | None = None,
        precision: int = DEFAULT_PRECISION,
        error_text: str = "Error",
    ) -> None:
        self.renderer = renderer
        self.precision = precision
        self.error_text = error_text
        self.expression = ""
        self.last_result = ""
        self.is_new_calculation = True

    @property
    def display(self) -> str:
        return self.expression or "0"

    # -- Input handling --

    def handle_key(self, key: str) -> bool:
        """Map a keyboard key to a keypad action.

        Returns:
            True if the key was recognised, False if it was ignored.
        """
        if key == "Backspace":
            self.delete_last_char()
            return True
        value = _KEY_ALIASES.get(key, key)
        if value in (CALCULATE, ALL_CLEAR) or value in KEYPAD_CHARS:
            self.handle_input(value)
            return True
        return False

    def handle_input(self, value: str) -> None:
        """Process one keypad value (digit, operator, paren, '=' or 'AC')."""
        if self.is_new_calculation and (value in DIGITS or self.expression == self.error_text):
            self.expression = ""
            self.is_new_calculation = False

        if value == CALCULATE:
            self.calculate()
        elif value == ALL_CLEAR:
            self.clear()
        elif self.is_valid_input(value):
            self.expression += value
            self.is_new_calculation = False

        self.render()

    def is_valid_input(self, value: str) -> bool:
        if value not in KEYPAD_CHARS:
            return False

        last_char = self.expression[-1:]

        # No two operators in a row
        if value in OPERATORS and last_char and last_char in OPERATORS:
            return False

        current = self.current_number()

        # One decimal point per number
        if value == "." and "." in current:
            return False

        # No leading "00"
        if value == "0" and current == "0":
            return False

        return True

    def current_number(self) -> str:
        """The digits typed after the last operator."""
        last = ""
        for c in self.expression:
            last = "" if c in OPERATORS else last + c
        return last

    def delete_last_char(self) -> None:
        self.expression = self.expression[:-1]
        self.render()

    def clear(self) -> None:
        self.expression = ""
        self.last_result = ""
        self.is_new_calculation = True

    # -- Evaluation --

    def calculate(self) -> None:
        """Evaluate the current expression and show the result or the error text."""
        if not self.expression:
            return

        try:
            result = formatting.calculate(self.expression, self.precision)
        except (ExpressionSyntaxError, MathError) as e:
            logger.warning("Calculator error for %r: %s", self.expression, e)
            self.expression = self.error_text
            self.is_new_calculation = True
            return

        self.last_result = result
        self.expression = result
        self.is_new_calculation = True

    def enter(self, line: str) -> str:
        """Replace the expression with a typed line, calculate, and return the display."""
        self.expression = line.strip()
        self.calculate()
        self.render()
        return self.display

    def render(self) -> None:
        if self.renderer is not None:
            self.renderer(self.display)
