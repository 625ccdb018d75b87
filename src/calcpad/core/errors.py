"""
Error types for calcpad expression handling, configuration and state.
"""


class CalcpadError(Exception):
    """Base exception for all calcpad errors."""

    def __init__(self, message: str, pos: int | None = None):
        self.message = message
        self.pos = pos
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the source position if available."""
        if self.pos is not None:
            return f"{self.message} (at position {self.pos})"
        return self.message


class ExpressionSyntaxError(CalcpadError):
    """
    Raised when expression text does not match the arithmetic grammar.

    Examples:
    - Unknown character
    - Malformed number (``2..5``)
    - Unbalanced parentheses
    - Empty input or dangling operator
    """

    pass


class MathError(CalcpadError):
    """
    Raised when a well-formed expression cannot produce a finite number.

    Examples:
    - Division or modulo by zero
    - Overflow to infinity
    """

    pass


class ConfigError(CalcpadError):
    """Raised when calcpad.toml cannot be read or holds invalid values."""

    pass


class StateError(CalcpadError):
    """Raised when the persisted state file cannot be read or written."""

    pass
