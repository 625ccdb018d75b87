"""Core calcpad functionality: expression language, dispatch, session, preferences, config."""

from . import ir
from .dispatch import Dispatcher, DispatchPolicy, debounce, suppress
from .errors import (
    CalcpadError,
    ConfigError,
    ExpressionSyntaxError,
    MathError,
    StateError,
)
from .expression_lang import calculate, evaluate, format_result, parse_expr
from .manifest import CalcpadConfig, load_config
from .preferences import Theme, ThemeStore, resolve_theme, toggle_theme
from .session import Calculator

__all__ = [
    "ir",
    "CalcpadError",
    "ExpressionSyntaxError",
    "MathError",
    "ConfigError",
    "StateError",
    "evaluate",
    "calculate",
    "format_result",
    "parse_expr",
    "Dispatcher",
    "DispatchPolicy",
    "debounce",
    "suppress",
    "Calculator",
    "Theme",
    "ThemeStore",
    "resolve_theme",
    "toggle_theme",
    "CalcpadConfig",
    "load_config",
]
