"""
Calculator CLI commands.

- eval: evaluate one expression
- keys: replay keypad input through a Calculator session
- repl: line-oriented calculator
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.markup import escape

from calcpad.cli.utils import console, err_console, get_config
from calcpad.core.dispatch import Dispatcher
from calcpad.core.errors import ExpressionSyntaxError, MathError
from calcpad.core.expression_lang import calculate
from calcpad.core.manifest import CalcpadConfig
from calcpad.core.session import Calculator

logger = logging.getLogger(__name__)

# Single-character stand-ins for keys that have no keypad glyph
REPLAY_KEYS: dict[str, str] = {
    "C": "Escape",
    "<": "Backspace",
}

QUIT_WORDS = frozenset({"quit", "exit"})


def eval_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Arithmetic expression, e.g. '2+3*4'"),
    precision: int | None = typer.Option(
        None, "--precision", "-p", min=0, max=15, help="Decimal places for non-integral results"
    ),
) -> None:
    """Evaluate an arithmetic expression and print the result."""
    config = get_config(ctx)
    digits = config.display.precision if precision is None else precision

    try:
        result = calculate(expression, digits)
    except ExpressionSyntaxError as e:
        err_console.print(f"[red]Syntax error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e
    except MathError as e:
        err_console.print(f"[red]Math error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e

    console.print(result, highlight=False)


def keys_command(
    ctx: typer.Context,
    keys: str = typer.Argument(
        ..., help="Keypad characters; '=' calculates, 'C' clears, '<' deletes"
    ),
    interval_ms: int = typer.Option(
        10, "--interval-ms", "-i", min=0, help="Delay between simulated key presses"
    ),
) -> None:
    """Replay keypad input; display updates go through the configured dispatcher."""
    config = get_config(ctx)
    display = asyncio.run(replay_keys(keys, config, interval_ms))
    logger.debug("Final display after replay: %s", display)


async def replay_keys(keys: str, config: CalcpadConfig, interval_ms: int) -> str:
    """Feed ``keys`` into a Calculator, rendering through a Dispatcher.

    Under the suppress policy a burst renders its first display, so the
    final display is printed once more if the last render left it stale.
    """
    rendered: list[str] = []

    def show(display: str) -> None:
        rendered.append(display)
        console.print(display, highlight=False)

    render = Dispatcher(show, config.dispatch.delay_ms, config.dispatch.policy)
    calc = Calculator(
        renderer=render.invoke,
        precision=config.display.precision,
        error_text=config.display.error_text,
    )

    for key in keys:
        if not calc.handle_key(REPLAY_KEYS.get(key, key)):
            logger.warning("Ignoring unknown key %r", key)
        await asyncio.sleep(interval_ms / 1000)

    # Let the last scheduled render fire
    while render.pending:
        await asyncio.sleep(render.delay_ms / 1000)

    if not rendered or rendered[-1] != calc.display:
        show(calc.display)
    return calc.display


def repl_command(ctx: typer.Context) -> None:
    """Interactive calculator. Empty line, 'quit' or EOF exits."""
    config = get_config(ctx)
    calc = Calculator(
        precision=config.display.precision,
        error_text=config.display.error_text,
    )

    while True:
        try:
            line = console.input("[bold]calc>[/bold] ")
        except EOFError:
            break

        line = line.strip()
        if not line or line.lower() in QUIT_WORDS:
            break

        display = calc.enter(line)
        style = "red" if display == calc.error_text else "green"
        console.print(display, style=style, highlight=False)
