"""
calcpad CLI package.

- calc.py: eval, keys and repl commands
- theme.py: theme preference commands
- utils.py: shared console, logging and config helpers
"""

from __future__ import annotations

import sys

import typer

from calcpad.cli.calc import eval_command, keys_command, repl_command
from calcpad.cli.theme import theme_app
from calcpad.cli.utils import configure_logging, load_or_exit, version_callback

app = typer.Typer(
    help="calcpad – keypad arithmetic without eval()",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to calcpad.toml (default: ./calcpad.toml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """calcpad CLI main callback for global options."""
    configure_logging(verbose)
    ctx.obj = load_or_exit(config)


app.command(name="eval")(eval_command)
app.command(name="keys")(keys_command)
app.command(name="repl")(repl_command)
app.add_typer(theme_app, name="theme")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main"]


if __name__ == "__main__":
    main(sys.argv[1:])
