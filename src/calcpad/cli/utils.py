"""
calcpad CLI utilities.

Shared helpers used across CLI modules.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from calcpad._version import get_version
from calcpad.core.errors import ConfigError
from calcpad.core.manifest import CalcpadConfig, load_config

console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        console.print(f"calcpad {get_version()}")
        console.print(
            f"Python {platform.python_version()} ({platform.python_implementation()})",
            style="dim",
        )
        raise typer.Exit()


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from LOG_LEVEL, or DEBUG when verbose."""
    if verbose:
        level = logging.DEBUG
    else:
        log_level = os.getenv("LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, log_level, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("calcpad").setLevel(level)


def get_config(ctx: typer.Context) -> CalcpadConfig:
    """Config loaded by the main callback, or defaults when run standalone."""
    if isinstance(ctx.obj, CalcpadConfig):
        return ctx.obj
    return load_or_exit(None)


def load_or_exit(path: str | None) -> CalcpadConfig:
    """Load configuration; exit with code 1 on an invalid file."""
    try:
        return load_config(Path(path) if path else None)
    except ConfigError as e:
        err_console.print(f"[red]Config error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e
