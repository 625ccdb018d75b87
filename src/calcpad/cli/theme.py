"""
Theme preference CLI commands.
"""

from __future__ import annotations

import typer
from rich.markup import escape

from calcpad.cli.utils import console, err_console, get_config
from calcpad.core.errors import StateError
from calcpad.core.preferences import ThemeStore, resolve_theme, toggle_theme

theme_app = typer.Typer(help="Show or toggle the saved light/dark theme", no_args_is_help=True)


@theme_app.command("show")
def theme_show(ctx: typer.Context) -> None:
    """Print the active theme (saved, or the configured system default)."""
    config = get_config(ctx)
    store = ThemeStore(config.theme.state_file)
    try:
        theme = resolve_theme(store, config.theme.system)
    except StateError as e:
        err_console.print(f"[red]State error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e
    console.print(theme.value, highlight=False)


@theme_app.command("toggle")
def theme_toggle(ctx: typer.Context) -> None:
    """Flip between light and dark and save the choice."""
    config = get_config(ctx)
    store = ThemeStore(config.theme.state_file)
    try:
        theme = toggle_theme(store, config.theme.system)
    except StateError as e:
        err_console.print(f"[red]State error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e
    console.print(theme.value, highlight=False)
