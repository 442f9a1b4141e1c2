"""
loxcore CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import platform

import typer

from loxcore import __version__


def get_version() -> str:
    """Get loxcore version from package metadata."""
    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"loxcore version {get_version()}")
        typer.echo(
            f"Python: {platform.python_implementation()} {platform.python_version()}"
        )
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Send loxcore log records at or above ``level`` to stderr."""
    logging.basicConfig(format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    logging.getLogger("loxcore").setLevel(getattr(logging, level.upper(), logging.WARNING))
