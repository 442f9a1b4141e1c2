"""
loxcore CLI package.

- run.py: scan and eval commands
- utils.py: version reporting and logging setup
"""

import typer

from loxcore.cli.run import eval_command, scan_command
from loxcore.cli.utils import get_version, version_callback

app = typer.Typer(
    help="loxcore - Lox scanner and expression evaluator",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """loxcore CLI main callback for global options."""
    pass


app.command(name="scan")(scan_command)
app.command(name="eval")(eval_command)


def main() -> None:
    app()


__all__ = ["app", "main", "get_version", "version_callback"]
