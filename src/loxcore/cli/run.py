"""
Scan and evaluate commands.

Exit codes follow sysexits: 65 for malformed input, 70 for runtime errors.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from loxcore.cli.utils import configure_logging
from loxcore.core.errors import ErrorReporter, ManifestError
from loxcore.core.expression_lang.evaluator import Interpreter
from loxcore.core.ir.expressions import load_expr
from loxcore.core.lexer import Token, tokenize
from loxcore.core.manifest import LoxManifest, OutputFormat, resolve_manifest

EXIT_DATA_ERROR = 65
EXIT_SOFTWARE_ERROR = 70

console = Console()


def _load_config(log_level: str | None) -> LoxManifest:
    try:
        manifest = resolve_manifest()
    except ManifestError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    configure_logging(log_level or manifest.logging.level)
    return manifest


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot read {path}: {e}", err=True)
        raise typer.Exit(code=1)


def _print_tokens(tokens: list[Token], output_format: OutputFormat, show_lines: bool) -> None:
    if output_format == OutputFormat.TABLE:
        table = Table(title="Tokens")
        if show_lines:
            table.add_column("Line", justify="right")
        table.add_column("Type")
        table.add_column("Lexeme")
        table.add_column("Literal")
        for token in tokens:
            row = [token.type.name, token.lexeme, "" if token.literal is None else repr(token.literal)]
            if show_lines:
                row.insert(0, str(token.line))
            table.add_row(*row)
        console.print(table)
        return

    for token in tokens:
        if show_lines:
            typer.echo(f"{token.line:4d} {token}")
        else:
            typer.echo(str(token))


def scan_command(
    file: Annotated[Path, typer.Argument(help="Lox source file")],
    output_format: Annotated[
        OutputFormat | None, typer.Option("--format", "-f", help="Token output format")
    ] = None,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Logging level (overrides config)")
    ] = None,
) -> None:
    """Tokenize a source file and print its tokens."""
    manifest = _load_config(log_level)
    source = _read_source(file)

    reporter = ErrorReporter()
    tokens = tokenize(source, reporter)
    _print_tokens(tokens, output_format or manifest.output.format, manifest.scanner.show_lines)

    for diagnostic in reporter.diagnostics:
        typer.echo(diagnostic.format(), err=True)
    if reporter.had_error:
        raise typer.Exit(code=EXIT_DATA_ERROR)


def eval_command(
    file: Annotated[Path, typer.Argument(help="JSON expression tree")],
    print_ast: Annotated[
        bool, typer.Option("--print-ast", help="Print the tree before its value")
    ] = False,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Logging level (overrides config)")
    ] = None,
) -> None:
    """Evaluate an expression tree stored as JSON."""
    _load_config(log_level)
    document = _read_source(file)

    try:
        expr = load_expr(document)
    except ValidationError as e:
        typer.echo(f"Error: invalid expression tree in {file}:\n{e}", err=True)
        raise typer.Exit(code=EXIT_DATA_ERROR)

    if print_ast:
        typer.echo(str(expr))

    reporter = ErrorReporter()
    result = Interpreter(reporter).interpret(expr)
    if result is None:
        for error in reporter.runtime_errors:
            typer.echo(f"{error.message}\n[line {error.token.line}]", err=True)
        raise typer.Exit(code=EXIT_SOFTWARE_ERROR)

    typer.echo(result)
