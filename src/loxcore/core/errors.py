"""
Error types and the diagnostic sink for the Lox front end.

Two kinds of failure exist:

- Lexical diagnostics, reported to an ``ErrorReporter`` while scanning. They
  never abort the scan.
- ``LoxRuntimeError``, raised by the evaluator when an operand fails a type
  check. It aborts the current evaluation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loxcore.core.lexer import Token

logger = logging.getLogger(__name__)


class LoxError(Exception):
    """Base exception for all loxcore errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class LoxRuntimeError(LoxError):
    """
    Raised when an operator is applied to operands of the wrong type.

    Examples:
    - Unary minus on a string
    - Comparison between a number and nil
    - ``+`` with one number and one string
    """

    def __init__(self, token: Token, message: str):
        self.token = token
        super().__init__(message, ErrorContext(line=token.line, where=token.lexeme))


class ManifestError(LoxError):
    """Raised when a ``loxcore.toml`` file cannot be read."""

    pass


@dataclass
class ErrorContext:
    """
    Source location for an error.

    Attributes:
        line: Line number (1-indexed)
        where: Lexeme the error is attributed to, if any
    """

    line: int
    where: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "[line 3] at '+'"
        """
        location = f"[line {self.line}]"
        if self.where:
            location += f" at '{self.where}'"
        return location


@dataclass(frozen=True)
class Diagnostic:
    """A single reported problem, attributed to a source line."""

    line: int
    where: str
    message: str

    def format(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"


class ErrorReporter:
    """
    Collects diagnostics from the scanner and runtime errors from the
    evaluator.

    The reporter is the only stateful piece shared between a driver and the
    core components. Create one per run (or call ``reset()``) rather than
    sharing it across threads.
    """

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []
        self.runtime_errors: list[LoxRuntimeError] = []

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)

    @property
    def had_runtime_error(self) -> bool:
        return bool(self.runtime_errors)

    def error(self, line: int, message: str) -> None:
        self.report(line, "", message)

    def report(self, line: int, where: str, message: str) -> None:
        diagnostic = Diagnostic(line=line, where=where, message=message)
        self.diagnostics.append(diagnostic)
        logger.warning("%s", diagnostic.format())

    def runtime_error(self, error: LoxRuntimeError) -> None:
        self.runtime_errors.append(error)
        logger.warning("Runtime error at line %d: %s", error.token.line, error.message)

    def reset(self) -> None:
        self.diagnostics.clear()
        self.runtime_errors.clear()
