"""
loxcore - scanner and expression evaluator for the Lox language.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core.errors import ErrorReporter, LoxError, LoxRuntimeError

try:
    __version__ = _metadata_version("loxcore")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ErrorReporter",
    "LoxError",
    "LoxRuntimeError",
]
