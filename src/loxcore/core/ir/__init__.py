"""
Lox Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

from .expressions import (
    BINARY_OPERATORS,
    UNARY_OPERATORS,
    Binary,
    Expr,
    Grouping,
    Literal,
    Unary,
    Value,
    load_expr,
)

__all__ = [
    "BINARY_OPERATORS",
    "UNARY_OPERATORS",
    "Binary",
    "Expr",
    "Grouping",
    "Literal",
    "Unary",
    "Value",
    "load_expr",
]
