"""
Expression AST for Lox.

A closed set of frozen node types built by a parser and read by the
evaluator:

- Literal: number, string, boolean or nil
- Grouping: a parenthesised sub-expression
- Unary: ``!x`` and ``-x``
- Binary: comparison, arithmetic and equality operators

Each node carries a ``kind`` tag so a whole tree can be loaded from JSON.
"""

from __future__ import annotations

import typing
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from loxcore.core.lexer import Token, TokenType

UNARY_OPERATORS = frozenset({TokenType.BANG, TokenType.MINUS})

BINARY_OPERATORS = frozenset(
    {
        # Comparison
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
        # Arithmetic
        TokenType.MINUS,
        TokenType.PLUS,
        TokenType.SLASH,
        TokenType.STAR,
        # Equality
        TokenType.BANG_EQUAL,
        TokenType.EQUAL_EQUAL,
    }
)

Value = bool | float | str | None


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A literal value: number, string, boolean, or None (nil)."""

    kind: typing.Literal["literal"] = "literal"
    value: bool | float | str | None = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    @field_validator("value", mode="before")
    @classmethod
    def _numbers_are_floats(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            try:
                return float(v)
            except OverflowError as e:
                raise ValueError("number literal is out of range for a double") from e
        return v

    def __str__(self) -> str:
        if self.value is None:
            return "nil"
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return str(self.value)


class Grouping(BaseModel):
    """Parenthesised expression: ( expression )."""

    kind: typing.Literal["grouping"] = "grouping"
    expression: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"(group {self.expression})"


class Unary(BaseModel):
    """Unary operation: operator right."""

    kind: typing.Literal["unary"] = "unary"
    operator: Token
    right: Expr

    model_config = ConfigDict(frozen=True)

    @field_validator("operator")
    @classmethod
    def _check_operator(cls, v: Token) -> Token:
        if v.type not in UNARY_OPERATORS:
            raise ValueError(f"{v.type.name} is not a unary operator")
        return v

    def __str__(self) -> str:
        return f"({self.operator.lexeme} {self.right})"


class Binary(BaseModel):
    """Binary operation: left operator right."""

    kind: typing.Literal["binary"] = "binary"
    left: Expr
    operator: Token
    right: Expr

    model_config = ConfigDict(frozen=True)

    @field_validator("operator")
    @classmethod
    def _check_operator(cls, v: Token) -> Token:
        if v.type not in BINARY_OPERATORS:
            raise ValueError(f"{v.type.name} is not a binary operator")
        return v

    def __str__(self) -> str:
        return f"({self.operator.lexeme} {self.left} {self.right})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Annotated[Literal | Grouping | Unary | Binary, Field(discriminator="kind")]

# Rebuild models for recursive forward references
Grouping.model_rebuild()
Unary.model_rebuild()
Binary.model_rebuild()

_EXPR_ADAPTER: TypeAdapter[Expr] = TypeAdapter(Expr)


def load_expr(data: str | bytes) -> Literal | Grouping | Unary | Binary:
    """
    Build an expression tree from its JSON form.

    Example:
        {"kind": "unary",
         "operator": {"type": "-", "lexeme": "-", "literal": null, "line": 1},
         "right": {"kind": "literal", "value": 3}}

    Raises:
        pydantic.ValidationError: If the document is not a well-formed tree.
    """
    return _EXPR_ADAPTER.validate_json(data)
