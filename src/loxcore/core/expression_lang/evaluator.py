"""
Expression evaluator for Lox.

Tree-walking evaluation of the closed expression AST. Values are plain
Python objects: ``float`` for numbers, ``str``, ``bool`` and ``None`` for
nil. Evaluation has no side effects, so evaluating the same tree twice
gives the same result.
"""

from __future__ import annotations

import math

from loxcore.core.errors import ErrorReporter, LoxRuntimeError
from loxcore.core.ir.expressions import Binary, Expr, Grouping, Literal, Unary, Value
from loxcore.core.lexer import Token, TokenType


def evaluate(expr: Expr) -> Value:
    """Evaluate an expression tree to a runtime value.

    Args:
        expr: Expression AST.

    Returns:
        The computed value.

    Raises:
        LoxRuntimeError: If an operand has the wrong type for its operator.
    """
    return _interpret(expr)


def _interpret(expr: Expr) -> Value:
    """Dispatch evaluation to the appropriate handler."""
    match expr:
        case Literal(value=value):
            return value
        case Grouping(expression=inner):
            return _interpret(inner)
        case Unary():
            return _interpret_unary(expr)
        case Binary():
            return _interpret_binary(expr)
    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_unary(expr: Unary) -> Value:
    right = _interpret(expr.right)

    match expr.operator.type:
        case TokenType.BANG:
            return not is_truthy(right)
        case TokenType.MINUS:
            _check_number_operand(expr.operator, right)
            return -right
    raise LoxRuntimeError(expr.operator, f"Unknown unary operator: {expr.operator.lexeme}")


def _interpret_binary(expr: Binary) -> Value:
    """Evaluate a binary expression.

    Both operands are always evaluated, left first.
    """
    left = _interpret(expr.left)
    right = _interpret(expr.right)
    op = expr.operator

    match op.type:
        case TokenType.BANG_EQUAL:
            return not is_equal(left, right)
        case TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        case TokenType.PLUS:
            return _add(op, left, right)

    _check_number_operand(op, left)
    _check_number_operand(op, right)

    match op.type:
        case TokenType.GREATER:
            return left > right
        case TokenType.GREATER_EQUAL:
            return left >= right
        case TokenType.LESS:
            return left < right
        case TokenType.LESS_EQUAL:
            return left <= right
        case TokenType.MINUS:
            return left - right
        case TokenType.STAR:
            return left * right
        case TokenType.SLASH:
            return _divide(left, right)
    raise LoxRuntimeError(op, f"Unknown binary operator: {op.lexeme}")


def _add(op: Token, left: Value, right: Value) -> Value:
    """Numeric addition or string concatenation; anything else is an error."""
    if isinstance(left, float) and isinstance(right, float):
        return left + right
    if isinstance(left, str) and isinstance(right, str):
        return left + right
    raise LoxRuntimeError(op, "Operands must be two numbers or two strings.")


def _divide(left: float, right: float) -> float:
    """IEEE-754 division: a zero divisor gives an infinity or NaN."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _check_number_operand(operator: Token, operand: Value) -> None:
    if isinstance(operand, float):
        return
    raise LoxRuntimeError(operator, "Operand must be a number.")


def is_truthy(value: Value) -> bool:
    """Only nil and false are falsy; 0 and "" are truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Value, b: Value) -> bool:
    """Equality without cross-type coercion (``1 == "1"`` and ``1 == true`` are false)."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return type(a) is type(b) and a == b


def stringify(value: Value) -> str:
    """Render a runtime value the way Lox prints it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        text = repr(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return value


class Interpreter:
    """
    Evaluates expressions and routes runtime errors to a reporter.

    ``evaluate`` raises; ``interpret`` is the driver entry point that
    reports the error and returns None instead.
    """

    def __init__(self, reporter: ErrorReporter | None = None):
        self.reporter = reporter if reporter is not None else ErrorReporter()

    def evaluate(self, expr: Expr) -> Value:
        return evaluate(expr)

    def interpret(self, expr: Expr) -> str | None:
        """Evaluate ``expr`` and return its printed form, or None on a runtime error."""
        try:
            value = evaluate(expr)
        except LoxRuntimeError as e:
            self.reporter.runtime_error(e)
            return None
        return stringify(value)
