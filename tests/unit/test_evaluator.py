"""Tests for the Lox expression evaluator.

Covers:
- Literals and grouping
- Unary operators and truthiness
- Arithmetic, comparison, string concatenation
- Equality without coercion
- Runtime errors and the interpret() driver entry point
"""

from __future__ import annotations

import math

import pytest

from loxcore.core.errors import ErrorReporter, LoxRuntimeError
from loxcore.core.expression_lang import Interpreter, evaluate, is_equal, is_truthy, stringify
from loxcore.core.ir import Binary, Grouping, Literal, Unary
from loxcore.core.lexer import Token, TokenType


def _op(token_type: TokenType, line: int = 1) -> Token:
    return Token(token_type, token_type.value, None, line)


def _lit(value: object) -> Literal:
    return Literal(value=value)


def _binary(left: object, token_type: TokenType, right: object, line: int = 1) -> Binary:
    left_expr = left if isinstance(left, (Literal, Grouping, Unary, Binary)) else _lit(left)
    right_expr = right if isinstance(right, (Literal, Grouping, Unary, Binary)) else _lit(right)
    return Binary(left=left_expr, operator=_op(token_type, line), right=right_expr)


def _unary(token_type: TokenType, right: object, line: int = 1) -> Unary:
    right_expr = right if isinstance(right, (Literal, Grouping, Unary, Binary)) else _lit(right)
    return Unary(operator=_op(token_type, line), right=right_expr)


# ============================================================================
# Literals and grouping
# ============================================================================


class TestLiterals:
    """Literals evaluate to their stored value."""

    @pytest.mark.parametrize("value", [1.5, "text", True, False, None])
    def test_literal(self, value: object) -> None:
        assert evaluate(_lit(value)) == value

    def test_grouping_is_transparent(self) -> None:
        expr = Grouping(expression=Grouping(expression=_lit(3.0)))
        assert evaluate(expr) == 3.0


# ============================================================================
# Unary
# ============================================================================


class TestUnary:
    """Logical and arithmetic negation."""

    def test_bang_nil(self) -> None:
        assert evaluate(_unary(TokenType.BANG, None)) is True

    def test_bang_zero_is_false(self) -> None:
        assert evaluate(_unary(TokenType.BANG, 0.0)) is False

    def test_bang_empty_string_is_false(self) -> None:
        assert evaluate(_unary(TokenType.BANG, "")) is False

    def test_bang_bool(self) -> None:
        assert evaluate(_unary(TokenType.BANG, True)) is False
        assert evaluate(_unary(TokenType.BANG, False)) is True

    def test_double_bang(self) -> None:
        assert evaluate(_unary(TokenType.BANG, _unary(TokenType.BANG, 5.0))) is True

    def test_negate_number(self) -> None:
        assert evaluate(_unary(TokenType.MINUS, 4.0)) == -4.0

    def test_negate_string_fails(self) -> None:
        expr = _unary(TokenType.MINUS, "a", line=7)
        with pytest.raises(LoxRuntimeError, match="Operand must be a number.") as exc_info:
            evaluate(expr)
        assert exc_info.value.token.type == TokenType.MINUS
        assert exc_info.value.token.line == 7

    @pytest.mark.parametrize("value", [None, True])
    def test_negate_non_number_fails(self, value: object) -> None:
        with pytest.raises(LoxRuntimeError):
            evaluate(_unary(TokenType.MINUS, value))


class TestTruthiness:
    """Only nil and false are falsy."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, False), (False, False), (True, True), (0.0, True), ("", True), ("a", True)],
    )
    def test_is_truthy(self, value: object, expected: bool) -> None:
        assert is_truthy(value) is expected


# ============================================================================
# Binary
# ============================================================================


class TestArithmetic:
    """Arithmetic on numbers."""

    def test_precedence_tree(self) -> None:
        # 1 + 2 * 3
        expr = _binary(1, TokenType.PLUS, _binary(2, TokenType.STAR, 3))
        result = evaluate(expr)
        assert result == 7.0
        assert isinstance(result, float)

    def test_subtraction(self) -> None:
        assert evaluate(_binary(10, TokenType.MINUS, 4)) == 6.0

    def test_division(self) -> None:
        assert evaluate(_binary(7, TokenType.SLASH, 2)) == 3.5

    def test_division_by_zero_is_infinite(self) -> None:
        assert evaluate(_binary(1, TokenType.SLASH, 0)) == math.inf
        assert evaluate(_binary(-1, TokenType.SLASH, 0)) == -math.inf
        assert evaluate(_binary(1, TokenType.SLASH, -0.0)) == -math.inf

    def test_zero_over_zero_is_nan(self) -> None:
        assert math.isnan(evaluate(_binary(0, TokenType.SLASH, 0)))

    @pytest.mark.parametrize(
        "token_type", [TokenType.MINUS, TokenType.STAR, TokenType.SLASH]
    )
    def test_non_number_operand_fails(self, token_type: TokenType) -> None:
        with pytest.raises(LoxRuntimeError, match="Operand must be a number.") as exc_info:
            evaluate(_binary(1, token_type, "2"))
        assert exc_info.value.token.type == token_type


class TestPlus:
    """``+`` adds numbers or concatenates strings."""

    def test_string_concatenation(self) -> None:
        assert evaluate(_binary("a", TokenType.PLUS, "b")) == "ab"

    def test_number_addition(self) -> None:
        assert evaluate(_binary(0.5, TokenType.PLUS, 0.25)) == 0.75

    @pytest.mark.parametrize(
        ("left", "right"),
        [("1", 1.0), (1.0, "1"), (None, 1.0), (True, "a"), (None, None)],
    )
    def test_mixed_operands_fail(self, left: object, right: object) -> None:
        with pytest.raises(
            LoxRuntimeError, match="Operands must be two numbers or two strings."
        ) as exc_info:
            evaluate(_binary(left, TokenType.PLUS, right))
        assert exc_info.value.token.type == TokenType.PLUS


class TestComparison:
    """Ordering comparisons require numbers."""

    @pytest.mark.parametrize(
        ("token_type", "left", "right", "expected"),
        [
            (TokenType.GREATER, 2, 1, True),
            (TokenType.GREATER, 1, 1, False),
            (TokenType.GREATER_EQUAL, 1, 1, True),
            (TokenType.LESS, 1, 2, True),
            (TokenType.LESS, 2, 2, False),
            (TokenType.LESS_EQUAL, 2, 2, True),
        ],
    )
    def test_compare(
        self, token_type: TokenType, left: float, right: float, expected: bool
    ) -> None:
        assert evaluate(_binary(left, token_type, right)) is expected

    def test_compare_strings_fails(self) -> None:
        with pytest.raises(LoxRuntimeError, match="Operand must be a number."):
            evaluate(_binary("a", TokenType.LESS, "b"))

    def test_compare_nil_fails(self) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            evaluate(_binary(1, TokenType.GREATER, None, line=3))
        assert exc_info.value.token.line == 3


class TestEquality:
    """Equality works across kinds without coercion."""

    def test_nil_equals_nil(self) -> None:
        assert evaluate(_binary(None, TokenType.EQUAL_EQUAL, None)) is True

    def test_nil_not_equal_false(self) -> None:
        assert evaluate(_binary(None, TokenType.EQUAL_EQUAL, False)) is False

    def test_number_not_equal_string(self) -> None:
        assert evaluate(_binary(1, TokenType.EQUAL_EQUAL, "1")) is False

    def test_bool_not_equal_number(self) -> None:
        assert evaluate(_binary(True, TokenType.EQUAL_EQUAL, 1)) is False
        assert evaluate(_binary(False, TokenType.EQUAL_EQUAL, 0)) is False

    def test_same_content(self) -> None:
        assert evaluate(_binary("ab", TokenType.EQUAL_EQUAL, "ab")) is True
        assert evaluate(_binary(2, TokenType.EQUAL_EQUAL, 2.0)) is True

    def test_bang_equal(self) -> None:
        assert evaluate(_binary(1, TokenType.BANG_EQUAL, 2)) is True
        assert evaluate(_binary(None, TokenType.BANG_EQUAL, None)) is False

    def test_is_equal_helper(self) -> None:
        assert is_equal(None, None)
        assert not is_equal(None, 0.0)
        assert not is_equal(0.0, None)
        assert not is_equal(math.nan, math.nan)


class TestEvaluationOrder:
    """Both operands are evaluated, left first."""

    def test_left_error_reported_first(self) -> None:
        expr = _binary(
            _unary(TokenType.MINUS, "x", line=1),
            TokenType.EQUAL_EQUAL,
            _unary(TokenType.MINUS, "y", line=2),
        )
        with pytest.raises(LoxRuntimeError) as exc_info:
            evaluate(expr)
        assert exc_info.value.token.line == 1

    def test_equality_does_not_short_circuit(self) -> None:
        expr = _binary(None, TokenType.EQUAL_EQUAL, _unary(TokenType.MINUS, "y", line=2))
        with pytest.raises(LoxRuntimeError) as exc_info:
            evaluate(expr)
        assert exc_info.value.token.line == 2

    def test_idempotent(self) -> None:
        expr = _binary(_binary("a", TokenType.PLUS, "b"), TokenType.EQUAL_EQUAL, "ab")
        assert evaluate(expr) is True
        assert evaluate(expr) is True
        assert str(expr) == '(== (+ "a" "b") "ab")'


# ============================================================================
# Driver entry point
# ============================================================================


class TestStringify:
    """Values render the way Lox prints them."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "nil"),
            (True, "true"),
            (False, "false"),
            (7.0, "7"),
            (2.5, "2.5"),
            (-3.0, "-3"),
            ("hello", "hello"),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
            (math.nan, "NaN"),
            (1e21, "1e+21"),
            (1.5e-7, "1.5e-07"),
        ],
    )
    def test_stringify(self, value: object, expected: str) -> None:
        assert stringify(value) == expected


class TestInterpreter:
    """Interpreter.interpret reports instead of raising."""

    def test_interpret_value(self) -> None:
        interpreter = Interpreter()
        assert interpreter.interpret(_binary(1, TokenType.PLUS, 2)) == "3"
        assert not interpreter.reporter.had_runtime_error

    def test_interpret_runtime_error(self) -> None:
        reporter = ErrorReporter()
        interpreter = Interpreter(reporter)
        assert interpreter.interpret(_unary(TokenType.MINUS, "a", line=5)) is None
        assert reporter.had_runtime_error
        error = reporter.runtime_errors[0]
        assert error.message == "Operand must be a number."
        assert error.token.line == 5

    def test_evaluate_raises(self) -> None:
        with pytest.raises(LoxRuntimeError):
            Interpreter().evaluate(_unary(TokenType.MINUS, None))

    def test_error_message_includes_line(self) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            evaluate(_unary(TokenType.MINUS, "a", line=9))
        assert str(exc_info.value) == "[line 9] at '-'\nOperand must be a number."
