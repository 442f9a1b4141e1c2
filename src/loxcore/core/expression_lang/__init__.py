"""
Lox expression evaluation.

Usage:
    from loxcore.core.expression_lang import evaluate
    from loxcore.core.ir import load_expr

    expr = load_expr(document)
    result = evaluate(expr)
"""

from loxcore.core.expression_lang.evaluator import (
    Interpreter,
    evaluate,
    is_equal,
    is_truthy,
    stringify,
)

__all__ = ["Interpreter", "evaluate", "is_equal", "is_truthy", "stringify"]
