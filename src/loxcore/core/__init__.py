"""
Core of the Lox front end: scanner, expression AST and evaluator.
"""
