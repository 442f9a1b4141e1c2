"""
Scanner for Lox source text.

Converts raw source into a flat list of tokens with line tracking.
Line comments (``//``) and nested block comments (``/* ... */``) are
discarded. Problems such as stray characters are reported to an
``ErrorReporter`` and scanning carries on with the next character.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from .errors import ErrorReporter

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types in Lox."""

    # Single-character tokens
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"

    # One or two character tokens
    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Keywords
    AND = "and"
    CLASS = "class"
    ELSE = "else"
    FALSE = "false"
    FUN = "fun"
    FOR = "for"
    IF = "if"
    NIL = "nil"
    OR = "or"
    PRINT = "print"
    RETURN = "return"
    SUPER = "super"
    THIS = "this"
    TRUE = "true"
    VAR = "var"
    WHILE = "while"

    EOF = "EOF"


KEYWORDS = {
    "and",
    "class",
    "else",
    "false",
    "for",
    "fun",
    "if",
    "nil",
    "or",
    "print",
    "return",
    "super",
    "this",
    "true",
    "var",
    "while",
}

_SINGLE_CHAR = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# Narrow kind, wide kind when followed by "="
_ONE_OR_TWO_CHAR = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

# A trailing "." without a digit after it is left for the next token
_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]+)?")
_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")


@dataclass(frozen=True)
class Token:
    """
    A single token of Lox source.

    Attributes:
        type: Type of token
        lexeme: Exact source text the token was made from
        literal: Decoded value for NUMBER (float) and STRING (str) tokens
        line: Line number where the lexeme starts (1-indexed)
    """

    type: TokenType
    lexeme: str
    literal: float | str | None
    line: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.literal!r}, line={self.line})"

    def __str__(self) -> str:
        literal = "null" if self.literal is None else self.literal
        return f"{self.type.name} {self.lexeme} {literal}"


class Scanner:
    """
    Scanner for Lox source.

    One instance scans one source string; the cursor state lives on the
    instance and is never shared.
    """

    def __init__(self, source: str, reporter: ErrorReporter | None = None):
        """
        Initialize scanner.

        Args:
            source: Source text to tokenize
            reporter: Sink for lexical diagnostics (a private one if omitted)
        """
        self.source = source
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.tokens: list[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1
        self.token_line = 1

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        """Consume the current character, counting newlines."""
        ch = self.source[self.current]
        self.current += 1
        if ch == "\n":
            self.line += 1
        return ch

    def peek(self) -> str | None:
        """Get current character or None if at end."""
        if self.is_at_end():
            return None
        return self.source[self.current]

    def match(self, expected: str) -> bool:
        """Consume the current character only if it is ``expected``."""
        if self.peek() != expected:
            return False
        self.current += 1
        return True

    def add_token(self, token_type: TokenType, literal: float | str | None = None) -> None:
        lexeme = self.source[self.start : self.current]
        self.tokens.append(Token(token_type, lexeme, literal, self.token_line))

    def skip_line_comment(self) -> None:
        """Skip up to, but not including, the next newline."""
        while self.peek() not in (None, "\n"):
            self.advance()

    def skip_block_comment(self) -> None:
        """
        Skip a block comment whose opening ``/*`` was already consumed.

        Comments nest. ``/*`` and ``*/`` are each consumed as a pair, so two
        markers never share a character.
        """
        depth = 1
        while depth > 0:
            if self.is_at_end():
                self.reporter.error(self.token_line, "Unterminated multiline comment.")
                return
            ch = self.advance()
            if ch == "/" and self.match("*"):
                depth += 1
            elif ch == "*" and self.match("/"):
                depth -= 1

    def read_string(self) -> None:
        """Read a string literal; the opening quote was already consumed."""
        while self.peek() not in (None, '"'):
            self.advance()

        if self.is_at_end():
            self.reporter.error(self.token_line, "Unterminated string.")
            return

        self.advance()  # closing quote

        # No escape sequences: the literal is the raw text between the quotes
        self.add_token(TokenType.STRING, self.source[self.start + 1 : self.current - 1])

    def read_number(self) -> None:
        m = _NUMBER_RE.match(self.source, self.start)
        assert m is not None
        self.current = m.end()
        self.add_token(TokenType.NUMBER, float(m.group(0)))

    def read_identifier(self) -> None:
        """Read an identifier or keyword."""
        m = _IDENT_RE.match(self.source, self.start)
        assert m is not None
        self.current = m.end()
        word = m.group(0)
        if word in KEYWORDS:
            self.add_token(TokenType(word))
        else:
            self.add_token(TokenType.IDENTIFIER)

    def scan_token(self) -> None:
        ch = self.advance()

        if ch in " \t\r\n":
            return

        if ch in _SINGLE_CHAR:
            self.add_token(_SINGLE_CHAR[ch])

        elif ch in _ONE_OR_TWO_CHAR:
            narrow, wide = _ONE_OR_TWO_CHAR[ch]
            self.add_token(wide if self.match("=") else narrow)

        elif ch == "/":
            if self.match("/"):
                self.skip_line_comment()
            elif self.match("*"):
                self.skip_block_comment()
            else:
                self.add_token(TokenType.SLASH)

        elif ch == '"':
            self.read_string()

        elif "0" <= ch <= "9":
            self.read_number()

        elif _IDENT_RE.match(ch):
            self.read_identifier()

        else:
            self.reporter.error(self.token_line, f"Unexpected character: {ch}")

    def scan_tokens(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with a single EOF token. Malformed lexemes
            are reported and skipped, so a list is always returned.
        """
        while not self.is_at_end():
            # Beginning of the next lexeme
            self.start = self.current
            self.token_line = self.line
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        logger.debug("Scanned %d tokens over %d lines", len(self.tokens), self.line)
        return self.tokens


def tokenize(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """
    Convenience function to tokenize Lox source.

    Args:
        source: Source text
        reporter: Optional diagnostic sink

    Returns:
        List of tokens
    """
    scanner = Scanner(source, reporter)
    return scanner.scan_tokens()
