from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers + literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "fn"
    LET = "let"
    TRUE = "true"
    FALSE = "false"
    IF = "if"
    ELSE = "else"
    RETURN = "return"

    def __repr__(self):
        return f"TokenKind.{self.name}"


KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

# Characters that form a token on their own. '=' and '!' are handled
# separately by the lexer because they may start a two-character operator.
SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

# first char -> (single kind, second char, double kind)
DOUBLE_CHAR_TOKENS: dict[str, tuple[TokenKind, str, TokenKind]] = {
    "=": (TokenKind.ASSIGN, "=", TokenKind.EQ),
    "!": (TokenKind.BANG, "=", TokenKind.NOT_EQ),
}


def lookup_ident(ident: str) -> TokenKind:
    """Classify an identifier as a keyword kind or a plain IDENT."""
    return KEYWORDS.get(ident, TokenKind.IDENT)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str
    # Source position, 0-based. Not part of token identity.
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __str__(self):
        return self.literal
