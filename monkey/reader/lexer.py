"""
  Monkey Lexer

- Streaming, forward-only: each call to next_token() advances the cursor
- Never raises: characters outside the alphabet become ILLEGAL tokens and are
  rejected later by the parser
- End of input is signalled by None from next_token() (StopIteration when
  iterated), never by an ILLEGAL token
- Integer literals are kept as text; conversion happens in the parser
"""

from __future__ import annotations

from typing import Iterator, Optional, Callable

from monkey.reader.token import (
    Token,
    TokenKind,
    SINGLE_CHAR_TOKENS,
    DOUBLE_CHAR_TOKENS,
    lookup_ident,
)


def _is_letter(ch: str) -> bool:
    return ch.isalpha()


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Turns source text into a lazy sequence of Tokens."""

    __slots__ = ("source", "pos", "line", "column")

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 0
        self.column = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    # --- character cursor ---
    def _peek_char(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def _read_char(self) -> str:
        ch = self._peek_char()
        if not ch:
            return ch
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return ch

    def _skip_whitespace(self) -> None:
        while self._peek_char().isspace():
            self._read_char()

    def _read_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.pos
        while (ch := self._peek_char()) and predicate(ch):
            self._read_char()
        return self.source[start:self.pos]

    # --- tokens ---
    def next_token(self) -> Optional[Token]:
        """Return the next token, or None once the input is exhausted."""
        self._skip_whitespace()

        ch = self._peek_char()
        if not ch:
            return None

        line, column = self.line, self.column

        if ch in DOUBLE_CHAR_TOKENS:
            single, second, double = DOUBLE_CHAR_TOKENS[ch]
            self._read_char()
            if self._peek_char() == second:
                self._read_char()
                return Token(double, ch + second, line, column)
            return Token(single, ch, line, column)

        if ch in SINGLE_CHAR_TOKENS:
            self._read_char()
            return Token(SINGLE_CHAR_TOKENS[ch], ch, line, column)

        if _is_letter(ch):
            ident = self._read_while(_is_letter)
            return Token(lookup_ident(ident), ident, line, column)

        if _is_digit(ch):
            number = self._read_while(_is_digit)
            return Token(TokenKind.INT, number, line, column)

        self._read_char()
        return Token(TokenKind.ILLEGAL, ch, line, column)


def tokenize(source: str, include_eof: bool = False) -> Iterator[Token]:
    """Token generator over a fresh Lexer. Restart by calling again.

    With include_eof, a single EOF token positioned at the end of the input
    closes the stream.
    """
    lexer = Lexer(source)
    while (token := lexer.next_token()) is not None:
        yield token
    if include_eof:
        yield Token(TokenKind.EOF, "", lexer.line, lexer.column)
