from __future__ import annotations

"""
Lightweight indexer for Monkey source files without evaluating code.

We scan the token stream for top-level `let` bindings and run the core parser
once to find the first syntax error. The scan is tolerant: it works on
partial buffers and never raises, so it can run on every keystroke.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from monkey.errors import ParseError
from monkey.reader.lexer import tokenize
from monkey.reader.parser import parse
from monkey.reader.token import KEYWORDS, Token, TokenKind


KEYWORD_DOCS: Dict[str, str] = {
    "let": "let <name> = <expression>; binds a value in the current scope",
    "fn": "fn(<params>) { <body> } creates a function that closes over its defining scope",
    "if": "if (<condition>) { ... } else { ... } evaluates to the chosen branch, or null",
    "else": "else { ... } alternative branch of an if expression",
    "return": "return <expression>; leaves the enclosing function with a value",
    "true": "boolean literal",
    "false": "boolean literal",
}


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class SyntaxProblem:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    errors: List[SyntaxProblem] = field(default_factory=list)
    brace_balance: int = 0
    paren_balance: int = 0
    illegal: List[Token] = field(default_factory=list)


def _end_position(text: str) -> Tuple[int, int]:
    # Return (line, col) of the end of text, 0-based
    line = text.count("\n")
    last_nl = text.rfind("\n")
    col = len(text) if last_nl == -1 else len(text) - last_nl - 1
    return line, col


def _scan_tokens(tokens: List[Token], idx: DocumentIndex) -> None:
    depth = 0
    for i, tok in enumerate(tokens):
        if tok.kind is TokenKind.LBRACE:
            depth += 1
            idx.brace_balance += 1
        elif tok.kind is TokenKind.RBRACE:
            depth -= 1
            idx.brace_balance -= 1
        elif tok.kind is TokenKind.LPAREN:
            idx.paren_balance += 1
        elif tok.kind is TokenKind.RPAREN:
            idx.paren_balance -= 1
        elif tok.kind is TokenKind.ILLEGAL:
            idx.illegal.append(tok)
        elif tok.kind is TokenKind.LET and depth == 0:
            # let <ident> = <value>
            if i + 2 < len(tokens) and tokens[i + 1].kind is TokenKind.IDENT \
                    and tokens[i + 2].kind is TokenKind.ASSIGN:
                name_tok = tokens[i + 1]
                is_fn = i + 3 < len(tokens) and tokens[i + 3].kind is TokenKind.FUNCTION
                # first definition wins, matching the order a reader sees
                idx.symbols.setdefault(
                    name_tok.literal,
                    SymbolDef(name_tok.literal, "function" if is_fn else "var",
                              name_tok.line, name_tok.column),
                )


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    _scan_tokens(list(tokenize(text)), idx)

    try:
        parse(text)
    except ParseError as e:
        pos = e.position
        line, col = pos if pos is not None else _end_position(text)
        idx.errors.append(SyntaxProblem(str(e), line, col))
    return idx


def word_at(text: str, line: int, character: int) -> Optional[str]:
    """Return the identifier-like word under (line, character), if any."""
    lines = text.splitlines()
    if line >= len(lines):
        return None
    row = lines[line]
    start = min(character, len(row))
    while start > 0 and row[start - 1].isalpha():
        start -= 1
    end = character
    while end < len(row) and row[end].isalpha():
        end += 1
    word = row[start:end]
    return word or None


def describe(word: str, idx: DocumentIndex) -> Optional[str]:
    """Hover text for a keyword or an indexed top-level binding."""
    if word in KEYWORDS:
        return f"{word}: {KEYWORD_DOCS[word]}"
    sdef = idx.symbols.get(word)
    if sdef is not None:
        return f"{word}: {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return None
