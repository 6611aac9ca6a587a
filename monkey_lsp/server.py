from __future__ import annotations

"""
A minimal pygls-based Language Server for Monkey.

Features:
- Text synchronization and document store
- Diagnostics: first syntax error, illegal characters, unbalanced braces/parens
- Hover: keywords and top-level let bindings
- Completion: keywords and top-level let bindings
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
)

from monkey import __version__
from monkey.config import get_log_level
from monkey.reader.token import KEYWORDS
from monkey_lsp.indexer import build_index, describe, word_at, DocumentIndex

logger = logging.getLogger(__name__)


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class MonkeyLanguageServer(LanguageServer):
    CMD_NAME = "monkey-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}


ls = MonkeyLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _update(uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # pygls applies incremental edits to its workspace copy
    text = ls.workspace.get_text_document(uri).source
    _update(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    logger.debug("indexed %s: %d symbol(s), %d error(s)", uri, len(idx.symbols), len(idx.errors))
    ls.publish_diagnostics(uri, collect_diagnostics(idx))


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def collect_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    for problem in idx.errors:
        diags.append(
            Diagnostic(
                range=_mk_range(problem.line, problem.col),
                message=problem.message,
                severity=DiagnosticSeverity.Error,
                source=MonkeyLanguageServer.CMD_NAME,
            )
        )

    for tok in idx.illegal:
        diags.append(
            Diagnostic(
                range=_mk_range(tok.line, tok.column, len(tok.literal)),
                message=f"illegal character {tok.literal!r}",
                severity=DiagnosticSeverity.Warning,
                source=MonkeyLanguageServer.CMD_NAME,
            )
        )

    if idx.brace_balance != 0 or idx.paren_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unbalanced braces or parentheses detected",
                severity=DiagnosticSeverity.Warning,
                source=MonkeyLanguageServer.CMD_NAME,
            )
        )
    return diags


# --- Hover ---
@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = word_at(state.text, params.position.line, params.position.character)
    if not word:
        return None

    contents = describe(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature("textDocument/completion")
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items: List[CompletionItem] = [
        CompletionItem(label=kw, kind=CompletionItemKind.Keyword) for kw in KEYWORDS
    ]
    if state:
        for name, sdef in state.index.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind))
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


def main() -> None:
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
