from __future__ import annotations

"""
A minimal pygls-based Language Server for zeal.

Features:
- Text synchronization and document store
- Diagnostics: scanner and parser errors
- Hover: builtin signatures and declared names
- Completion: keywords, builtins, declared names
- Document Symbols: declarations from the indexer

Note: We never evaluate the buffer. We build a static index per document.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from zeal_lsp.indexer import BUILTIN_SIGNATURES, KEYWORD_NAMES, DocumentIndex, build_index, word_at


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class ZealLanguageServer(LanguageServer):
    CMD_NAME = "zeal-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1")
        self.documents: Dict[str, DocumentState] = {}


ls = ZealLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    _update(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    _update(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    _publish_diagnostics(uri, idx)


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def _publish_diagnostics(uri: str, idx: DocumentIndex):
    diags: List[Diagnostic] = [
        Diagnostic(
            range=_mk_range(err.line, err.col),
            message=err.message,
            severity=DiagnosticSeverity.Error,
            source="zeal-ls",
        )
        for err in idx.errors
    ]
    ls.publish_diagnostics(uri, diags)


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = word_at(state.text, params.position.line, params.position.character)
    if not word:
        return None

    if word in BUILTIN_SIGNATURES:
        contents = BUILTIN_SIGNATURES[word]
    elif word in state.index.symbols:
        sdef = state.index.symbols[word]
        contents = f"{word}: {sdef.kind} (declared at {sdef.line + 1}:{sdef.col + 1})"
    else:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION)
def on_completion(params: CompletionParams) -> CompletionList:
    items: List[CompletionItem] = []
    for name in KEYWORD_NAMES:
        if name not in BUILTIN_SIGNATURES:
            items.append(CompletionItem(label=name, kind=CompletionItemKind.Keyword))
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))

    state = ls.documents.get(params.text_document.uri)
    if state:
        for name, sdef in state.index.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind))
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
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


def main():
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
