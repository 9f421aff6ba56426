from __future__ import annotations

"""
Static indexer for zeal documents.

Runs the real scanner and parser over a buffer (never the evaluator) and
records what the language server needs:
- declarations `name := ...`, as variables or functions (`name := fn ...`)
- the first lex or parse error, with its position, as a diagnostic

Positions are 0-based (line, col) as LSP expects.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from zeal.errors import ZealError, ZealLexError
from zeal.reader.parser import parse
from zeal.reader.scanner import scan
from zeal.reader.tokens import KEYWORDS, Token, TokenType

BUILTIN_SIGNATURES: Dict[str, str] = {
    "print": "print! value ... -> writes the values separated by spaces, returns the last",
}

KEYWORD_NAMES: List[str] = sorted(k for k in KEYWORDS if k.isalpha())


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class ErrorInfo:
    message: str
    line: int
    col: int
    kind: str  # "lex" | "syntax"


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    errors: List[ErrorInfo] = field(default_factory=list)


def _collect_declarations(tokens: List[Token], idx: DocumentIndex) -> None:
    for i, tok in enumerate(tokens[:-3]):
        if (
            tok.type is TokenType.IDENTIFIER
            and tokens[i + 1].type is TokenType.COLON
            and tokens[i + 2].type is TokenType.EQUAL
            and tok.value not in idx.symbols
        ):
            kind = "function" if tokens[i + 3].type is TokenType.FN else "var"
            loc = tok.location
            idx.symbols[tok.value] = SymbolDef(tok.value, kind, loc.line - 1, loc.col)


def _error_info(error: ZealError) -> ErrorInfo:
    kind = "lex" if isinstance(error, ZealLexError) else "syntax"
    loc = error.location
    line, col = (loc.line - 1, loc.col) if loc is not None else (0, 0)
    return ErrorInfo(error.message, line, col, kind)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    try:
        tokens = scan(text)
    except ZealError as e:
        idx.errors.append(_error_info(e))
        return idx

    _collect_declarations(tokens, idx)
    try:
        parse(tokens)
    except ZealError as e:
        idx.errors.append(_error_info(e))
    return idx


def word_at(text: str, line: int, character: int) -> Optional[str]:
    """Return the identifier-like word under a 0-based position."""
    lines = text.splitlines()
    if line >= len(lines):
        return None
    row = lines[line]
    start = character
    while start > 0 and (row[start - 1].isalnum() or row[start - 1] == "_"):
        start -= 1
    end = character
    while end < len(row) and (row[end].isalnum() or row[end] == "_"):
        end += 1
    return row[start:end] or None
