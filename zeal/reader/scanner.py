"""
  zeal Scanner

- Turns raw source text into a finite list of Tokens ending in EOF.
- Indentation sensitive: a `:` or `->` whose body starts on a later line
  opens a block. The block's level is the column of the first token on the
  opener's line; the first line whose first token sits at or left of that
  column closes it. Structure is made explicit with EOL, BEGIN_BLOCK and
  END_BLOCK tokens so the parser never looks at columns for blocks.
- Identifiers are greedy runs of one character class, either alphanumeric
  (plus `_`) or operator symbols, looked up in the keyword/operator table.
"""

from __future__ import annotations

import logging
from typing import Optional

from zeal import config
from zeal.errors import ZealLexError
from zeal.reader.tokens import KEYWORDS, PUNCTUATION, Location, Token, TokenType

logger = logging.getLogger(__name__)

SYMBOL_CHARS = frozenset("-><+/%&|!=*")
WHITESPACE = frozenset(" \t\r")
QUOTES = frozenset("\"'")
COMMENT = "#"

INT32_MAX = 2**31 - 1

BLOCK_OPENERS = (TokenType.COLON, TokenType.THIN_ARROW)


def is_identifier_char(c: str) -> bool:
    return c.isalnum() or c == "_"


def is_symbol_char(c: str) -> bool:
    return c in SYMBOL_CHARS


def is_digit(c: str) -> bool:
    return "0" <= c <= "9"


class Scanner:
    def __init__(self, tab_width: int | None = None):
        self.tab_width = tab_width if tab_width is not None else config.get_tab_width()
        self._reset("")

    def _reset(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 0
        self.tokens: list[Token] = []
        # column of the opener line's first token while a block opener is pending
        self.open_block: Optional[int] = None
        self.block_levels: list[int] = []
        self.line_has_tokens = False
        self.line_col = 0

    # ----------------------
    # Cursor
    # ----------------------
    def location(self) -> Location:
        return Location(self.line, self.col, self.pos)

    def peek(self) -> Optional[str]:
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    def advance(self) -> Optional[str]:
        c = self.peek()
        if c is None:
            return None
        self.pos += 1
        if c == "\n":
            self.line += 1
            self.col = 0
        elif c == "\t":
            self.col += self.tab_width
        else:
            self.col += 1
        return c

    # ----------------------
    # Emission
    # ----------------------
    def emit(self, token_type: TokenType, location: Location, value=None) -> None:
        self.tokens.append(Token(token_type, value, location))
        if token_type in BLOCK_OPENERS:
            self.open_block = self.line_col

    def begin_line(self, location: Location) -> None:
        """Emit the structural tokens owed before a line's first token."""
        if self.open_block is not None:
            self.block_levels.append(self.open_block)
            self.open_block = None
            self.emit(TokenType.BEGIN_BLOCK, location)
        self.close_blocks(location)
        self.line_has_tokens = True
        self.line_col = location.col

    def close_blocks(self, location: Location) -> None:
        while self.block_levels and self.block_levels[-1] >= location.col:
            self.block_levels.pop()
            self.emit(TokenType.END_BLOCK, location)

    def end_line(self) -> None:
        if self.line_has_tokens and self.open_block is None:
            self.emit(TokenType.EOL, self.location())
        self.line_has_tokens = False

    def end_of_file(self) -> None:
        self.end_line()
        self.open_block = None
        location = self.location()
        while self.block_levels:
            self.block_levels.pop()
            self.emit(TokenType.END_BLOCK, location)
        self.emit(TokenType.EOF, location)

    # ----------------------
    # Token scanners
    # ----------------------
    def scan_string(self, start: Location) -> None:
        boundary = self.advance()
        chars = []
        while True:
            c = self.advance()
            if c is None:
                raise ZealLexError("Unterminated string literal", start)
            if c == boundary:
                break
            chars.append(c)
        self.emit(TokenType.STRING, start, "".join(chars))

    def scan_int(self, start: Location) -> None:
        digits = []
        while (c := self.peek()) is not None and is_digit(c):
            digits.append(self.advance())
        value = int("".join(digits))
        if value > INT32_MAX:
            raise ZealLexError(f"Invalid numeric literal {value}: out of 32-bit range", start)
        self.emit(TokenType.INT, start, value)

    def scan_identifier(self, start: Location) -> None:
        first = self.advance()
        same_class = is_symbol_char if is_symbol_char(first) else is_identifier_char
        chars = [first]
        while (c := self.peek()) is not None and same_class(c):
            chars.append(self.advance())
        name = "".join(chars)
        token_type = KEYWORDS.get(name)
        if token_type is None:
            self.emit(TokenType.IDENTIFIER, start, name)
        else:
            self.emit(token_type, start)

    def skip_comment(self) -> None:
        while (c := self.peek()) is not None and c != "\n":
            self.advance()

    def scan(self, source: str) -> list[Token]:
        self._reset(source)
        while (c := self.peek()) is not None:
            if c == "\n":
                self.end_line()
                self.advance()
                continue
            if c in WHITESPACE:
                self.advance()
                continue
            if c == COMMENT:
                self.skip_comment()
                continue

            start = self.location()
            if not self.line_has_tokens:
                self.begin_line(start)
            elif self.open_block is not None:
                # inline body on the opener's line: no block
                self.open_block = None

            if c in PUNCTUATION:
                self.advance()
                self.emit(PUNCTUATION[c], start)
            elif c in QUOTES:
                self.scan_string(start)
            elif is_digit(c):
                self.scan_int(start)
            elif is_identifier_char(c) or is_symbol_char(c):
                self.scan_identifier(start)
            else:
                raise ZealLexError(f"Unexpected character {c!r}", start)

        self.end_of_file()
        tokens, self.tokens = self.tokens, []
        logger.debug("scanned %d tokens", len(tokens))
        return tokens


def scan(text: str) -> list[Token]:
    """Convert source text into an ordered token list ending in EOF."""
    return Scanner().scan(text)
