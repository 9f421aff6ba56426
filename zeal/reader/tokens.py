"""Token kinds, source locations and the keyword/operator table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class TokenType(Enum):
    # Single characters
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    SEMICOLON = auto()
    COLON = auto()

    # Symbol-run operators
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    AND = auto()
    AND_AND = auto()
    OR = auto()
    OR_OR = auto()
    SLASH = auto()
    SLASH_SLASH = auto()
    MOD = auto()
    MOD_MOD = auto()
    MINUS = auto()
    PLUS = auto()
    STAR = auto()
    THIN_ARROW = auto()
    PIPELINE = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    INT = auto()

    # Keywords
    TRUE = auto()
    FALSE = auto()
    FN = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    PRINT = auto()
    FOR = auto()
    RETURN = auto()
    THEN = auto()

    # Structure
    EOL = auto()
    BEGIN_BLOCK = auto()
    END_BLOCK = auto()
    EOF = auto()


PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
}

# Whole identifier/symbol runs are looked up here; misses become identifiers.
KEYWORDS: dict[str, TokenType] = {
    "!": TokenType.BANG,
    "!=": TokenType.BANG_EQUAL,
    "=": TokenType.EQUAL,
    "==": TokenType.EQUAL_EQUAL,
    ">": TokenType.GREATER,
    ">=": TokenType.GREATER_EQUAL,
    "<": TokenType.LESS,
    "<=": TokenType.LESS_EQUAL,
    "&": TokenType.AND,
    "&&": TokenType.AND_AND,
    "|": TokenType.OR,
    "||": TokenType.OR_OR,
    "/": TokenType.SLASH,
    "//": TokenType.SLASH_SLASH,
    "%": TokenType.MOD,
    "%%": TokenType.MOD_MOD,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "->": TokenType.THIN_ARROW,
    "|>": TokenType.PIPELINE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "fn": TokenType.FN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "print": TokenType.PRINT,
    "for": TokenType.FOR,
    "return": TokenType.RETURN,
    "then": TokenType.THEN,
}

LEXEMES: dict[TokenType, str] = {
    **{t: s for s, t in PUNCTUATION.items()},
    **{t: s for s, t in KEYWORDS.items()},
}


@dataclass(frozen=True)
class Location:
    line: int
    col: int
    offset: int

    def __str__(self) -> str:
        return f"{self.line}:{self.col + 1}"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any = None
    location: Location = field(default=Location(1, 0, 0), compare=False)

    @property
    def lexeme(self) -> str:
        if self.type is TokenType.STRING:
            return repr(self.value)
        if self.value is not None:
            return str(self.value)
        return LEXEMES.get(self.type, self.type.name)

    def __str__(self) -> str:
        return self.lexeme
