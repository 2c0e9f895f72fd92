"""
Token definitions for the Rust declaration lexer.

This module contains the TokenType enum, Token dataclass, and
constant mappings for keywords and punctuation.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Enumeration of all token types recognized by the Rust lexer."""

    # Keywords
    STRUCT = auto()
    ENUM = auto()
    CONST = auto()
    TYPE = auto()
    PUB = auto()
    WHERE = auto()
    FN = auto()
    DYN = auto()
    IMPL = auto()
    MUT = auto()
    TRUE = auto()
    FALSE = auto()

    # Punctuation
    HASH = auto()
    BANG = auto()
    AMPERSAND = auto()
    STAR = auto()
    MINUS = auto()
    PLUS = auto()
    EQ = auto()
    LT = auto()
    GT = auto()
    COLON = auto()
    COLON_COLON = auto()
    ARROW = auto()
    FAT_ARROW = auto()
    QUESTION = auto()
    PIPE = auto()
    OTHER = auto()

    # Delimiters
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    SEMICOLON = auto()
    COMMA = auto()
    DOT = auto()

    # Literals
    NUMBER = auto()
    STRING_LITERAL = auto()
    CHAR_LITERAL = auto()
    LIFETIME = auto()
    IDENTIFIER = auto()

    # Special
    DOC_COMMENT = auto()
    EOF = auto()


@dataclass
class Token:
    """Represents a single token from the lexer."""
    type: TokenType
    value: str
    line: int
    column: int


# Keyword to TokenType mapping. Keywords the parser never looks at are
# lexed as plain identifiers.
KEYWORDS = {
    'struct': TokenType.STRUCT,
    'enum': TokenType.ENUM,
    'const': TokenType.CONST,
    'type': TokenType.TYPE,
    'pub': TokenType.PUB,
    'where': TokenType.WHERE,
    'fn': TokenType.FN,
    'dyn': TokenType.DYN,
    'impl': TokenType.IMPL,
    'mut': TokenType.MUT,
    'true': TokenType.TRUE,
    'false': TokenType.FALSE,
}

# Two-character punctuation
TWO_CHAR_OPS = {
    '::': TokenType.COLON_COLON,
    '->': TokenType.ARROW,
    '=>': TokenType.FAT_ARROW,
}

# Single-character punctuation and delimiters
SINGLE_CHAR_OPS = {
    '#': TokenType.HASH,
    '!': TokenType.BANG,
    '&': TokenType.AMPERSAND,
    '*': TokenType.STAR,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    '=': TokenType.EQ,
    '<': TokenType.LT,
    '>': TokenType.GT,
    ':': TokenType.COLON,
    '?': TokenType.QUESTION,
    '|': TokenType.PIPE,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    ';': TokenType.SEMICOLON,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
}
